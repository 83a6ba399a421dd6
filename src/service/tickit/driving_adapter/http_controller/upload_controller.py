from fastapi import APIRouter, Depends, File, UploadFile

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.service.tickit.app.command.upload_image_use_case import UploadImageUseCase
from src.service.tickit.driving_adapter.http_controller.auth.jwt_auth import Principal
from src.service.tickit.driving_adapter.http_controller.auth.role_auth import require_principal
from src.service.tickit.driving_adapter.http_controller.schema.upload_schema import UploadResponse


router = APIRouter()


@router.post('/image', response_model=UploadResponse)
@Logger.io(truncate_content=True)
async def upload_image(
    file: UploadFile = File(...),
    principal: Principal = Depends(require_principal),
    use_case: UploadImageUseCase = Depends(UploadImageUseCase.depends),
) -> UploadResponse:
    # At most one byte past the limit is read; storage rejects anything that long
    content = await file.read(settings.MAX_UPLOAD_BYTES + 1)
    url = await use_case.upload_image(content=content, filename=file.filename)
    return UploadResponse(url=url)
