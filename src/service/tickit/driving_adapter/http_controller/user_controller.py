from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.service.tickit.app.query.get_current_user_use_case import GetCurrentUserUseCase
from src.service.tickit.driving_adapter.http_controller.auth.jwt_auth import Principal
from src.service.tickit.driving_adapter.http_controller.auth.role_auth import require_principal
from src.service.tickit.driving_adapter.http_controller.schema.user_schema import UserMeResponse


router = APIRouter()


@router.get('/me', response_model=UserMeResponse)
@Logger.io
async def get_me(
    principal: Principal = Depends(require_principal),
    use_case: GetCurrentUserUseCase = Depends(GetCurrentUserUseCase.depends),
) -> UserMeResponse:
    user_entity = await use_case.get_current_user(principal.email)
    return UserMeResponse.from_entity(user_entity)
