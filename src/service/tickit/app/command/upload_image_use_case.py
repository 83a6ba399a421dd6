from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.tickit.app.interface.i_image_storage import IImageStorage


class UploadImageUseCase:
    def __init__(self, image_storage: IImageStorage) -> None:
        self.image_storage = image_storage

    @classmethod
    @inject
    def depends(
        cls,
        image_storage: IImageStorage = Depends(Provide[Container.image_storage]),
    ) -> Self:
        return cls(image_storage=image_storage)

    @Logger.io(truncate_content=True)
    async def upload_image(self, *, content: bytes, filename: Optional[str]) -> str:
        return await self.image_storage.save(content=content, original_filename=filename)
