from pathlib import Path
import re
from typing import Optional
import uuid

import anyio

from src.platform.constant.route_constant import UPLOADS_MOUNT
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.tickit.app.interface.i_image_storage import IImageStorage


DEFAULT_EXTENSION = 'jpg'
_EXTENSION_PATTERN = re.compile(r'^[A-Za-z0-9]{1,5}$')


class LocalImageStorage(IImageStorage):
    """Writes uploads under a local directory that the app also serves at /uploads."""

    def __init__(self, upload_dir: str, max_bytes: int) -> None:
        self.upload_dir = Path(upload_dir)
        self.max_bytes = max_bytes

    @Logger.io(truncate_content=True)
    async def save(self, *, content: bytes, original_filename: Optional[str]) -> str:
        if not content:
            raise DomainError('File is empty')
        if len(content) > self.max_bytes:
            raise DomainError(f'File exceeds the {self.max_bytes} byte limit')

        filename = f'{uuid.uuid4()}.{self._extension_of(original_filename)}'
        directory = anyio.Path(self.upload_dir)
        await directory.mkdir(parents=True, exist_ok=True)
        await (directory / filename).write_bytes(content)

        Logger.base.info(f'🖼️  [UPLOAD] Stored {filename} ({len(content)} bytes)')
        return f'{UPLOADS_MOUNT}/{filename}'

    @staticmethod
    def _extension_of(original_filename: Optional[str]) -> str:
        if not original_filename or '.' not in original_filename:
            return DEFAULT_EXTENSION
        extension = original_filename.rsplit('.', 1)[1]
        if not _EXTENSION_PATTERN.match(extension):
            return DEFAULT_EXTENSION
        return extension.lower()
