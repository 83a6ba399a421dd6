from abc import ABC, abstractmethod
from typing import Optional


class IImageStorage(ABC):
    @abstractmethod
    async def save(self, *, content: bytes, original_filename: Optional[str]) -> str:
        """Store the image and return its public URL path."""
        pass
