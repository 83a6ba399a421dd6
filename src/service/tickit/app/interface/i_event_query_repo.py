from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.tickit.domain.entity.event_entity import Event


class IEventQueryRepo(ABC):
    """Read side of events. Soft-deleted events are hidden unless asked for by id."""

    @abstractmethod
    async def get_by_id(self, event_id: str, *, include_deleted: bool = False) -> Optional[Event]:
        pass

    @abstractmethod
    async def get_by_short_link(self, short_link: str) -> Optional[Event]:
        pass

    @abstractmethod
    async def list_by_organizer(self, organizer_id: str) -> List[Event]:
        """Newest first."""
        pass

    @abstractmethod
    async def exists_by_short_link(self, short_link: str) -> bool:
        pass
