from abc import ABC, abstractmethod
from typing import Optional

from src.service.tickit.domain.entity.event_entity import Event


class IEventCommandRepo(ABC):
    @abstractmethod
    async def create(self, event: Event) -> Optional[Event]:
        """Insert the event. Returns None when its short link is already taken."""
        pass

    @abstractmethod
    async def update(self, event: Event, *, require_unsold: bool = False) -> Event:
        """Write organizer-editable fields, never the sold counters or the deleted flag.

        Raises NotFoundError if the event is gone or soft deleted. With require_unsold the
        write only lands while nothing has been sold and bumps the layout version.
        """
        pass

    @abstractmethod
    async def soft_delete(self, event_id: str) -> bool:
        """Mark a live event deleted. Returns False if it was already deleted."""
        pass

    @abstractmethod
    async def increment_views(self, event_id: str) -> None:
        pass
