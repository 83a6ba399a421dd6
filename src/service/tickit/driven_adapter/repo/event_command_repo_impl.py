from datetime import datetime, timezone
from typing import AsyncContextManager, Callable, Optional

import attrs
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.tickit.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.tickit.domain.entity.event_entity import Event
from src.service.tickit.driven_adapter.model.event_model import EventModel
from src.service.tickit.driven_adapter.repo.event_row_mapper import (
    entity_to_model,
    organizer_columns,
)


class EventCommandRepoImpl(IEventCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def create(self, event: Event) -> Optional[Event]:
        async with self.session_factory() as session:
            session.add(entity_to_model(event))
            try:
                await session.commit()
            except IntegrityError:
                await session.rollback()
                Logger.base.warning(f'🔁 [EVENT] Short link {event.short_link} already taken')
                return None
            return event

    @Logger.io
    async def update(self, event: Event, *, require_unsold: bool = False) -> Event:
        """Write organizer columns of a live event.

        With require_unsold the write only lands while sold == 0, and it bumps the layout
        version so purchases priced against the old layout fail their guard.
        """
        async with self.session_factory() as session:
            stmt = (
                update(EventModel)
                .where(EventModel.id == event.id, EventModel.deleted.is_(False))
                .values(**organizer_columns(event))
            )
            if require_unsold:
                stmt = stmt.where(EventModel.sold == 0).values(
                    layout_version=EventModel.layout_version + 1
                )
            result = await session.execute(stmt)

            if result.rowcount != 1:  # type: ignore[attr-defined]
                await session.rollback()
                deleted = await session.scalar(
                    select(EventModel.deleted).where(EventModel.id == event.id)
                )
                if deleted is None or deleted:
                    raise NotFoundError('Event not found')
                raise DomainError('Tiers and seats cannot change after tickets have been sold')

            await session.commit()
            if require_unsold:
                return attrs.evolve(event, layout_version=event.layout_version + 1)
            return event

    @Logger.io
    async def soft_delete(self, event_id: str) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(
                update(EventModel)
                .where(EventModel.id == event_id, EventModel.deleted.is_(False))
                .values(deleted=True, updated_at=datetime.now(timezone.utc))
            )
            await session.commit()
            return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def increment_views(self, event_id: str) -> None:
        async with self.session_factory() as session:
            await session.execute(
                update(EventModel)
                .where(EventModel.id == event_id)
                .values(views=EventModel.views + 1)
            )
            await session.commit()
