from collections import defaultdict
from typing import AsyncContextManager, Callable, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.tickit.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.tickit.domain.entity.event_entity import Event
from src.service.tickit.driven_adapter.model.event_model import EventModel
from src.service.tickit.driven_adapter.model.seat_claim_model import SeatClaimModel
from src.service.tickit.driven_adapter.repo.event_row_mapper import model_to_entity


class EventQueryRepoImpl(IEventQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def get_by_id(self, event_id: str, *, include_deleted: bool = False) -> Optional[Event]:
        async with self.session_factory() as session:
            stmt = select(EventModel).where(EventModel.id == event_id)
            if not include_deleted:
                stmt = stmt.where(EventModel.deleted.is_(False))
            result = await session.execute(stmt)
            event_model = result.scalar_one_or_none()
            if not event_model:
                return None

            sold_seats = await self._sold_seats(session, [event_model.id])
            return model_to_entity(event_model, sold_seats.get(event_model.id))

    @Logger.io
    async def get_by_short_link(self, short_link: str) -> Optional[Event]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(EventModel).where(
                    EventModel.short_link == short_link, EventModel.deleted.is_(False)
                )
            )
            event_model = result.scalar_one_or_none()
            if not event_model:
                return None

            sold_seats = await self._sold_seats(session, [event_model.id])
            return model_to_entity(event_model, sold_seats.get(event_model.id))

    @Logger.io
    async def list_by_organizer(self, organizer_id: str) -> List[Event]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(EventModel)
                .where(EventModel.organizer_id == organizer_id, EventModel.deleted.is_(False))
                .order_by(EventModel.created_at.desc(), EventModel.id.desc())
            )
            event_models = list(result.scalars().all())
            sold_seats = await self._sold_seats(session, [model.id for model in event_models])
            return [model_to_entity(model, sold_seats.get(model.id)) for model in event_models]

    @Logger.io
    async def exists_by_short_link(self, short_link: str) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(
                select(EventModel.id).where(EventModel.short_link == short_link)
            )
            return result.scalar_one_or_none() is not None

    async def _sold_seats(self, session: AsyncSession, event_ids: List[str]) -> Dict[str, List[str]]:
        if not event_ids:
            return {}
        result = await session.execute(
            select(SeatClaimModel.event_id, SeatClaimModel.seat_id)
            .where(SeatClaimModel.event_id.in_(event_ids))
            .order_by(SeatClaimModel.id)
        )
        sold_seats: Dict[str, List[str]] = defaultdict(list)
        for event_id, seat_id in result.all():
            sold_seats[event_id].append(seat_id)
        return sold_seats
