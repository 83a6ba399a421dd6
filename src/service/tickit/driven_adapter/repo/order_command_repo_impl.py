"""
Order writes

A purchase is one transaction:
1. insert a seat_claim row per seat (unique on event_id + seat_id)
2. insert the order and its tickets
3. bump event.sold, guarded by: not deleted, layout version unchanged since pricing,
   sold + n <= total_capacity
A unique violation in step 1 or a missed guard in step 3 rolls everything back.
"""

from datetime import datetime, timezone
from typing import AsyncContextManager, Callable, List, NoReturn

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import NotFoundError, SeatUnavailableError
from src.platform.logging.loguru_io import Logger
from src.service.tickit.app.interface.i_order_command_repo import IOrderCommandRepo
from src.service.tickit.domain.entity.order_entity import Order
from src.service.tickit.driven_adapter.model.event_model import EventModel
from src.service.tickit.driven_adapter.model.order_model import OrderModel, OrderTicketModel
from src.service.tickit.driven_adapter.model.seat_claim_model import SeatClaimModel


class OrderCommandRepoImpl(IOrderCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def create_with_seat_claims(self, order: Order, *, layout_version: int) -> Order:
        async with self.session_factory() as session:
            session.add_all(
                [
                    SeatClaimModel(event_id=order.event_id, seat_id=seat_id, order_id=order.id)
                    for seat_id in order.seat_ids
                ]
            )
            try:
                await session.flush()
            except IntegrityError:
                await session.rollback()
                taken = await self._claimed(session, order.event_id, order.seat_ids)
                Logger.base.warning(f'🚫 [ORDER] Seats already claimed on {order.event_id}: {taken}')
                raise SeatUnavailableError(taken or order.seat_ids)

            session.add(self._entity_to_model(order))

            seat_count = len(order.seat_ids)
            result = await session.execute(
                update(EventModel)
                .where(
                    EventModel.id == order.event_id,
                    EventModel.deleted.is_(False),
                    EventModel.layout_version == layout_version,
                    EventModel.sold + seat_count <= EventModel.total_capacity,
                )
                .values(sold=EventModel.sold + seat_count, updated_at=datetime.now(timezone.utc))
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:  # type: ignore[attr-defined]
                await session.rollback()
                await self._raise_guard_failure(session, order, layout_version)

            await session.commit()
            Logger.base.info(
                f'🎟️  [ORDER] {order.id} claimed {seat_count} seats on event {order.event_id}'
            )
            return order

    @Logger.io
    async def mark_ticket_scanned(self, qr_code: str) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(
                update(OrderTicketModel)
                .where(OrderTicketModel.qr_code == qr_code, OrderTicketModel.scanned.is_(False))
                .values(scanned=True, scanned_at=datetime.now(timezone.utc))
                .execution_options(synchronize_session=False)
            )
            await session.commit()
            return result.rowcount == 1  # type: ignore[attr-defined]

    async def _raise_guard_failure(
        self, session: AsyncSession, order: Order, layout_version: int
    ) -> NoReturn:
        row = (
            await session.execute(
                select(EventModel.deleted, EventModel.layout_version).where(
                    EventModel.id == order.event_id
                )
            )
        ).one_or_none()
        if row is None or row.deleted:
            Logger.base.warning(f'🚫 [ORDER] Event {order.event_id} deleted before the claim')
            raise NotFoundError('Event not found')
        if row.layout_version != layout_version:
            Logger.base.warning(f'🚫 [ORDER] Layout of {order.event_id} changed before the claim')
        else:
            Logger.base.warning(f'🚫 [ORDER] Capacity exhausted on {order.event_id}')
        raise SeatUnavailableError(order.seat_ids)

    async def _claimed(self, session: AsyncSession, event_id: str, seat_ids: List[str]) -> List[str]:
        result = await session.execute(
            select(SeatClaimModel.seat_id).where(
                SeatClaimModel.event_id == event_id, SeatClaimModel.seat_id.in_(seat_ids)
            )
        )
        return list(result.scalars().all())

    def _entity_to_model(self, order: Order) -> OrderModel:
        return OrderModel(
            id=order.id,
            event_id=order.event_id,
            customer_name=order.customer_name,
            customer_email=order.customer_email,
            customer_phone=order.customer_phone,
            seat_ids=list(order.seat_ids),
            total_amount=order.total_amount,
            claimed_amount=order.claimed_amount,
            status=order.status.value,
            created_at=order.created_at,
            tickets=[
                OrderTicketModel(
                    seat_id=ticket.seat_id,
                    qr_code=ticket.qr_code,
                    scanned=ticket.scanned,
                    scanned_at=ticket.scanned_at,
                )
                for ticket in order.tickets
            ],
        )
