from decimal import Decimal
from typing import AsyncContextManager, Callable, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.tickit.app.interface.i_order_query_repo import IOrderQueryRepo
from src.service.tickit.domain.entity.order_entity import Order, OrderTicket
from src.service.tickit.domain.enum.order_status import OrderStatus
from src.service.tickit.driven_adapter.model.order_model import OrderModel, OrderTicketModel


class OrderQueryRepoImpl(IOrderQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def get_ticket_by_qr_code(self, qr_code: str) -> Optional[OrderTicket]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(OrderTicketModel).where(OrderTicketModel.qr_code == qr_code)
            )
            ticket_model = result.scalar_one_or_none()
            if not ticket_model:
                return None
            return self._ticket_model_to_entity(ticket_model)

    @Logger.io
    async def sum_total_amount(self, *, event_id: str, status: OrderStatus) -> Decimal:
        async with self.session_factory() as session:
            result = await session.execute(
                select(func.coalesce(func.sum(OrderModel.total_amount), 0)).where(
                    OrderModel.event_id == event_id, OrderModel.status == status.value
                )
            )
            return Decimal(str(result.scalar_one()))

    @Logger.io
    async def list_recent(self, *, event_id: str, status: OrderStatus, limit: int) -> List[Order]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(OrderModel)
                .where(OrderModel.event_id == event_id, OrderModel.status == status.value)
                .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
                .limit(limit)
            )
            return [self._model_to_entity(model) for model in result.scalars().all()]

    def _ticket_model_to_entity(self, ticket_model: OrderTicketModel) -> OrderTicket:
        return OrderTicket(
            seat_id=ticket_model.seat_id,
            qr_code=ticket_model.qr_code,
            scanned=ticket_model.scanned,
            scanned_at=ticket_model.scanned_at,
        )

    def _model_to_entity(self, model: OrderModel) -> Order:
        return Order(
            id=model.id,
            event_id=model.event_id,
            customer_name=model.customer_name,
            customer_email=model.customer_email,
            customer_phone=model.customer_phone,
            seat_ids=list(model.seat_ids),
            total_amount=Decimal(str(model.total_amount)),
            claimed_amount=(
                Decimal(str(model.claimed_amount)) if model.claimed_amount is not None else None
            ),
            status=OrderStatus(model.status),
            tickets=[self._ticket_model_to_entity(ticket) for ticket in model.tickets],
            created_at=model.created_at,
        )
