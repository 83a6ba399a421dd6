"""
Create Order Use Case

Public purchase path. The event aggregate validates and prices the seats, the repo
claims them atomically against the layout version that priced them. The sold-seat
check here only fails fast; the unique seat claim in the repo is what actually
prevents a double sale.
"""

from decimal import Decimal
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.db_setting import transient_retry
from src.platform.exception.exceptions import NotFoundError, SeatUnavailableError
from src.platform.logging.loguru_io import Logger
from src.service.tickit.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.tickit.app.interface.i_order_command_repo import IOrderCommandRepo
from src.service.tickit.domain.entity.order_entity import Order


class CreateOrderUseCase:
    def __init__(
        self, *, event_query_repo: IEventQueryRepo, order_command_repo: IOrderCommandRepo
    ) -> None:
        self.event_query_repo = event_query_repo
        self.order_command_repo = order_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        order_command_repo: IOrderCommandRepo = Depends(Provide[Container.order_command_repo]),
    ) -> Self:
        return cls(event_query_repo=event_query_repo, order_command_repo=order_command_repo)

    @transient_retry
    @Logger.io
    async def create_order(
        self,
        *,
        event_id: str,
        customer_name: str,
        customer_email: str,
        customer_phone: Optional[str],
        seat_ids: List[str],
        total_amount: Optional[Decimal] = None,
    ) -> Order:
        event = await self.event_query_repo.get_by_id(event_id)
        if not event:
            raise NotFoundError('Event not found')

        authoritative_amount = event.price_seats(seat_ids)

        taken = event.already_sold(seat_ids)
        if taken:
            raise SeatUnavailableError(taken)

        if total_amount is not None and total_amount != authoritative_amount:
            Logger.base.warning(
                f'💰 [ORDER] Client total {total_amount} != computed {authoritative_amount} '
                f'on event {event_id}, charging computed amount'
            )

        order = Order.create(
            event_id=event_id,
            customer_name=customer_name,
            customer_email=customer_email,
            customer_phone=customer_phone,
            seat_ids=seat_ids,
            total_amount=authoritative_amount,
            claimed_amount=total_amount,
        )
        return await self.order_command_repo.create_with_seat_claims(
            order, layout_version=event.layout_version
        )
