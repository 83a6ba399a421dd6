from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.db_setting import transient_retry
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.tickit.app.dto.event_statistics import EventStatistics, RecentOrder
from src.service.tickit.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.tickit.app.interface.i_order_query_repo import IOrderQueryRepo
from src.service.tickit.domain.enum.order_status import OrderStatus


RECENT_ORDER_LIMIT = 5


def conversion_rate(sold: int, views: int) -> float:
    if views <= 0:
        return 0.0
    return round(sold / views * 100, 1)


class GetEventStatisticsUseCase:
    def __init__(
        self, *, event_query_repo: IEventQueryRepo, order_query_repo: IOrderQueryRepo
    ) -> None:
        self.event_query_repo = event_query_repo
        self.order_query_repo = order_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        order_query_repo: IOrderQueryRepo = Depends(Provide[Container.order_query_repo]),
    ) -> Self:
        return cls(event_query_repo=event_query_repo, order_query_repo=order_query_repo)

    @transient_retry
    @Logger.io
    async def get_statistics(self, *, event_id: str, organizer_email: str) -> EventStatistics:
        event = await self.event_query_repo.get_by_id(event_id)
        if not event:
            raise NotFoundError('Event not found')
        if not event.is_owned_by(organizer_email):
            raise ForbiddenError('You do not own this event')

        revenue = await self.order_query_repo.sum_total_amount(
            event_id=event_id, status=OrderStatus.SUCCESS
        )
        recent_orders = await self.order_query_repo.list_recent(
            event_id=event_id, status=OrderStatus.SUCCESS, limit=RECENT_ORDER_LIMIT
        )

        return EventStatistics(
            revenue=revenue,
            sold=event.sold,
            total_capacity=event.total_capacity,
            views=event.views,
            conversion_rate=conversion_rate(event.sold, event.views),
            recent_orders=[RecentOrder.from_order(order) for order in recent_orders],
        )
