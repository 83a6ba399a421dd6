"""Organizer dashboard statistics DTO."""

from datetime import datetime
from decimal import Decimal
from typing import List

import attrs

from src.service.tickit.domain.entity.order_entity import Order


DATE_FORMAT = '%d.%m.%Y, %H:%M'


@attrs.define(frozen=True)
class RecentOrder:
    short_id: str
    customer: str
    email: str
    type: str
    amount: Decimal
    date: str
    status: str

    @classmethod
    def from_order(cls, order: Order) -> 'RecentOrder':
        created_at = order.created_at or datetime.min
        return cls(
            short_id=order.short_id,
            customer=order.customer_name,
            email=order.customer_email,
            type=f'{order.ticket_count} bilet',
            amount=order.total_amount,
            date=created_at.strftime(DATE_FORMAT),
            status=order.status.value.lower(),
        )


@attrs.define(frozen=True)
class EventStatistics:
    revenue: Decimal
    sold: int
    total_capacity: int
    views: int
    conversion_rate: float
    recent_orders: List[RecentOrder] = attrs.field(factory=list)
