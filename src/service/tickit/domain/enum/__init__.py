"""Tickit Domain Enums"""

from src.service.tickit.domain.enum.event_status import EventStatus
from src.service.tickit.domain.enum.order_status import OrderStatus

__all__ = ['EventStatus', 'OrderStatus']
