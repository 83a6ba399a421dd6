"""Tickit Domain Value Objects"""

from src.service.tickit.domain.value_object.phone_number import normalize_phone
from src.service.tickit.domain.value_object.platform_fee import platform_fee_for
from src.service.tickit.domain.value_object.seat_id import SeatId, SeatKind

__all__ = ['SeatId', 'SeatKind', 'normalize_phone', 'platform_fee_for']
