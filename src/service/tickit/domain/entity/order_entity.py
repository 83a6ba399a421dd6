from datetime import datetime, timezone
from decimal import Decimal
import secrets
from typing import List, Optional

import attrs
from uuid_utils import uuid7

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.tickit.domain.enum.order_status import OrderStatus


QR_CODE_BYTES = 16  # 128 bits of entropy


def generate_qr_code() -> str:
    return secrets.token_urlsafe(QR_CODE_BYTES)


@attrs.define
class OrderTicket:
    seat_id: str
    qr_code: str = attrs.field(factory=generate_qr_code, repr=False)
    scanned: bool = False
    scanned_at: Optional[datetime] = None


@attrs.define
class Order:
    event_id: str
    customer_name: str
    customer_email: str
    seat_ids: List[str]
    total_amount: Decimal
    customer_phone: Optional[str] = None
    claimed_amount: Optional[Decimal] = None
    status: OrderStatus = OrderStatus.SUCCESS
    tickets: List[OrderTicket] = attrs.field(factory=list)
    id: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        event_id: str,
        customer_name: str,
        customer_email: str,
        customer_phone: Optional[str],
        seat_ids: List[str],
        total_amount: Decimal,
        claimed_amount: Optional[Decimal] = None,
    ) -> 'Order':
        """Issue a paid order with one single-use QR ticket per seat."""
        if not seat_ids:
            raise DomainError('At least one seat is required')
        if not customer_name or not customer_name.strip():
            raise DomainError('Customer name is required')
        if not customer_email or not customer_email.strip():
            raise DomainError('Customer email is required')

        return cls(
            id=str(uuid7()),
            event_id=event_id,
            customer_name=customer_name.strip(),
            customer_email=customer_email.strip().lower(),
            customer_phone=customer_phone,
            seat_ids=list(seat_ids),
            total_amount=total_amount,
            claimed_amount=claimed_amount,
            status=OrderStatus.SUCCESS,
            tickets=[OrderTicket(seat_id=seat_id) for seat_id in seat_ids],
            created_at=datetime.now(timezone.utc),
        )

    @property
    def short_id(self) -> str:
        return (self.id or '')[-6:].upper()

    @property
    def ticket_count(self) -> int:
        return len(self.seat_ids)
