from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import ConfigDict, EmailStr, Field

from src.service.tickit.domain.entity.order_entity import Order, OrderTicket
from src.service.tickit.driving_adapter.http_controller.schema.camel_model import (
    CamelModel,
    NonBlankStr,
)


class CreateOrderRequest(CamelModel):
    event_id: NonBlankStr
    customer_name: NonBlankStr
    customer_email: EmailStr
    customer_phone: Optional[str] = None
    seat_ids: List[NonBlankStr] = Field(..., min_length=1)
    total_amount: Optional[Decimal] = Field(default=None, ge=0)

    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'eventId': '0190c0de-0000-7000-8000-000000000001',
                'customerName': 'Grace Hopper',
                'customerEmail': 'grace@example.com',
                'customerPhone': '+994501234567',
                'seatIds': ['GA_std_1', 'GA_std_2'],
                'totalAmount': 20,
            }
        }
    )


class OrderTicketResponse(CamelModel):
    seat_id: str
    qr_code: str
    scanned: bool

    @classmethod
    def from_entity(cls, ticket: OrderTicket) -> 'OrderTicketResponse':
        return cls(seat_id=ticket.seat_id, qr_code=ticket.qr_code, scanned=ticket.scanned)


class OrderResponse(CamelModel):
    id: str
    event_id: str
    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None
    seat_ids: List[str]
    total_amount: float
    status: str
    created_at: Optional[datetime] = None
    tickets: List[OrderTicketResponse]

    @classmethod
    def from_entity(cls, order: Order) -> 'OrderResponse':
        return cls(
            id=order.id or '',
            event_id=order.event_id,
            customer_name=order.customer_name,
            customer_email=order.customer_email,
            customer_phone=order.customer_phone,
            seat_ids=list(order.seat_ids),
            total_amount=float(order.total_amount),
            status=order.status.value,
            created_at=order.created_at,
            tickets=[OrderTicketResponse.from_entity(ticket) for ticket in order.tickets],
        )


class ScanResponse(CamelModel):
    success: bool
    message: str
