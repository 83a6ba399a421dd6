from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field

from src.service.tickit.app.dto.event_statistics import EventStatistics, RecentOrder
from src.service.tickit.domain.entity.event_entity import BuyerQuestion, Event, Seat, TicketTier
from src.service.tickit.driving_adapter.http_controller.schema.camel_model import (
    CamelModel,
    NonBlankStr,
)


class TicketTierFields(CamelModel):
    name: NonBlankStr
    quantity: int = Field(..., ge=1)
    color: Optional[str] = None
    bg_scale: Optional[int] = None
    bg_offset_x: Optional[int] = None
    bg_offset_y: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    src: Optional[str] = None


class TicketTierRequest(TicketTierFields):
    # Older clients send `id` instead of `tierId`
    id: Optional[str] = None
    tier_id: Optional[str] = None
    price: Decimal = Field(..., ge=0)

    def to_domain(self) -> TicketTier:
        return TicketTier(
            tier_id=(self.tier_id or self.id or '').strip(),
            name=self.name,
            price=self.price,
            quantity=self.quantity,
            color=self.color,
            bg_scale=self.bg_scale,
            bg_offset_x=self.bg_offset_x,
            bg_offset_y=self.bg_offset_y,
            width=self.width,
            height=self.height,
            src=self.src,
        )


class TicketTierResponse(TicketTierFields):
    tier_id: str
    price: float

    @classmethod
    def from_domain(cls, tier: TicketTier) -> 'TicketTierResponse':
        return cls(
            tier_id=tier.tier_id,
            name=tier.name,
            price=float(tier.price),
            quantity=tier.quantity,
            color=tier.color,
            bg_scale=tier.bg_scale,
            bg_offset_x=tier.bg_offset_x,
            bg_offset_y=tier.bg_offset_y,
            width=tier.width,
            height=tier.height,
            src=tier.src,
        )


class SeatSchema(CamelModel):
    row: int = Field(..., ge=0)
    col: int = Field(..., ge=0)
    tier_id: NonBlankStr

    def to_domain(self) -> Seat:
        return Seat(row=self.row, col=self.col, tier_id=self.tier_id)

    @classmethod
    def from_domain(cls, seat: Seat) -> 'SeatSchema':
        return cls(row=seat.row, col=seat.col, tier_id=seat.tier_id)


class BuyerQuestionSchema(CamelModel):
    id: str
    label: str
    required: bool = False

    def to_domain(self) -> BuyerQuestion:
        return BuyerQuestion(id=self.id, label=self.label, required=self.required)

    @classmethod
    def from_domain(cls, question: BuyerQuestion) -> 'BuyerQuestionSchema':
        return cls(id=question.id, label=question.label, required=question.required)


class CreateEventRequest(CamelModel):
    """totalCapacity and platformFee are derived server side; client values are ignored."""

    title: NonBlankStr
    description: NonBlankStr
    category: NonBlankStr
    age_restriction: NonBlankStr
    event_date: date
    start_time: time
    end_time: time
    is_physical: bool
    venue_name: Optional[str] = None
    address: Optional[str] = None
    is_private: bool
    cover_image_url: Optional[str] = None
    tiers: List[TicketTierRequest] = Field(..., min_length=1)
    is_reserved_seating: bool
    seats: Optional[List[SeatSchema]] = None
    seat_map_config: Any = None
    ticket_design: Any = None
    buyer_questions: Optional[List[BuyerQuestionSchema]] = None
    max_tickets_per_order: Optional[int] = Field(default=None, ge=1)

    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'title': 'Jazz Night',
                'description': 'Live jazz by the sea',
                'category': 'music',
                'ageRestriction': '18+',
                'eventDate': '2026-06-01',
                'startTime': '19:00',
                'endTime': '23:00',
                'isPhysical': True,
                'venueName': 'Seaside Hall',
                'address': 'Baku Boulevard 1',
                'isPrivate': False,
                'isReservedSeating': False,
                'tiers': [{'tierId': 'std', 'name': 'Standard', 'price': 10, 'quantity': 30}],
            }
        }
    )

    def to_domain_kwargs(self) -> Dict[str, Any]:
        return {
            'title': self.title,
            'description': self.description,
            'category': self.category,
            'age_restriction': self.age_restriction,
            'event_date': self.event_date,
            'start_time': self.start_time,
            'end_time': self.end_time,
            'is_physical': self.is_physical,
            'is_private': self.is_private,
            'is_reserved_seating': self.is_reserved_seating,
            'tiers': [tier.to_domain() for tier in self.tiers],
            'seats': [seat.to_domain() for seat in self.seats or []],
            'venue_name': self.venue_name,
            'address': self.address,
            'cover_image_url': self.cover_image_url,
            'seat_map_config': self.seat_map_config,
            'ticket_design': self.ticket_design,
            'buyer_questions': [question.to_domain() for question in self.buyer_questions or []],
            'max_tickets_per_order': self.max_tickets_per_order,
        }


class UpdateEventRequest(CamelModel):
    """Partial update. Null and blank fields are left unchanged."""

    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    event_date: Optional[date] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    is_physical: Optional[bool] = None
    venue_name: Optional[str] = None
    address: Optional[str] = None
    is_private: Optional[bool] = None
    age_restriction: Optional[str] = None
    max_tickets_per_order: Optional[int] = Field(default=None, ge=1)
    cover_image_url: Optional[str] = None
    tiers: Optional[List[TicketTierRequest]] = Field(default=None, min_length=1)
    seats: Optional[List[SeatSchema]] = None
    is_reserved_seating: Optional[bool] = None

    def to_patch(self) -> Dict[str, Any]:
        patch = self.model_dump(exclude={'tiers', 'seats'})
        if self.tiers is not None:
            patch['tiers'] = [tier.to_domain() for tier in self.tiers]
        if self.seats is not None:
            patch['seats'] = [seat.to_domain() for seat in self.seats]
        return patch


class EventResponse(CamelModel):
    id: str
    organizer_id: str
    title: str
    description: str
    category: str
    age_restriction: str
    event_date: date
    start_time: time
    end_time: time
    is_physical: bool
    venue_name: Optional[str] = None
    address: Optional[str] = None
    is_private: bool
    cover_image_url: Optional[str] = None
    tiers: List[TicketTierResponse]
    is_reserved_seating: bool
    seats: List[SeatSchema]
    seat_map_config: Any = None
    ticket_design: Any = None
    buyer_questions: List[BuyerQuestionSchema]
    max_tickets_per_order: Optional[int] = None
    total_capacity: int
    platform_fee: float
    short_link: str
    status: str
    sold_seats: List[str]
    sold: int
    views: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, event: Event) -> 'EventResponse':
        return cls(
            id=event.id or '',
            organizer_id=event.organizer_id,
            title=event.title,
            description=event.description,
            category=event.category,
            age_restriction=event.age_restriction,
            event_date=event.event_date,
            start_time=event.start_time,
            end_time=event.end_time,
            is_physical=event.is_physical,
            venue_name=event.venue_name,
            address=event.address,
            is_private=event.is_private,
            cover_image_url=event.cover_image_url,
            tiers=[TicketTierResponse.from_domain(tier) for tier in event.tiers],
            is_reserved_seating=event.is_reserved_seating,
            seats=[SeatSchema.from_domain(seat) for seat in event.seats],
            seat_map_config=event.seat_map_config,
            ticket_design=event.ticket_design,
            buyer_questions=[BuyerQuestionSchema.from_domain(q) for q in event.buyer_questions],
            max_tickets_per_order=event.max_tickets_per_order,
            total_capacity=event.total_capacity,
            platform_fee=float(event.platform_fee),
            short_link=event.short_link,
            status=event.status.value,
            sold_seats=list(event.sold_seats),
            sold=event.sold,
            views=event.views,
            created_at=event.created_at,
            updated_at=event.updated_at,
        )


class MessageResponse(CamelModel):
    message: str


class RecentOrderResponse(CamelModel):
    id: str
    short_id: str
    customer: str
    email: str
    type: str
    amount: float
    date: str
    status: str

    @classmethod
    def from_dto(cls, recent: RecentOrder) -> 'RecentOrderResponse':
        return cls(
            id=recent.short_id,
            short_id=recent.short_id,
            customer=recent.customer,
            email=recent.email,
            type=recent.type,
            amount=float(recent.amount),
            date=recent.date,
            status=recent.status,
        )


class EventStatisticsResponse(CamelModel):
    revenue: float
    sold: int
    total: int
    total_capacity: int
    views: int
    conversion_rate: float
    recent_orders: List[RecentOrderResponse]

    @classmethod
    def from_dto(cls, statistics: EventStatistics) -> 'EventStatisticsResponse':
        return cls(
            revenue=float(statistics.revenue),
            sold=statistics.sold,
            total=statistics.total_capacity,
            total_capacity=statistics.total_capacity,
            views=statistics.views,
            conversion_rate=statistics.conversion_rate,
            recent_orders=[RecentOrderResponse.from_dto(o) for o in statistics.recent_orders],
        )
