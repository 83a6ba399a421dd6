"""Conversions between the Event aggregate and its `event` row."""

from decimal import Decimal
from typing import Any, Dict, List, Optional

import attrs

from src.service.tickit.domain.entity.event_entity import BuyerQuestion, Event, Seat, TicketTier
from src.service.tickit.domain.enum.event_status import EventStatus
from src.service.tickit.driven_adapter.model.event_model import EventModel


def tier_to_row(tier: TicketTier) -> Dict[str, Any]:
    # Decimal is kept as text inside JSON so prices survive the round trip exactly
    return attrs.asdict(tier) | {'price': str(tier.price)}


def tier_from_row(row: Dict[str, Any]) -> TicketTier:
    return TicketTier(**(row | {'price': Decimal(str(row['price']))}))


def organizer_columns(event: Event) -> Dict[str, Any]:
    """Columns an organizer controls, written on create and update."""
    return {
        'title': event.title,
        'description': event.description,
        'category': event.category,
        'age_restriction': event.age_restriction,
        'event_date': event.event_date,
        'start_time': event.start_time,
        'end_time': event.end_time,
        'is_physical': event.is_physical,
        'venue_name': event.venue_name,
        'address': event.address,
        'is_private': event.is_private,
        'cover_image_url': event.cover_image_url,
        'is_reserved_seating': event.is_reserved_seating,
        'tiers': [tier_to_row(tier) for tier in event.tiers],
        'seats': [attrs.asdict(seat) for seat in event.seats],
        'buyer_questions': [attrs.asdict(question) for question in event.buyer_questions],
        'seat_map_config': event.seat_map_config,
        'ticket_design': event.ticket_design,
        'max_tickets_per_order': event.max_tickets_per_order,
        'total_capacity': event.total_capacity,
        'platform_fee': event.platform_fee,
        'updated_at': event.updated_at,
    }


def entity_to_model(event: Event) -> EventModel:
    return EventModel(
        id=event.id,
        organizer_id=event.organizer_id,
        short_link=event.short_link,
        status=event.status.value,
        sold=event.sold,
        views=event.views,
        layout_version=event.layout_version,
        deleted=event.deleted,
        created_at=event.created_at,
        **organizer_columns(event),
    )


def model_to_entity(model: EventModel, sold_seats: Optional[List[str]] = None) -> Event:
    return Event(
        id=model.id,
        organizer_id=model.organizer_id,
        title=model.title,
        description=model.description,
        category=model.category,
        age_restriction=model.age_restriction,
        event_date=model.event_date,
        start_time=model.start_time,
        end_time=model.end_time,
        is_physical=model.is_physical,
        venue_name=model.venue_name,
        address=model.address,
        is_private=model.is_private,
        cover_image_url=model.cover_image_url,
        is_reserved_seating=model.is_reserved_seating,
        tiers=[tier_from_row(row) for row in model.tiers],
        seats=[Seat(**row) for row in model.seats or []],
        buyer_questions=[BuyerQuestion(**row) for row in model.buyer_questions or []],
        seat_map_config=model.seat_map_config,
        ticket_design=model.ticket_design,
        max_tickets_per_order=model.max_tickets_per_order,
        total_capacity=model.total_capacity,
        platform_fee=Decimal(str(model.platform_fee)),
        short_link=model.short_link,
        status=EventStatus(model.status),
        sold_seats=list(sold_seats or []),
        sold=model.sold,
        views=model.views,
        layout_version=model.layout_version,
        deleted=model.deleted,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )
