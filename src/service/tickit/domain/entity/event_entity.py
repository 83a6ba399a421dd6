"""
Event - the organizer-owned aggregate

[Invariants]
- total_capacity is the sum of tier quantities, never taken from the client
- platform_fee follows the capacity fee schedule
- sold == len(sold_seats) <= total_capacity
- reserved seating events sell only seats from their own layout
- the tier and seat layout is frozen once anything is sold
"""

from collections import Counter
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

import attrs
from uuid_utils import uuid7

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.tickit.domain.enum.event_status import EventStatus
from src.service.tickit.domain.value_object.platform_fee import platform_fee_for
from src.service.tickit.domain.value_object.seat_id import SeatId


@attrs.define
class TicketTier:
    tier_id: str
    name: str
    price: Decimal
    quantity: int
    color: Optional[str] = None
    # Presentation only, echoed back untouched
    bg_scale: Optional[int] = None
    bg_offset_x: Optional[int] = None
    bg_offset_y: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    src: Optional[str] = None


@attrs.define
class Seat:
    row: int
    col: int
    tier_id: str

    @property
    def seat_id(self) -> SeatId:
        return SeatId.reserved(row=self.row, col=self.col)


@attrs.define
class BuyerQuestion:
    id: str
    label: str
    required: bool = False


# Fields an organizer may patch after publishing
PATCHABLE_FIELDS = frozenset(
    {
        'title',
        'description',
        'category',
        'event_date',
        'start_time',
        'end_time',
        'is_physical',
        'venue_name',
        'address',
        'is_private',
        'age_restriction',
        'max_tickets_per_order',
        'cover_image_url',
    }
)
LAYOUT_FIELDS = frozenset({'tiers', 'seats', 'is_reserved_seating'})
_REQUIRED_TEXT_FIELDS = ('title', 'description', 'category', 'age_restriction')


def _require_text(field_name: str, value: Optional[str]) -> str:
    if value is None or not value.strip():
        raise DomainError(f'{field_name} is required')
    return value


@attrs.define
class Event:
    organizer_id: str
    title: str
    description: str
    category: str
    age_restriction: str
    event_date: date
    start_time: time
    end_time: time
    is_physical: bool
    is_private: bool
    is_reserved_seating: bool
    tiers: List[TicketTier]
    short_link: str
    total_capacity: int
    platform_fee: Decimal
    seats: List[Seat] = attrs.field(factory=list)
    venue_name: Optional[str] = None
    address: Optional[str] = None
    cover_image_url: Optional[str] = None
    seat_map_config: Any = None
    ticket_design: Any = None
    buyer_questions: List[BuyerQuestion] = attrs.field(factory=list)
    max_tickets_per_order: Optional[int] = None
    status: EventStatus = EventStatus.PUBLISHED
    sold_seats: List[str] = attrs.field(factory=list)
    sold: int = 0
    views: int = 0
    layout_version: int = 0
    deleted: bool = False
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        organizer_id: str,
        short_link: str,
        title: str,
        description: str,
        category: str,
        age_restriction: str,
        event_date: date,
        start_time: time,
        end_time: time,
        is_physical: bool,
        is_private: bool,
        is_reserved_seating: bool,
        tiers: List[TicketTier],
        seats: Optional[List[Seat]] = None,
        venue_name: Optional[str] = None,
        address: Optional[str] = None,
        cover_image_url: Optional[str] = None,
        seat_map_config: Any = None,
        ticket_design: Any = None,
        buyer_questions: Optional[List[BuyerQuestion]] = None,
        max_tickets_per_order: Optional[int] = None,
    ) -> 'Event':
        for field_name, value in zip(
            _REQUIRED_TEXT_FIELDS, (title, description, category, age_restriction), strict=True
        ):
            _require_text(field_name, value)
        cls._validate_max_tickets_per_order(max_tickets_per_order)

        tiers = cls._resolve_tier_ids(tiers)
        seats = cls._validate_layout(
            tiers=tiers, seats=seats or [], is_reserved_seating=is_reserved_seating
        )
        total_capacity = sum(tier.quantity for tier in tiers)

        now = datetime.now(timezone.utc)
        return cls(
            id=str(uuid7()),
            organizer_id=organizer_id,
            title=title,
            description=description,
            category=category,
            age_restriction=age_restriction,
            event_date=event_date,
            start_time=start_time,
            end_time=end_time,
            is_physical=is_physical,
            is_private=is_private,
            is_reserved_seating=is_reserved_seating,
            tiers=tiers,
            seats=seats,
            venue_name=venue_name,
            address=address,
            cover_image_url=cover_image_url,
            seat_map_config=seat_map_config,
            ticket_design=ticket_design,
            buyer_questions=list(buyer_questions or []),
            max_tickets_per_order=max_tickets_per_order,
            short_link=short_link,
            total_capacity=total_capacity,
            platform_fee=platform_fee_for(total_capacity),
            status=EventStatus.PUBLISHED,
            created_at=now,
            updated_at=now,
        )

    # ------------------------------------------------------------------ layout

    @staticmethod
    def _resolve_tier_ids(tiers: List[TicketTier]) -> List[TicketTier]:
        if not tiers:
            raise DomainError('At least one ticket tier is required')

        resolved = []
        for position, tier in enumerate(tiers, start=1):
            _require_text('tier name', tier.name)
            if tier.price is None or tier.price < 0:
                raise DomainError(f'Tier "{tier.name}" price must be zero or more')
            if tier.quantity is None or tier.quantity < 1:
                raise DomainError(f'Tier "{tier.name}" quantity must be at least 1')
            tier_id = (tier.tier_id or '').strip() or f'tier-{position}'
            resolved.append(attrs.evolve(tier, tier_id=tier_id))

        duplicated = [tid for tid, count in Counter(t.tier_id for t in resolved).items() if count > 1]
        if duplicated:
            raise DomainError(f'Duplicate tier ids: {", ".join(duplicated)}')
        return resolved

    @staticmethod
    def _validate_layout(
        *, tiers: List[TicketTier], seats: List[Seat], is_reserved_seating: bool
    ) -> List[Seat]:
        if not is_reserved_seating:
            return []

        if not seats:
            raise DomainError('Seats are required for reserved seating events')

        tier_quantity = {tier.tier_id: tier.quantity for tier in tiers}
        for seat in seats:
            if seat.tier_id not in tier_quantity:
                raise DomainError(f'Seat {seat.row}_{seat.col} references unknown tier {seat.tier_id}')
            if seat.row < 0 or seat.col < 0:
                raise DomainError(f'Seat {seat.row}_{seat.col} has a negative position')

        duplicated = [
            str(seat_id)
            for seat_id, count in Counter(seat.seat_id for seat in seats).items()
            if count > 1
        ]
        if duplicated:
            raise DomainError(f'Duplicate seats in layout: {", ".join(duplicated)}')

        seats_per_tier = Counter(seat.tier_id for seat in seats)
        for tier_id, count in seats_per_tier.items():
            if count > tier_quantity[tier_id]:
                raise DomainError(
                    f'Tier {tier_id} has {count} seats but a quantity of {tier_quantity[tier_id]}'
                )
        return list(seats)

    @staticmethod
    def _validate_max_tickets_per_order(value: Optional[int]) -> None:
        if value is not None and value < 1:
            raise DomainError('maxTicketsPerOrder must be at least 1')

    # ------------------------------------------------------------------ lifecycle

    def is_owned_by(self, organizer_email: str) -> bool:
        return self.organizer_id == organizer_email

    @Logger.io
    def apply_patch(self, patch: Dict[str, Any]) -> 'Event':
        """Apply the non-null, non-blank fields of a partial update."""
        changes: Dict[str, Any] = {}
        for field_name, value in patch.items():
            if value is None or (isinstance(value, str) and not value.strip()):
                continue
            if field_name in PATCHABLE_FIELDS:
                changes[field_name] = value

        if 'max_tickets_per_order' in changes:
            self._validate_max_tickets_per_order(changes['max_tickets_per_order'])

        layout_changes = {
            key: value for key, value in patch.items() if key in LAYOUT_FIELDS and value is not None
        }
        if layout_changes:
            if self.sold > 0:
                raise DomainError('Tiers and seats cannot change after tickets have been sold')
            tiers = self._resolve_tier_ids(layout_changes.get('tiers', self.tiers))
            is_reserved_seating = layout_changes.get(
                'is_reserved_seating', self.is_reserved_seating
            )
            seats = self._validate_layout(
                tiers=tiers,
                seats=layout_changes.get('seats', self.seats),
                is_reserved_seating=is_reserved_seating,
            )
            total_capacity = sum(tier.quantity for tier in tiers)
            changes |= {
                'tiers': tiers,
                'seats': seats,
                'is_reserved_seating': is_reserved_seating,
                'total_capacity': total_capacity,
                'platform_fee': platform_fee_for(total_capacity),
            }

        if not changes:
            return self
        return attrs.evolve(self, **changes, updated_at=datetime.now(timezone.utc))

    # ------------------------------------------------------------------ purchase

    def tier_by_id(self, tier_id: str) -> Optional[TicketTier]:
        return next((tier for tier in self.tiers if tier.tier_id == tier_id), None)

    @Logger.io
    def price_seats(self, seat_ids: Iterable[str]) -> Decimal:
        """Validate requested seat identifiers against this event and total their price.

        Raises DomainError for malformed, duplicated, or out-of-layout seats.
        """
        requested = list(seat_ids)
        if not requested:
            raise DomainError('At least one seat is required')

        duplicated = [seat for seat, count in Counter(requested).items() if count > 1]
        if duplicated:
            raise DomainError(f'Duplicate seats in request: {", ".join(sorted(duplicated))}')

        if self.max_tickets_per_order is not None and len(requested) > self.max_tickets_per_order:
            raise DomainError(f'At most {self.max_tickets_per_order} tickets per order')

        layout = {str(seat.seat_id): seat.tier_id for seat in self.seats}
        total = Decimal('0')
        for raw in requested:
            seat_id = SeatId.parse(raw)
            if self.is_reserved_seating:
                if not seat_id.is_reserved or raw not in layout:
                    raise DomainError(f'Unknown seat: {raw}')
                tier = self.tier_by_id(layout[raw])
            else:
                if seat_id.is_reserved:
                    raise DomainError(f'Event has no reserved seating: {raw}')
                tier = self.tier_by_id(seat_id.tier_id or '')
                if tier is None:
                    raise DomainError(f'Unknown tier in seat: {raw}')
                if not 1 <= (seat_id.index or 0) <= tier.quantity:
                    raise DomainError(f'Seat index out of range for tier {tier.tier_id}: {raw}')
            if tier is None:
                raise DomainError(f'Unknown seat: {raw}')
            total += tier.price
        return total

    def already_sold(self, seat_ids: Iterable[str]) -> List[str]:
        sold = set(self.sold_seats)
        return sorted(seat for seat in seat_ids if seat in sold)
