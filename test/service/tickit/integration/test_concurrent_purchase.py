"""
Concurrency on the real datastore

The HTTP client serialises requests, so the races are driven through the use cases
with real repositories and asyncio.gather on a shared session factory. Interleavings
that gather cannot pin down (load, competing write, commit) are replayed step by step.
"""

import asyncio
from datetime import date, time
from decimal import Decimal

import attrs
import pytest

from src.platform.database.db_setting import Database
from src.platform.exception.exceptions import (
    DomainError,
    NotFoundError,
    SeatUnavailableError,
    TicketAlreadyUsedError,
)
from src.service.tickit.app.command.create_order_use_case import CreateOrderUseCase
from src.service.tickit.app.command.scan_ticket_use_case import ScanTicketUseCase
from src.service.tickit.app.command.update_event_use_case import UpdateEventUseCase
from src.service.tickit.domain.entity.event_entity import Event, TicketTier
from src.service.tickit.domain.entity.order_entity import Order
from src.service.tickit.driven_adapter.repo.event_command_repo_impl import EventCommandRepoImpl
from src.service.tickit.driven_adapter.repo.event_query_repo_impl import EventQueryRepoImpl
from src.service.tickit.driven_adapter.repo.order_command_repo_impl import OrderCommandRepoImpl
from src.service.tickit.driven_adapter.repo.order_query_repo_impl import OrderQueryRepoImpl
from test.util_constant import BUYER_EMAIL, BUYER_NAME, BUYER_PHONE, ORGANIZER_EMAIL


async def persist_event(database: Database, *, quantity: int = 30) -> Event:
    event = Event.create(
        organizer_id=ORGANIZER_EMAIL,
        short_link='0badcafe',
        title='Jazz Night',
        description='Live jazz by the sea',
        category='music',
        age_restriction='18+',
        event_date=date(2026, 6, 1),
        start_time=time(19, 0),
        end_time=time(23, 0),
        is_physical=True,
        is_private=False,
        is_reserved_seating=False,
        tiers=[TicketTier(tier_id='std', name='Std', price=Decimal('10'), quantity=quantity)],
    )
    created = await EventCommandRepoImpl(session_factory=database.session).create(event)
    assert created is not None
    return created


def order_use_case(database: Database) -> CreateOrderUseCase:
    return CreateOrderUseCase(
        event_query_repo=EventQueryRepoImpl(session_factory=database.session),
        order_command_repo=OrderCommandRepoImpl(session_factory=database.session),
    )


async def buy(use_case: CreateOrderUseCase, event_id: str, seat_ids: list[str]):
    return await use_case.create_order(
        event_id=event_id,
        customer_name=BUYER_NAME,
        customer_email=BUYER_EMAIL,
        customer_phone=BUYER_PHONE,
        seat_ids=seat_ids,
        total_amount=Decimal('10') * len(seat_ids),
    )


@pytest.mark.integration
class TestConcurrentPurchase:
    async def test_same_seat_sells_exactly_once(self, database: Database):
        event = await persist_event(database)
        use_case = order_use_case(database)

        results = await asyncio.gather(
            buy(use_case, event.id, ['GA_std_1']),
            buy(use_case, event.id, ['GA_std_1']),
            return_exceptions=True,
        )

        failures = [result for result in results if isinstance(result, Exception)]
        assert len(failures) == 1
        assert isinstance(failures[0], SeatUnavailableError)
        assert failures[0].seat_ids == ['GA_std_1']

        stored = await EventQueryRepoImpl(session_factory=database.session).get_by_id(event.id)
        assert stored.sold == 1
        assert stored.sold_seats == ['GA_std_1']

    async def test_overlapping_orders_never_share_a_seat(self, database: Database):
        event = await persist_event(database)
        use_case = order_use_case(database)
        requests = [
            ['GA_std_1', 'GA_std_2'],
            ['GA_std_2', 'GA_std_3'],
            ['GA_std_3', 'GA_std_4'],
            ['GA_std_5'],
        ]

        results = await asyncio.gather(
            *(buy(use_case, event.id, seat_ids) for seat_ids in requests),
            return_exceptions=True,
        )

        unexpected = [
            result
            for result in results
            if isinstance(result, Exception) and not isinstance(result, SeatUnavailableError)
        ]
        assert unexpected == []
        sold = [
            seat
            for result in results
            if not isinstance(result, Exception)
            for seat in result.seat_ids
        ]
        assert len(sold) == len(set(sold))

        stored = await EventQueryRepoImpl(session_factory=database.session).get_by_id(event.id)
        assert stored.sold == len(sold)
        assert sorted(stored.sold_seats) == sorted(sold)

    async def test_orders_fill_capacity_exactly(self, database: Database):
        event = await persist_event(database, quantity=2)
        use_case = order_use_case(database)

        results = await asyncio.gather(
            *(buy(use_case, event.id, [f'GA_std_{index}']) for index in (1, 2)),
            return_exceptions=True,
        )

        assert not any(isinstance(result, Exception) for result in results)
        stored = await EventQueryRepoImpl(session_factory=database.session).get_by_id(event.id)
        assert stored.sold == stored.total_capacity == 2


@pytest.mark.integration
class TestConcurrentScan:
    async def test_same_ticket_admits_once(self, database: Database):
        event = await persist_event(database)
        order = await buy(order_use_case(database), event.id, ['GA_std_1'])
        scan = ScanTicketUseCase(
            order_command_repo=OrderCommandRepoImpl(session_factory=database.session),
            order_query_repo=OrderQueryRepoImpl(session_factory=database.session),
        )
        qr_code = order.tickets[0].qr_code

        results = await asyncio.gather(
            scan.scan_ticket(qr_code=qr_code),
            scan.scan_ticket(qr_code=qr_code),
            scan.scan_ticket(qr_code=qr_code),
            return_exceptions=True,
        )

        admitted = [result for result in results if not isinstance(result, Exception)]
        rejected = [result for result in results if isinstance(result, Exception)]
        assert len(admitted) == 1
        assert admitted[0].seat_id == 'GA_std_1'
        assert all(isinstance(result, TicketAlreadyUsedError) for result in rejected)


@pytest.mark.integration
class TestShortLinkUniqueness:
    async def test_duplicate_short_link_is_refused_by_the_store(self, database: Database):
        event = await persist_event(database)
        clash = attrs.evolve(event, id='0190c0de-0000-7000-8000-00000000abcd')

        created = await EventCommandRepoImpl(session_factory=database.session).create(clash)

        assert created is None


def stale_order(event: Event, seat_ids: list[str]) -> Order:
    return Order.create(
        event_id=event.id,
        customer_name=BUYER_NAME,
        customer_email=BUYER_EMAIL,
        customer_phone=BUYER_PHONE,
        seat_ids=seat_ids,
        total_amount=event.price_seats(seat_ids),
    )


@pytest.mark.integration
class TestInterleavedWrites:
    async def test_update_from_a_stale_copy_does_not_revive_a_deleted_event(
        self, database: Database
    ):
        event = await persist_event(database)
        query_repo = EventQueryRepoImpl(session_factory=database.session)
        command_repo = EventCommandRepoImpl(session_factory=database.session)
        stale = await query_repo.get_by_id(event.id)

        assert await command_repo.soft_delete(event.id) is True
        with pytest.raises(NotFoundError):
            await command_repo.update(stale.apply_patch({'title': 'Renamed'}))

        stored = await query_repo.get_by_id(event.id, include_deleted=True)
        assert stored.deleted is True
        assert stored.title == 'Jazz Night'
        assert await query_repo.get_by_id(event.id) is None

    async def test_soft_delete_runs_once(self, database: Database):
        event = await persist_event(database)
        command_repo = EventCommandRepoImpl(session_factory=database.session)

        assert await command_repo.soft_delete(event.id) is True
        assert await command_repo.soft_delete(event.id) is False

    async def test_purchase_priced_before_a_layout_change_is_refused(self, database: Database):
        event = await persist_event(database)
        query_repo = EventQueryRepoImpl(session_factory=database.session)
        stale = await query_repo.get_by_id(event.id)

        relaid = await UpdateEventUseCase(
            event_query_repo=query_repo,
            event_command_repo=EventCommandRepoImpl(session_factory=database.session),
        ).update_event(
            event_id=event.id,
            organizer_email=ORGANIZER_EMAIL,
            patch={
                'tiers': [TicketTier(tier_id='vip', name='VIP', price=Decimal('50'), quantity=2)]
            },
        )
        assert relaid.layout_version == stale.layout_version + 1

        with pytest.raises(SeatUnavailableError):
            await OrderCommandRepoImpl(session_factory=database.session).create_with_seat_claims(
                stale_order(stale, ['GA_std_7']), layout_version=stale.layout_version
            )

        stored = await query_repo.get_by_id(event.id)
        assert stored.sold == 0
        assert stored.sold_seats == []
        assert [tier.tier_id for tier in stored.tiers] == ['vip']
        with pytest.raises(DomainError):
            await buy(order_use_case(database), event.id, ['GA_std_7'])

    async def test_purchase_on_an_event_deleted_mid_flight_is_not_found(
        self, database: Database
    ):
        event = await persist_event(database)
        query_repo = EventQueryRepoImpl(session_factory=database.session)
        stale = await query_repo.get_by_id(event.id)

        await EventCommandRepoImpl(session_factory=database.session).soft_delete(event.id)

        with pytest.raises(NotFoundError):
            await OrderCommandRepoImpl(session_factory=database.session).create_with_seat_claims(
                stale_order(stale, ['GA_std_1']), layout_version=stale.layout_version
            )
        stored = await query_repo.get_by_id(event.id, include_deleted=True)
        assert stored.sold == 0
