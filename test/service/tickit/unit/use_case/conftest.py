from datetime import date, time
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.service.tickit.app.interface import (
    IEventCommandRepo,
    IEventQueryRepo,
    IImageStorage,
    IOrderCommandRepo,
    IOrderQueryRepo,
    IPasswordHasher,
    IUserCommandRepo,
    IUserQueryRepo,
)
from src.service.tickit.domain.entity.event_entity import Event, TicketTier
from test.util_constant import ORGANIZER_EMAIL


@pytest.fixture
def user_command_repo() -> AsyncMock:
    return AsyncMock(spec=IUserCommandRepo)


@pytest.fixture
def user_query_repo() -> AsyncMock:
    return AsyncMock(spec=IUserQueryRepo)


@pytest.fixture
def event_command_repo() -> AsyncMock:
    return AsyncMock(spec=IEventCommandRepo)


@pytest.fixture
def event_query_repo() -> AsyncMock:
    return AsyncMock(spec=IEventQueryRepo)


@pytest.fixture
def order_command_repo() -> AsyncMock:
    return AsyncMock(spec=IOrderCommandRepo)


@pytest.fixture
def order_query_repo() -> AsyncMock:
    return AsyncMock(spec=IOrderQueryRepo)


@pytest.fixture
def image_storage() -> AsyncMock:
    return AsyncMock(spec=IImageStorage)


@pytest.fixture
def password_hasher() -> MagicMock:
    hasher = MagicMock(spec=IPasswordHasher)
    hasher.hash_password.return_value = 'hashed'
    hasher.verify_password.return_value = True
    return hasher


@pytest.fixture
def published_event() -> Event:
    return Event.create(
        organizer_id=ORGANIZER_EMAIL,
        short_link='abcd1234',
        title='Jazz Night',
        description='Live jazz',
        category='music',
        age_restriction='18+',
        event_date=date(2026, 6, 1),
        start_time=time(19, 0),
        end_time=time(23, 0),
        is_physical=True,
        is_private=False,
        is_reserved_seating=False,
        tiers=[TicketTier(tier_id='std', name='Std', price=Decimal('10'), quantity=30)],
    )
