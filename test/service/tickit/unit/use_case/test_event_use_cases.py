from datetime import date, time
from decimal import Decimal
import re
from unittest.mock import AsyncMock

import attrs
import pytest

from src.platform.exception.exceptions import (
    DomainError,
    ForbiddenError,
    NotFoundError,
    TransientError,
)
from src.service.tickit.app.command.create_event_use_case import CreateEventUseCase
from src.service.tickit.app.command.delete_event_use_case import DeleteEventUseCase
from src.service.tickit.app.command.update_event_use_case import UpdateEventUseCase
from src.service.tickit.app.query.get_public_event_use_case import GetPublicEventUseCase
from src.service.tickit.app.query.list_my_events_use_case import ListMyEventsUseCase
from src.service.tickit.domain.entity.event_entity import TicketTier
from test.util_constant import ANOTHER_ORGANIZER_EMAIL, ORGANIZER_EMAIL


EVENT_FIELDS = {
    'title': 'Jazz Night',
    'description': 'Live jazz',
    'category': 'music',
    'age_restriction': '18+',
    'event_date': date(2026, 6, 1),
    'start_time': time(19, 0),
    'end_time': time(23, 0),
    'is_physical': True,
    'is_private': False,
    'is_reserved_seating': False,
    'tiers': [TicketTier(tier_id='std', name='Std', price=Decimal('10'), quantity=30)],
}


@pytest.mark.unit
class TestCreateEvent:
    async def test_persists_event_with_server_derived_fields(self, event_command_repo):
        # Arrange
        event_command_repo.create.side_effect = lambda event: event
        use_case = CreateEventUseCase(event_command_repo=event_command_repo)

        # Act
        event = await use_case.create_event(organizer_email=ORGANIZER_EMAIL, **EVENT_FIELDS)

        # Assert
        assert event.organizer_id == ORGANIZER_EMAIL
        assert event.total_capacity == 30
        assert event.platform_fee == Decimal('5')
        assert re.fullmatch(r'[0-9a-f]{8}', event.short_link)

    async def test_short_link_collision_retries_with_new_link(self, event_command_repo):
        attempted_links = []

        async def create(event):
            attempted_links.append(event.short_link)
            return None if len(attempted_links) == 1 else event

        event_command_repo.create.side_effect = create
        use_case = CreateEventUseCase(event_command_repo=event_command_repo)

        event = await use_case.create_event(organizer_email=ORGANIZER_EMAIL, **EVENT_FIELDS)

        assert len(attempted_links) == 2
        assert event.short_link == attempted_links[1]

    async def test_gives_up_after_repeated_collisions(self, event_command_repo):
        event_command_repo.create.return_value = None
        use_case = CreateEventUseCase(event_command_repo=event_command_repo)

        with pytest.raises(TransientError):
            await use_case.create_event(organizer_email=ORGANIZER_EMAIL, **EVENT_FIELDS)

    async def test_invalid_event_is_never_persisted(self, event_command_repo):
        use_case = CreateEventUseCase(event_command_repo=event_command_repo)

        with pytest.raises(DomainError):
            await use_case.create_event(
                organizer_email=ORGANIZER_EMAIL, **(EVENT_FIELDS | {'tiers': []})
            )

        event_command_repo.create.assert_not_awaited()


@pytest.mark.unit
class TestUpdateEvent:
    @pytest.fixture
    def use_case(self, event_query_repo, event_command_repo):
        event_command_repo.update.side_effect = lambda event, require_unsold=False: event
        return UpdateEventUseCase(
            event_query_repo=event_query_repo, event_command_repo=event_command_repo
        )

    async def test_owner_patches_fields(
        self, use_case, event_query_repo, event_command_repo, published_event
    ):
        event_query_repo.get_by_id.return_value = published_event

        updated = await use_case.update_event(
            event_id=published_event.id, organizer_email=ORGANIZER_EMAIL, patch={'title': 'Blues'}
        )

        assert updated.title == 'Blues'
        event_command_repo.update.assert_awaited_once_with(updated, require_unsold=False)

    async def test_other_organizer_is_forbidden(
        self, use_case, event_query_repo, event_command_repo, published_event
    ):
        event_query_repo.get_by_id.return_value = published_event

        with pytest.raises(ForbiddenError):
            await use_case.update_event(
                event_id=published_event.id,
                organizer_email=ANOTHER_ORGANIZER_EMAIL,
                patch={'title': 'Hijacked'},
            )

        event_command_repo.update.assert_not_awaited()

    async def test_missing_event_is_not_found(self, use_case, event_query_repo):
        event_query_repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await use_case.update_event(
                event_id='missing', organizer_email=ORGANIZER_EMAIL, patch={'title': 'x'}
            )

    async def test_layout_patch_requires_unsold_event(
        self, use_case, event_query_repo, event_command_repo, published_event
    ):
        event_query_repo.get_by_id.return_value = published_event
        new_tiers = [TicketTier(tier_id='std', name='Std', price=Decimal('10'), quantity=60)]

        updated = await use_case.update_event(
            event_id=published_event.id, organizer_email=ORGANIZER_EMAIL, patch={'tiers': new_tiers}
        )

        assert updated.total_capacity == 60
        event_command_repo.update.assert_awaited_once_with(updated, require_unsold=True)

    async def test_no_op_patch_skips_write(
        self, use_case, event_query_repo, event_command_repo, published_event
    ):
        event_query_repo.get_by_id.return_value = published_event

        result = await use_case.update_event(
            event_id=published_event.id, organizer_email=ORGANIZER_EMAIL, patch={'title': ' '}
        )

        assert result is published_event
        event_command_repo.update.assert_not_awaited()


@pytest.mark.unit
class TestDeleteEvent:
    async def test_owner_soft_deletes(self, event_query_repo, event_command_repo, published_event):
        event_query_repo.get_by_id.return_value = published_event
        use_case = DeleteEventUseCase(
            event_query_repo=event_query_repo, event_command_repo=event_command_repo
        )

        await use_case.delete_event(event_id=published_event.id, organizer_email=ORGANIZER_EMAIL)

        event_query_repo.get_by_id.assert_awaited_once_with(published_event.id, include_deleted=True)
        event_command_repo.soft_delete.assert_awaited_once_with(published_event.id)
        event_command_repo.update.assert_not_awaited()

    async def test_deleting_twice_is_a_no_op(
        self, event_query_repo, event_command_repo, published_event
    ):
        event_query_repo.get_by_id.return_value = attrs.evolve(published_event, deleted=True)
        use_case = DeleteEventUseCase(
            event_query_repo=event_query_repo, event_command_repo=event_command_repo
        )

        await use_case.delete_event(event_id=published_event.id, organizer_email=ORGANIZER_EMAIL)

        event_command_repo.soft_delete.assert_not_awaited()

    async def test_other_organizer_is_forbidden(
        self, event_query_repo, event_command_repo, published_event
    ):
        event_query_repo.get_by_id.return_value = published_event
        use_case = DeleteEventUseCase(
            event_query_repo=event_query_repo, event_command_repo=event_command_repo
        )

        with pytest.raises(ForbiddenError):
            await use_case.delete_event(
                event_id=published_event.id, organizer_email=ANOTHER_ORGANIZER_EMAIL
            )


@pytest.mark.unit
class TestReadEvents:
    async def test_public_read_counts_a_view(
        self, event_query_repo, event_command_repo, published_event
    ):
        event_query_repo.get_by_short_link.return_value = attrs.evolve(published_event, views=4)
        use_case = GetPublicEventUseCase(
            event_query_repo=event_query_repo, event_command_repo=event_command_repo
        )

        event = await use_case.get_by_short_link('abcd1234')

        assert event.views == 5
        event_command_repo.increment_views.assert_awaited_once_with(published_event.id)

    async def test_unknown_short_link_is_not_found(self, event_query_repo, event_command_repo):
        event_query_repo.get_by_short_link.return_value = None
        use_case = GetPublicEventUseCase(
            event_query_repo=event_query_repo, event_command_repo=event_command_repo
        )

        with pytest.raises(NotFoundError):
            await use_case.get_by_short_link('deadbeef')

        event_command_repo.increment_views.assert_not_awaited()

    async def test_list_my_events_queries_by_organizer(self, published_event):
        event_query_repo = AsyncMock()
        event_query_repo.list_by_organizer.return_value = [published_event]

        events = await ListMyEventsUseCase(event_query_repo=event_query_repo).list_my_events(
            ORGANIZER_EMAIL
        )

        assert events == [published_event]
        event_query_repo.list_by_organizer.assert_awaited_once_with(ORGANIZER_EMAIL)
