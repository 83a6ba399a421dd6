from typing import Any, Dict, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.db_setting import transient_retry
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.tickit.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.tickit.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.tickit.domain.entity.event_entity import LAYOUT_FIELDS, Event


class UpdateEventUseCase:
    def __init__(
        self, *, event_query_repo: IEventQueryRepo, event_command_repo: IEventCommandRepo
    ) -> None:
        self.event_query_repo = event_query_repo
        self.event_command_repo = event_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        event_command_repo: IEventCommandRepo = Depends(Provide[Container.event_command_repo]),
    ) -> Self:
        return cls(event_query_repo=event_query_repo, event_command_repo=event_command_repo)

    @transient_retry
    @Logger.io
    async def update_event(
        self, *, event_id: str, organizer_email: str, patch: Dict[str, Any]
    ) -> Event:
        event = await self.event_query_repo.get_by_id(event_id)
        if not event:
            raise NotFoundError('Event not found')
        if not event.is_owned_by(organizer_email):
            raise ForbiddenError('You do not own this event')

        updated = event.apply_patch(patch)
        if updated is event:
            return event

        touches_layout = any(patch.get(field) is not None for field in LAYOUT_FIELDS)
        # The sold == 0 guard is re-checked in the UPDATE itself
        return await self.event_command_repo.update(updated, require_unsold=touches_layout)
