from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.db_setting import transient_retry
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.tickit.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.tickit.app.interface.i_event_query_repo import IEventQueryRepo


class DeleteEventUseCase:
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
    async def delete_event(self, *, event_id: str, organizer_email: str) -> None:
        """Soft delete. Deleting an already deleted event is a no-op for its owner."""
        event = await self.event_query_repo.get_by_id(event_id, include_deleted=True)
        if not event:
            raise NotFoundError('Event not found')
        if not event.is_owned_by(organizer_email):
            raise ForbiddenError('You do not own this event')
        if event.deleted:
            return

        if not await self.event_command_repo.soft_delete(event_id):
            return
        Logger.base.info(f'🗑️  [EVENT] Soft deleted {event_id}')
