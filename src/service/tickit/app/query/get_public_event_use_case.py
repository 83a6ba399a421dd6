from typing import Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.db_setting import transient_retry
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.tickit.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.tickit.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.tickit.domain.entity.event_entity import Event


class GetPublicEventUseCase:
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
    async def get_by_short_link(self, short_link: str) -> Event:
        """Public view of an event. Each successful read counts as a view."""
        event = await self.event_query_repo.get_by_short_link(short_link)
        if not event or event.id is None:
            raise NotFoundError('Event not found')

        await self.event_command_repo.increment_views(event.id)
        return attrs.evolve(event, views=event.views + 1)
