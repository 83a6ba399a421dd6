from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.db_setting import transient_retry
from src.platform.logging.loguru_io import Logger
from src.service.tickit.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.tickit.domain.entity.event_entity import Event


class ListMyEventsUseCase:
    def __init__(self, event_query_repo: IEventQueryRepo) -> None:
        self.event_query_repo = event_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
    ) -> Self:
        return cls(event_query_repo=event_query_repo)

    @transient_retry
    @Logger.io
    async def list_my_events(self, organizer_email: str) -> List[Event]:
        events = await self.event_query_repo.list_by_organizer(organizer_email)
        Logger.base.info(f'📋 [LIST_MY_EVENTS] Found {len(events)} events for {organizer_email}')
        return events
