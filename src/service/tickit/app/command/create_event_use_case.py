"""
Create Event Use Case

The server owns capacity, platform fee and the short link. A short link collision
surfaces from the repo as None and the event is retried with a fresh link.
"""

import secrets
from typing import Any, Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.db_setting import transient_retry
from src.platform.exception.exceptions import TransientError
from src.platform.logging.loguru_io import Logger
from src.service.tickit.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.tickit.domain.entity.event_entity import Event


SHORT_LINK_BYTES = 4  # 8 lowercase hex chars
MAX_SHORT_LINK_ATTEMPTS = 5


def generate_short_link() -> str:
    return secrets.token_hex(SHORT_LINK_BYTES)


class CreateEventUseCase:
    def __init__(self, event_command_repo: IEventCommandRepo) -> None:
        self.event_command_repo = event_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        event_command_repo: IEventCommandRepo = Depends(Provide[Container.event_command_repo]),
    ) -> Self:
        return cls(event_command_repo=event_command_repo)

    @transient_retry
    @Logger.io
    async def create_event(self, *, organizer_email: str, **event_fields: Any) -> Event:
        event = Event.create(
            organizer_id=organizer_email, short_link=generate_short_link(), **event_fields
        )

        for attempt in range(1, MAX_SHORT_LINK_ATTEMPTS + 1):
            created = await self.event_command_repo.create(event)
            if created is not None:
                Logger.base.info(
                    f'🎫 [EVENT] Created {created.id} /s/{created.short_link} '
                    f'capacity={created.total_capacity} fee={created.platform_fee}'
                )
                return created
            Logger.base.warning(
                f'🔁 [EVENT] Short link collision, attempt {attempt}/{MAX_SHORT_LINK_ATTEMPTS}'
            )
            event = attrs.evolve(event, short_link=generate_short_link())

        raise TransientError('Could not allocate a short link, please retry')
