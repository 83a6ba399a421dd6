from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.db_setting import transient_retry
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.tickit.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.tickit.domain.entity.user_entity import UserEntity


class GetCurrentUserUseCase:
    def __init__(self, user_query_repo: IUserQueryRepo) -> None:
        self.user_query_repo = user_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
    ) -> Self:
        return cls(user_query_repo=user_query_repo)

    @transient_retry
    @Logger.io
    async def get_current_user(self, email: str) -> UserEntity:
        user_entity = await self.user_query_repo.get_by_email(email)
        if not user_entity:
            raise NotFoundError('User not found')
        return user_entity
