from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from pydantic import SecretStr

from src.platform.config.di import Container
from src.platform.database.db_setting import transient_retry
from src.platform.exception.exceptions import InvalidCredentialsError
from src.platform.logging.loguru_io import Logger
from src.service.tickit.app.interface.i_password_hasher import IPasswordHasher
from src.service.tickit.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.tickit.domain.entity.user_entity import UserEntity


class LoginUserUseCase:
    def __init__(self, *, user_query_repo: IUserQueryRepo, password_hasher: IPasswordHasher) -> None:
        self.user_query_repo = user_query_repo
        self.password_hasher = password_hasher

    @classmethod
    @inject
    def depends(
        cls,
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
    ) -> Self:
        return cls(user_query_repo=user_query_repo, password_hasher=password_hasher)

    @transient_retry
    @Logger.io
    async def login(self, *, email: str, plain_password: SecretStr) -> UserEntity:
        """Same error for unknown email and wrong password."""
        user_entity = await self.user_query_repo.get_by_email(UserEntity.normalize_email(email))
        if not user_entity:
            raise InvalidCredentialsError()

        if not self.password_hasher.verify_password(
            plain_password=plain_password, hashed_password=user_entity.hashed_password
        ):
            raise InvalidCredentialsError()

        return user_entity
