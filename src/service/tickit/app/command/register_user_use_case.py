from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from pydantic import SecretStr

from src.platform.config.di import Container
from src.platform.database.db_setting import transient_retry
from src.platform.exception.exceptions import EmailConflictError
from src.platform.logging.loguru_io import Logger
from src.service.tickit.app.interface.i_password_hasher import IPasswordHasher
from src.service.tickit.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.tickit.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.tickit.domain.entity.user_entity import UserEntity


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        user_command_repo: IUserCommandRepo,
        user_query_repo: IUserQueryRepo,
        password_hasher: IPasswordHasher,
    ) -> None:
        self.user_command_repo = user_command_repo
        self.user_query_repo = user_query_repo
        self.password_hasher = password_hasher

    @classmethod
    @inject
    def depends(
        cls,
        user_command_repo: IUserCommandRepo = Depends(Provide[Container.user_command_repo]),
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
    ) -> Self:
        return cls(
            user_command_repo=user_command_repo,
            user_query_repo=user_query_repo,
            password_hasher=password_hasher,
        )

    @transient_retry
    @Logger.io
    async def register(
        self,
        *,
        email: str,
        full_name: str,
        phone: Optional[str],
        plain_password: SecretStr,
    ) -> UserEntity:
        # The unique index on email still catches concurrent registrations
        if await self.user_query_repo.exists_by_email(UserEntity.normalize_email(email)):
            raise EmailConflictError()

        user_entity = UserEntity.register(
            email=email,
            full_name=full_name,
            phone=phone,
            plain_password=plain_password,
            password_hasher=self.password_hasher,
        )
        created = await self.user_command_repo.create(user_entity)
        Logger.base.info(f'👤 [REGISTER] {created.email}')
        return created
