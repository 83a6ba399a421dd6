from typing import AsyncContextManager, Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import EmailConflictError
from src.platform.logging.loguru_io import Logger
from src.service.tickit.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.tickit.domain.entity.user_entity import UserEntity, UserRole
from src.service.tickit.driven_adapter.model.user_model import UserModel


class UserCommandRepoImpl(IUserCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def create(self, user_entity: UserEntity) -> UserEntity:
        async with self.session_factory() as session:
            user_model = UserModel(
                id=user_entity.id,
                email=user_entity.email,
                full_name=user_entity.full_name,
                phone=user_entity.phone,
                hashed_password=user_entity.hashed_password,
                role=user_entity.role.value,
                created_at=user_entity.created_at,
            )

            session.add(user_model)
            try:
                await session.commit()
            except IntegrityError as e:
                # Lost the race against a concurrent register with the same email
                await session.rollback()
                raise EmailConflictError() from e
            await session.refresh(user_model)

            return self._model_to_entity(user_model)

    def _model_to_entity(self, user_model: UserModel) -> UserEntity:
        return UserEntity(
            id=user_model.id,
            email=user_model.email,
            full_name=user_model.full_name,
            phone=user_model.phone,
            hashed_password=user_model.hashed_password,
            role=UserRole(user_model.role),
            created_at=user_model.created_at,
        )
