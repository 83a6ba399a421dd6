from abc import ABC, abstractmethod

from src.service.tickit.domain.entity.user_entity import UserEntity


class IUserCommandRepo(ABC):
    @abstractmethod
    async def create(self, user_entity: UserEntity) -> UserEntity:
        """Persist a new user; raises EmailConflictError when the email is taken."""
        pass
