from datetime import datetime, timezone
from enum import StrEnum
from typing import TYPE_CHECKING, Optional

import attrs
from pydantic import SecretStr
from uuid_utils import uuid7

from src.platform.exception.exceptions import DomainError
from src.service.tickit.domain.value_object.phone_number import normalize_phone


if TYPE_CHECKING:
    from src.service.tickit.app.interface.i_password_hasher import IPasswordHasher


MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 72  # bcrypt only hashes the first 72 bytes


class UserRole(StrEnum):
    ORGANIZER = 'ORGANIZER'


@attrs.define
class UserEntity:
    email: str
    full_name: str
    phone: Optional[str] = None
    hashed_password: str = attrs.field(default='', repr=False)  # Hide from repr for security
    role: UserRole = UserRole.ORGANIZER
    id: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def register(
        cls,
        *,
        email: str,
        full_name: str,
        phone: Optional[str],
        plain_password: SecretStr,
        password_hasher: 'IPasswordHasher',
    ) -> 'UserEntity':
        if not full_name or not full_name.strip():
            raise DomainError('Full name is required')
        cls.validate_password(plain_password)

        return cls(
            id=str(uuid7()),
            email=cls.normalize_email(email),
            full_name=full_name.strip(),
            phone=normalize_phone(phone),
            hashed_password=password_hasher.hash_password(plain_password=plain_password),
            role=UserRole.ORGANIZER,
            created_at=datetime.now(timezone.utc),
        )

    @staticmethod
    def normalize_email(email: str) -> str:
        return email.strip().lower()

    @staticmethod
    def validate_password(plain_password: SecretStr) -> None:
        length = len(plain_password.get_secret_value().encode('utf-8'))
        if length < MIN_PASSWORD_LENGTH:
            raise DomainError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters')
        if length > MAX_PASSWORD_LENGTH:
            raise DomainError(f'Password must be at most {MAX_PASSWORD_LENGTH} bytes')
