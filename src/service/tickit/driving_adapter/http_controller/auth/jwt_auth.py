"""
Bearer token minting and verification (HS256 by default)

The subject claim is the user's email, the role rides along as a claim.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import attrs
import jwt

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import TokenInvalidError
from src.service.tickit.domain.entity.user_entity import UserEntity, UserRole


@attrs.frozen
class Principal:
    email: str
    role: UserRole


class JwtAuth:
    def __init__(
        self,
        secret: Optional[str] = None,
        algorithm: Optional[str] = None,
        expire_minutes: Optional[int] = None,
    ) -> None:
        self.secret = secret or settings.SECRET_KEY.get_secret_value()
        self.algorithm = algorithm or settings.ALGORITHM
        self.expire_minutes = expire_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES

    def create_jwt_token(self, user_entity: UserEntity) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            'sub': user_entity.email,
            'role': user_entity.role.value,
            'iat': now,
            'exp': now + timedelta(minutes=self.expire_minutes),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Principal:
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={'require': ['sub', 'exp']},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenInvalidError('Token expired') from e
        except jwt.PyJWTError as e:
            raise TokenInvalidError() from e

        email = payload.get('sub')
        if not isinstance(email, str) or not email:
            raise TokenInvalidError()
        try:
            role = UserRole(payload.get('role', UserRole.ORGANIZER))
        except ValueError as e:
            raise TokenInvalidError() from e

        return Principal(email=email, role=role)
