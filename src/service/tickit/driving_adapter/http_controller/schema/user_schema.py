"""
User API Schemas - Pydantic models for request/response
"""

from typing import Optional

from pydantic import ConfigDict, EmailStr, Field, SecretStr

from src.service.tickit.domain.entity.user_entity import UserEntity
from src.service.tickit.driving_adapter.http_controller.schema.camel_model import (
    CamelModel,
    NonBlankStr,
)


class RegisterRequest(CamelModel):
    full_name: NonBlankStr
    email: EmailStr
    phone: Optional[str] = None
    password: SecretStr = Field(
        ...,
        min_length=8,
        max_length=72,
        description='Password must be 8-72 characters (bcrypt limit)',
    )

    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'fullName': 'Ada Lovelace',
                'email': 'ada@example.com',
                'phone': '(994) 50 123-45-67',
                'password': 'password1',
            }
        }
    )


class LoginRequest(CamelModel):
    email: EmailStr
    password: SecretStr = Field(..., min_length=1, max_length=72)

    model_config = ConfigDict(
        json_schema_extra={'example': {'email': 'ada@example.com', 'password': 'password1'}}
    )


class TokenResponse(CamelModel):
    token: str


class UserMeResponse(CamelModel):
    full_name: str
    email: str
    phone: Optional[str] = None

    @classmethod
    def from_entity(cls, user_entity: UserEntity) -> 'UserMeResponse':
        return cls(
            full_name=user_entity.full_name, email=user_entity.email, phone=user_entity.phone
        )
