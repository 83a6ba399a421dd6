from fastapi import Request

from src.platform.exception.exceptions import AuthenticationError, TokenInvalidError
from src.service.tickit.driving_adapter.http_controller.auth.jwt_auth import Principal


async def require_principal(request: Request) -> Principal:
    principal = getattr(request.state, 'principal', None)
    if principal is not None:
        return principal

    auth_error = getattr(request.state, 'auth_error', None)
    if auth_error:
        raise TokenInvalidError(auth_error)
    raise AuthenticationError('Not authenticated')
