"""
Request authenticator

Runs on every request. A valid `Authorization: Bearer <token>` header puts a Principal
on `request.state.principal`; anything else leaves the request anonymous and lets the
route decide. It never rejects a request by itself.
"""

from typing import Awaitable, Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from src.platform.exception.exceptions import TokenInvalidError
from src.platform.logging.loguru_io import Logger
from src.service.tickit.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


BEARER_PREFIX = 'Bearer '
# Frontends serialising a missing token send these literally
_ABSENT_TOKENS = frozenset({'', 'null', 'undefined'})


class BearerAuthMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, jwt_auth_provider: Callable[[], JwtAuth]) -> None:
        super().__init__(app)
        self.jwt_auth_provider = jwt_auth_provider

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request.state.principal = None
        request.state.auth_error = None

        token = self._extract_token(request)
        if token is not None and request.method != 'OPTIONS':
            try:
                request.state.principal = self.jwt_auth_provider().decode_jwt_token(token)
            except TokenInvalidError as e:
                Logger.base.warning(f'🔐 [AUTH] Rejected bearer token on {request.url.path}: {e}')
                request.state.auth_error = e.message

        return await call_next(request)

    @staticmethod
    def _extract_token(request: Request) -> Optional[str]:
        header = request.headers.get('Authorization')
        if not header or not header.startswith(BEARER_PREFIX):
            return None

        token = header[len(BEARER_PREFIX) :].strip()
        if token in _ABSENT_TOKENS:
            Logger.base.warning(f'🔐 [AUTH] Empty bearer payload "{token}" on {request.url.path}')
            return None
        return token
