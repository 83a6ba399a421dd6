"""
Shared FastAPI App Factory

Provides common app setup for production and test environments.
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from pathlib import Path
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.platform.constant.route_constant import (
    AUTH_BASE,
    EVENT_BASE,
    ORDER_BASE,
    UPLOAD_BASE,
    UPLOADS_MOUNT,
    USER_BASE,
)
from src.platform.exception.exception_handlers import register_exception_handlers
from src.service.tickit.driving_adapter.http_controller.auth.bearer_auth_middleware import (
    BearerAuthMiddleware,
)
from src.service.tickit.driving_adapter.http_controller.auth_controller import (
    router as auth_router,
)
from src.service.tickit.driving_adapter.http_controller.event_controller import (
    router as event_router,
)
from src.service.tickit.driving_adapter.http_controller.order_controller import (
    router as order_router,
)
from src.service.tickit.driving_adapter.http_controller.upload_controller import (
    router as upload_router,
)
from src.service.tickit.driving_adapter.http_controller.user_controller import (
    router as user_router,
)


CORS_METHODS = ['GET', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS']
CORS_HEADERS = ['Authorization', 'Cache-Control', 'Content-Type']


def create_app(
    *,
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[Any]],
    title_suffix: str = '',
    description: str = 'Tickit event ticketing backend',
) -> FastAPI:
    """
    Create a configured FastAPI application.

    Args:
        lifespan: Async context manager for app lifespan (startup/shutdown)
        title_suffix: Optional suffix for app title (e.g., " (Test)")
        description: App description

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=f'{settings.PROJECT_NAME}{title_suffix}',
        description=description,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    # Middleware added last runs first: CORS answers preflights before auth runs
    app.add_middleware(BearerAuthMiddleware, jwt_auth_provider=container.jwt_auth)
    app.add_middleware(
        CORSMiddleware,  # type: ignore
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )

    register_exception_handlers(app)

    # Uploaded images
    upload_dir = Path(settings.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount(UPLOADS_MOUNT, StaticFiles(directory=upload_dir), name='uploads')

    app.include_router(auth_router, prefix=AUTH_BASE, tags=['auth'])
    app.include_router(user_router, prefix=USER_BASE, tags=['user'])
    app.include_router(event_router, prefix=EVENT_BASE, tags=['event'])
    app.include_router(order_router, prefix=ORDER_BASE, tags=['order'])
    app.include_router(upload_router, prefix=UPLOAD_BASE, tags=['upload'])

    _register_common_endpoints(app)

    return app


def _register_common_endpoints(app: FastAPI) -> None:
    @app.get('/health')
    async def health_check() -> dict[str, str]:
        """Health check endpoint for container orchestration."""
        return {'status': 'healthy'}
