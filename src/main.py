"""
Production FastAPI Application
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.db_setting import create_db_and_tables, dispose_engine
from src.platform.logging.loguru_io import Logger


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Tickit] Starting up...')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Tickit] Dependency injection wired')

    await create_db_and_tables()

    Logger.base.info('✅ [Tickit] Ready to serve requests')
    yield

    Logger.base.info('🛑 [Tickit] Shutting down...')
    await dispose_engine()
    Logger.base.info('🗄️  [Tickit] Database engine disposed')

    container.unwire()
    Logger.base.info('👋 [Tickit] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
