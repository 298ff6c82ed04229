"""
Production FastAPI Application

Cinema booking API plus the in-process notifier consumer.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
import os

import anyio
from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import SERVICE_NAME, create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import dispose_engine, get_engine
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Cinema Service] Starting up...')

    tracing = TracingConfig(
        service_name=SERVICE_NAME, deploy_env=os.getenv('DEPLOY_ENV', 'local_dev')
    )
    tracing.setup()
    Logger.base.info('📊 [Cinema Service] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Cinema Service] Dependency injection wired')

    engine = get_engine()
    tracing.instrument_sqlalchemy(engine=engine)
    Logger.base.info('🗄️  [Cinema Service] Database engine ready + instrumented')

    notifier = container.booking_notifier()

    async with anyio.create_task_group() as tg:
        tg.start_soon(notifier.run)
        Logger.base.info('✅ [Cinema Service] Ready to serve requests')

        yield

        Logger.base.info('🛑 [Cinema Service] Shutting down...')
        await notifier.close()
        tg.cancel_scope.cancel()

    await dispose_engine()
    Logger.base.info('🗄️  [Cinema Service] Database engine disposed')

    tracing.shutdown()
    Logger.base.info('📊 [Cinema Service] Tracing shutdown complete')

    container.unwire()

    Logger.base.info('👋 [Cinema Service] Shutdown complete')


app = create_app(
    lifespan=lifespan,
    description='Cinema Booking System - cinemas, seat maps, bookings and payments',
)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
