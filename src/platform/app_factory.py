"""
FastAPI app factory shared by the production app (src/main.py) and the test app.

The caller owns the lifespan; everything that must be identical in both
(routers, error mapping, CORS, probes) is assembled here.
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

from fastapi import APIRouter, FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.platform.config.core_setting import settings
from src.platform.database.orm_db_setting import get_engine
from src.platform.exception.exception_handlers import register_exception_handlers
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig
from src.service.cinema_booking.driving_adapter.http_controller.booking_controller import (
    router as booking_router,
)
from src.service.cinema_booking.driving_adapter.http_controller.cinema_controller import (
    router as cinema_router,
)
from src.service.cinema_booking.driving_adapter.http_controller.user_controller import (
    router as user_router,
)


SERVICE_NAME = 'cinema-booking-service'
API_PREFIX = '/api'

_ROUTERS: tuple[tuple[APIRouter, str], ...] = (
    (user_router, 'user'),
    (cinema_router, 'cinema'),
    (booking_router, 'booking'),
)


def create_app(
    *,
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[Any]],
    title_suffix: str = '',
    description: str = 'Cinema Booking System',
) -> FastAPI:
    app = FastAPI(
        title=f'{settings.PROJECT_NAME}{title_suffix}',
        description=description,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    # Must wrap the app before the first request builds the middleware stack
    TracingConfig.instrument_fastapi(app=app)

    app.add_middleware(
        CORSMiddleware,  # type: ignore
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    register_exception_handlers(app)

    for router, tag in _ROUTERS:
        app.include_router(router, prefix=API_PREFIX, tags=[tag])

    _register_probe_endpoints(app)
    return app


def _register_probe_endpoints(app: FastAPI) -> None:
    @app.get('/health')
    async def health_check() -> JSONResponse:
        """Liveness plus a `SELECT 1` against the booking database."""
        try:
            async with get_engine().connect() as conn:
                await conn.execute(text('SELECT 1'))
        except (SQLAlchemyError, OSError) as e:
            Logger.base.warning(f'🩺 [HEALTH] Database unreachable: {e}')
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={
                    'status': 'unhealthy',
                    'service': settings.PROJECT_NAME,
                    'database': 'down',
                },
            )
        return JSONResponse(
            content={'status': 'healthy', 'service': settings.PROJECT_NAME, 'database': 'up'}
        )

    @app.get('/metrics')
    async def get_metrics() -> PlainTextResponse:
        return PlainTextResponse(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
