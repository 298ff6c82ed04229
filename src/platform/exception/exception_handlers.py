from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.responses import Response

from src.platform.exception.exceptions import CustomBaseError, StorageError
from src.platform.logging.loguru_io import Logger

ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]


def _detail(status_code: int, detail: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={'detail': detail})


def _fixed_response(status_code: int, detail: str) -> ExceptionHandler:
    """Handler that hides the exception message behind a fixed `detail`."""

    async def handler(request: Request, exc: Exception) -> JSONResponse:
        return _detail(status_code, detail)

    return handler


async def custom_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if isinstance(exc, CustomBaseError):
        return _detail(exc.status_code, exc.message)
    return _detail(status.HTTP_500_INTERNAL_SERVER_ERROR, 'Internal server error')


async def value_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return _detail(status.HTTP_400_BAD_REQUEST, str(exc))


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    # `{"field": "body.email", "message": "value is not a valid email address"}`
    return _detail(
        status.HTTP_400_BAD_REQUEST,
        [
            {'field': '.'.join(str(part) for part in error['loc']), 'message': error['msg']}
            for error in errors
        ],
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    Logger.base.opt(exception=exc).error(
        f'💥 [HTTP] Unhandled {type(exc).__name__} on {request.method} {request.url.path}'
    )
    return _detail(status.HTTP_500_INTERNAL_SERVER_ERROR, 'Internal server error')


# Most specific first; Starlette resolves by the exception's MRO anyway
EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    StorageError: _fixed_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, 'Storage failure, please retry'
    ),
    CustomBaseError: custom_error_handler,
    TimeoutError: _fixed_response(status.HTTP_504_GATEWAY_TIMEOUT, 'Request timed out'),
    ValueError: value_error_handler,
    RequestValidationError: validation_error_handler,
    Exception: unhandled_error_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
