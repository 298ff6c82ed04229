from contextvars import ContextVar
from datetime import datetime, timezone
from enum import StrEnum
import logging
import os
import re
import sys
from typing import TYPE_CHECKING

from loguru import logger as loguru_logger


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings
from src.platform.constant.path import LOG_DIR
from src.platform.logging.service_context import get_service_context


MASK = '********'

# Lower-case keys whose values are replaced by MASK
SENSITIVE_KEYWORDS = frozenset(
    {
        'password',
        'plain_password',
        'hashed_password',
        'otp_code',
        'token',
        'access_token',
        'secret_key',
        'credential',
    }
)

MAX_CONTENT_LENGTH = 1000

chain_start_time_var: ContextVar[float] = ContextVar('chain_start_time_var', default=0)
call_depth_var: ContextVar[int] = ContextVar('call_depth_var', default=0)


class ExtraField(StrEnum):
    SERVICE_CONTEXT = 'service_context'
    CHAIN_START_TIME = 'chain_start_time'
    CALL_TARGET = 'call_target'


# '127.0.0.1 - "POST /api/bookings HTTP/1.1" - 409 - 8ms'
_ACCESS_LOG_STATUS = re.compile(r'" - (\d{3}) - ')

# Lowest status code first; the last threshold reached wins
_STATUS_LEVELS = (
    (100, 'INFO'),
    (200, 'SUCCESS'),
    (300, 'WARNING'),
    (400, 'ERROR'),
    (500, 'CRITICAL'),
)


def access_log_level(message: str) -> str | None:
    """Log level for a server access log line, None when `message` is not one."""
    match = _ACCESS_LOG_STATUS.search(message)
    if not match:
        return None
    status_code = int(match.group(1))
    level = 'INFO'
    for threshold, name in _STATUS_LEVELS:
        if status_code >= threshold:
            level = name
    return level


def _default_extra() -> dict[str, str]:
    return {
        ExtraField.SERVICE_CONTEXT: get_service_context(),
        ExtraField.CHAIN_START_TIME: '',
        ExtraField.CALL_TARGET: '',
    }


class InterceptHandler(logging.Handler):
    """Forward stdlib logging records (granian, sqlalchemy, alembic, asyncio) to loguru."""

    def __init__(self, target: 'LoguruLogger') -> None:
        super().__init__()
        self.target = target

    def emit(self, record: logging.LogRecord) -> None:
        message = record.getMessage()
        if record.levelno <= logging.DEBUG and 'Using selector:' in message:
            return

        level: str | int | None = access_log_level(message)
        if level is None:
            try:
                level = loguru_logger.level(record.levelname).name
            except ValueError:
                level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore[assignment]
            depth += 1

        self.target.opt(depth=depth, exception=record.exc_info).log(level, message)


io_log_format = ' | '.join(
    (
        f'<c>{{extra[{ExtraField.SERVICE_CONTEXT}]}}</>',
        '<lvl>{level:<8}</>',
        f'<c>{{file}}::{{function}}:{{line}}</>=><y>{{extra[{ExtraField.CALL_TARGET}]}}</>',
        '{message}',
        '<lk>{elapsed}</>',
        f'<lk>{{extra[{ExtraField.CHAIN_START_TIME}]:<18}}</>',
    )
)


def configure_sinks(bound: 'LoguruLogger') -> None:
    """
    stdout always; an hourly rotated file only in DEBUG mode.

    TEST_LOG_DIR redirects the file sink so test runs never mix with dev logs.
    """
    level = 'DEBUG' if settings.DEBUG else 'INFO'
    bound.add(sys.stdout, format=io_log_format, level=level, enqueue=True)

    if settings.DEBUG:
        test_log_dir = os.environ.get('TEST_LOG_DIR')
        hour = datetime.now(timezone.utc).strftime('%Y-%m-%d_%H')
        path = f'{test_log_dir}/test_{hour}.log' if test_log_dir else f'{LOG_DIR}/{hour}.log'
        bound.add(
            path,
            format=io_log_format,
            rotation='1 hour',
            retention='7 days',
            compression='gz',
            enqueue=True,
            level=level,
        )

    logging.basicConfig(handlers=[InterceptHandler(bound)], level=0, force=True)


loguru_logger.remove()
custom_logger = loguru_logger.bind(**_default_extra())
configure_sinks(custom_logger)
