#!/usr/bin/env python3
"""
Serve the cinema booking API with granian.

Equivalent to:
    granian src.main:app --interface asgi --host $SERVER_HOST --port $SERVER_PORT \
        --workers $SERVER_WORKERS
"""

from granian import Granian
from granian.constants import Interfaces

from src.platform.config.core_setting import settings


def main() -> None:
    Granian(
        'src.main:app',
        address=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        interface=Interfaces.ASGI,
        workers=settings.SERVER_WORKERS,
    ).serve()


if __name__ == '__main__':
    main()
