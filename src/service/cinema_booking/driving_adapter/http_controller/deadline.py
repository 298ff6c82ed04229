from typing import ContextManager

import anyio

from src.platform.config.core_setting import settings


def request_deadline() -> ContextManager[anyio.CancelScope]:
    """Cancel the wrapped use-case call after REQUEST_TIMEOUT_SECONDS (raises TimeoutError)."""
    return anyio.fail_after(settings.REQUEST_TIMEOUT_SECONDS)
