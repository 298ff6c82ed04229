from decimal import Decimal
from inspect import getfile, getsourcelines
from os.path import basename
from re import IGNORECASE, compile as re_compile
from time import time
from typing import Any, Callable

import attrs
from pydantic import BaseModel, SecretStr

from src.platform.logging.loguru_io_config import (
    MAX_CONTENT_LENGTH,
    MASK,
    SENSITIVE_KEYWORDS,
    call_depth_var,
    chain_start_time_var,
)


# `password='secret'` / `otp_code="123456"` inside a repr()
_SENSITIVE_PATTERN = re_compile(
    r"(\b(?:%s)\b)(\s*[=:]\s*)(['\"]?)[^'\",)\s]+\3" % '|'.join(sorted(SENSITIVE_KEYWORDS)),
    IGNORECASE,
)


def enter_call_chain() -> None:
    """Open one level of a decorated call chain, starting the chain clock at level 1."""
    depth = call_depth_var.get()
    if depth == 0:
        chain_start_time_var.set(time())
    call_depth_var.set(depth + 1)


def leave_call_chain() -> None:
    depth = max(call_depth_var.get() - 1, 0)
    call_depth_var.set(depth)
    if depth == 0:
        chain_start_time_var.set(0)


def chain_start_time() -> float | str:
    return chain_start_time_var.get() or ''


def build_call_target_func_path(func: Callable[..., Any]) -> str:
    target = getattr(func, '__func__', func)
    try:
        lineno = getsourcelines(target)[1]
    except (OSError, TypeError):
        lineno = 0
    return f'{basename(getfile(target))}::{func.__qualname__}:{lineno}'


def is_sensitive_key(key: Any) -> bool:
    return isinstance(key, str) and key.lower() in SENSITIVE_KEYWORDS


def redact(data: Any) -> Any:
    """
    Copy of `data` that is safe to log.

    Mappings and sequences are walked, values under sensitive keys are masked,
    attrs entities and pydantic models are walked as their field mapping, and
    anything else is masked through its string form.
    """
    if isinstance(data, SecretStr):
        return MASK
    if isinstance(data, dict):
        return {
            key: MASK if is_sensitive_key(key) else redact(value) for key, value in data.items()
        }
    if isinstance(data, list | tuple):
        return type(data)(redact(item) for item in data)
    if attrs.has(type(data)):
        return {type(data).__name__: redact(attrs.asdict(data, recurse=False))}
    if isinstance(data, BaseModel):
        return {type(data).__name__: redact(data.model_dump())}
    if data is None or isinstance(data, bool | int | float | Decimal):
        return data

    text = str(data)
    masked = _SENSITIVE_PATTERN.sub(rf"\1\2'{MASK}'", text)
    return data if masked == text else masked


def truncate_content(data: Any) -> Any:
    text = data if isinstance(data, str) else repr(data)
    if len(text) > MAX_CONTENT_LENGTH:
        return f'{text[:MAX_CONTENT_LENGTH]}...(+{len(text) - MAX_CONTENT_LENGTH} chars)'
    return data
