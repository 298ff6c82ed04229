from functools import wraps
from inspect import iscoroutinefunction, signature
import types
from typing import TYPE_CHECKING, Any, Callable, ParamSpec, TypeVar, cast, overload


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io_config import (
    ExtraField,
    custom_logger,
)
from src.platform.logging.loguru_io_utils import (
    build_call_target_func_path,
    chain_start_time,
    enter_call_chain,
    leave_call_chain,
    redact,
    truncate_content,
)

_P = ParamSpec('_P')
_T = TypeVar('_T')


class LoguruIO:
    """
    Decorator that logs the inputs, output and failure of one call.

    Arguments are bound to parameter names first, so a `password=` passed
    positionally is masked just like a keyword one. Input/output lines are
    DEBUG only; failures are always logged, once, at the innermost frame.
    """

    def __init__(
        self, custom_logger: 'LoguruLogger', *, reraise: bool = True, truncate_content: bool = False
    ) -> None:
        self._custom_logger = custom_logger
        self.reraise = reraise
        self.truncate_content = truncate_content
        self.call_target = ''

    def _bound(self, depth: int) -> 'LoguruLogger':
        return self._custom_logger.bind(
            **{
                ExtraField.CALL_TARGET: self.call_target,
                ExtraField.CHAIN_START_TIME: chain_start_time(),
            }
        ).opt(depth=depth)

    def _render(self, data: Any) -> Any:
        rendered = redact(data)
        return truncate_content(rendered) if self.truncate_content else rendered

    def _on_enter(self, func: Callable[..., Any], args: tuple, kwargs: dict) -> None:
        enter_call_chain()
        if not settings.DEBUG:
            return
        try:
            bound_args = signature(func).bind_partial(*args, **kwargs).arguments
        except TypeError:
            # Let the real call raise the signature error
            bound_args = {'args': args, 'kwargs': kwargs}
        bound_args.pop('self', None)
        bound_args.pop('cls', None)
        self._bound(2).debug(f'➡️ {self._render(dict(bound_args))}')

    def _on_return(self, value: Any) -> None:
        if settings.DEBUG:
            self._bound(2).debug(f'⬅️ {self._render(value)}')

    def _on_error(self, e: Exception) -> None:
        if getattr(e, '_has_logged', False):
            return
        e._has_logged = True  # type: ignore[attr-defined]
        bound = self._bound(2)
        if isinstance(e, CustomBaseError) and e.status_code < 500:
            # Expected business outcome, no traceback
            bound.warning(f'{type(e).__name__}: {e}')
        else:
            bound.exception(f'{type(e).__name__}: {e}')

    def _hide_from_traceback(self, func: Callable[..., Any]) -> Callable[..., Any]:
        func.__code__ = func.__code__.replace(  # type: ignore[attr-defined]
            co_filename=cast(types.FunctionType, self._custom_logger.catch).__code__.co_filename
        )
        return func

    def __call__(self, func: Callable[_P, _T]) -> Callable[_P, _T]:
        self.call_target = build_call_target_func_path(func)

        if iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                self._on_enter(func, args, kwargs)
                try:
                    value = await func(*args, **kwargs)
                except Exception as e:
                    self._on_error(e)
                    if self.reraise:
                        raise
                    return None
                finally:
                    leave_call_chain()
                self._on_return(value)
                return value

            return cast(Callable[_P, _T], self._hide_from_traceback(async_wrapper))

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            self._on_enter(func, args, kwargs)
            try:
                value = func(*args, **kwargs)
            except Exception as e:
                self._on_error(e)
                if self.reraise:
                    raise
                return None
            finally:
                leave_call_chain()
            self._on_return(value)
            return value

        return cast(Callable[_P, _T], self._hide_from_traceback(sync_wrapper))


class Logger:
    base = custom_logger

    @overload
    @staticmethod
    def io(func: Callable[_P, _T]) -> Callable[_P, _T]: ...

    @overload
    @staticmethod
    def io(func: None = ..., *, reraise: bool = ..., truncate_content: bool = ...) -> LoguruIO: ...

    @staticmethod
    def io(
        func: Callable[_P, _T] | None = None, *, reraise: bool = True, truncate_content: bool = True
    ) -> Callable[_P, _T] | LoguruIO:
        decorator = LoguruIO(
            custom_logger=custom_logger, reraise=reraise, truncate_content=truncate_content
        )
        return decorator(func) if func else decorator
