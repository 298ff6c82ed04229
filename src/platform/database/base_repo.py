from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import AsyncIterator, Callable, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import StorageError


SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]


class SqlAlchemyRepo:
    """
    Shared session handling for repositories.

    Works in two modes:
    - UoW mode: `session` is injected, writes are flushed and the UoW commits
    - standalone mode: a short-lived session per call from `session_factory` (read paths)
    """

    def __init__(
        self,
        session_factory: Optional[SessionFactory] = None,
        *,
        session: Optional[AsyncSession] = None,
    ) -> None:
        self.session_factory = session_factory
        self.session = session

    @asynccontextmanager
    async def _get_session(self, step: str) -> AsyncIterator[AsyncSession]:
        """
        Yield the injected UoW session, or open one from session_factory.

        SQLAlchemy failures surface as StorageError naming `step`.
        IntegrityError passes through so callers can map constraint hits.
        """
        try:
            if self.session is not None:
                yield self.session
            elif self.session_factory is not None:
                async with self.session_factory() as session:
                    yield session
            else:
                raise RuntimeError('No session or session_factory available')
        except IntegrityError:
            raise
        except SQLAlchemyError as e:
            raise StorageError(f'{step} failed: {e.__class__.__name__}') from e


def is_unique_violation(
    error: IntegrityError, *, constraint: str, columns: tuple[str, ...]
) -> bool:
    """
    True when `error` was raised by the unique index `constraint`.

    asyncpg reports the index name on the driver error. SQLite only lists the
    `table.column` pairs of the index, so `columns` is matched there instead.
    """
    driver_error = getattr(error.orig, '__cause__', None)
    constraint_name = getattr(driver_error, 'constraint_name', None)
    if constraint_name is not None:
        return constraint_name == constraint
    message = str(error.orig)
    return 'UNIQUE constraint failed' in message and all(c in message for c in columns)
