"""
Unit of Work Pattern - one database session and transaction shared by repositories

Architecture:
- UoW owns the session lifecycle
- UoW owns commit/rollback (commit is explicit, rollback on exit)
- Repositories get the shared session from the UoW
- Use cases coordinate several repositories through one UoW
"""

from __future__ import annotations

import abc
from contextlib import AbstractAsyncContextManager, AsyncExitStack
from typing import TYPE_CHECKING, Any, Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import StorageError


if TYPE_CHECKING:
    from src.service.cinema_booking.app.interface.i_booking_command_repo import (
        IBookingCommandRepo,
    )
    from src.service.cinema_booking.app.interface.i_catalog_query_repo import ICatalogQueryRepo
    from src.service.cinema_booking.app.interface.i_email_verification_repo import (
        IEmailVerificationRepo,
    )
    from src.service.cinema_booking.app.interface.i_payment_command_repo import (
        IPaymentCommandRepo,
    )
    from src.service.cinema_booking.app.interface.i_payment_method_query_repo import (
        IPaymentMethodQueryRepo,
    )
    from src.service.cinema_booking.app.interface.i_seat_availability_repo import (
        ISeatAvailabilityRepo,
    )
    from src.service.cinema_booking.app.interface.i_user_command_repo import IUserCommandRepo
    from src.service.cinema_booking.app.interface.i_user_query_repo import IUserQueryRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for the cinema booking service

    Usage:
        async with uow_factory() as uow:
            booking = await uow.booking_command_repo.create(booking=...)
            await uow.seat_availability_repo.set_availability(...)
            await uow.commit()

    Leaving the block without commit() rolls everything back.
    """

    # Ledger / availability / catalog
    booking_command_repo: IBookingCommandRepo
    seat_availability_repo: ISeatAvailabilityRepo
    catalog_query_repo: ICatalogQueryRepo

    # Payment
    payment_command_repo: IPaymentCommandRepo
    payment_method_query_repo: IPaymentMethodQueryRepo

    # Users / email verification
    user_command_repo: IUserCommandRepo
    user_query_repo: IUserQueryRepo
    email_verification_repo: IEmailVerificationRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.rollback()

    async def commit(self) -> None:
        """Commit the transaction"""
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """
    SQLAlchemy implementation of Unit of Work

    Each `async with` opens a fresh session from `session_factory`, so one
    instance must not be entered concurrently. Use cases receive the factory
    (the DI provider) and create one UoW per call.
    """

    def __init__(
        self, session_factory: Callable[[], AbstractAsyncContextManager[AsyncSession]]
    ) -> None:
        self.session_factory = session_factory
        self.session: Optional[AsyncSession] = None
        self._exit_stack: Optional[AsyncExitStack] = None

    async def __aenter__(self) -> AbstractUnitOfWork:
        from src.service.cinema_booking.driven_adapter.repo.booking_command_repo_impl import (
            BookingCommandRepoImpl,
        )
        from src.service.cinema_booking.driven_adapter.repo.catalog_query_repo_impl import (
            CatalogQueryRepoImpl,
        )
        from src.service.cinema_booking.driven_adapter.repo.email_verification_repo_impl import (
            EmailVerificationRepoImpl,
        )
        from src.service.cinema_booking.driven_adapter.repo.payment_command_repo_impl import (
            PaymentCommandRepoImpl,
        )
        from src.service.cinema_booking.driven_adapter.repo.payment_method_query_repo_impl import (
            PaymentMethodQueryRepoImpl,
        )
        from src.service.cinema_booking.driven_adapter.repo.seat_availability_repo_impl import (
            SeatAvailabilityRepoImpl,
        )
        from src.service.cinema_booking.driven_adapter.repo.user_command_repo_impl import (
            UserCommandRepoImpl,
        )
        from src.service.cinema_booking.driven_adapter.repo.user_query_repo_impl import (
            UserQueryRepoImpl,
        )

        self._exit_stack = AsyncExitStack()
        self.session = await self._exit_stack.enter_async_context(self.session_factory())

        # Every repository shares the UoW session
        self.booking_command_repo = BookingCommandRepoImpl(session=self.session)
        self.seat_availability_repo = SeatAvailabilityRepoImpl(session=self.session)
        self.catalog_query_repo = CatalogQueryRepoImpl(session=self.session)
        self.payment_command_repo = PaymentCommandRepoImpl(session=self.session)
        self.payment_method_query_repo = PaymentMethodQueryRepoImpl(session=self.session)
        self.user_command_repo = UserCommandRepoImpl(session=self.session)
        self.user_query_repo = UserQueryRepoImpl(session=self.session)
        self.email_verification_repo = EmailVerificationRepoImpl(session=self.session)

        return await super().__aenter__()

    async def __aexit__(self, *args: Any) -> None:
        try:
            await super().__aexit__(*args)
        finally:
            if self._exit_stack is not None:
                await self._exit_stack.aclose()
            self._exit_stack = None
            self.session = None

    async def _commit(self) -> None:
        assert self.session is not None
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            raise StorageError(f'commit failed: {e.__class__.__name__}') from e

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
