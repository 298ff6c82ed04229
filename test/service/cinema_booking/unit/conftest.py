"""
Unit test configuration for the cinema booking service.

Repositories are AsyncMocks shaped by their interfaces; the unit of work is a
fake that only records commit / rollback.
"""

from datetime import date
from decimal import Decimal
from typing import Any
from unittest.mock import AsyncMock, Mock

import pytest

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.metrics.booking_metrics import BookingMetrics
from src.service.cinema_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.cinema_booking.app.interface.i_booking_notifier import IBookingNotifier
from src.service.cinema_booking.app.interface.i_catalog_query_repo import ICatalogQueryRepo
from src.service.cinema_booking.app.interface.i_email_verification_repo import (
    IEmailVerificationRepo,
)
from src.service.cinema_booking.app.interface.i_payment_command_repo import IPaymentCommandRepo
from src.service.cinema_booking.app.interface.i_payment_method_query_repo import (
    IPaymentMethodQueryRepo,
)
from src.service.cinema_booking.app.interface.i_seat_availability_repo import (
    ISeatAvailabilityRepo,
)
from src.service.cinema_booking.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.cinema_booking.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.cinema_booking.domain.entity.cinema_entity import Cinema
from src.service.cinema_booking.domain.entity.seat_entity import Seat, SeatType


class FakeUnitOfWork(AbstractUnitOfWork):
    def __init__(self) -> None:
        self.booking_command_repo = AsyncMock(spec=IBookingCommandRepo)
        self.seat_availability_repo = AsyncMock(spec=ISeatAvailabilityRepo)
        self.catalog_query_repo = AsyncMock(spec=ICatalogQueryRepo)
        self.payment_command_repo = AsyncMock(spec=IPaymentCommandRepo)
        self.payment_method_query_repo = AsyncMock(spec=IPaymentMethodQueryRepo)
        self.user_command_repo = AsyncMock(spec=IUserCommandRepo)
        self.user_query_repo = AsyncMock(spec=IUserQueryRepo)
        self.email_verification_repo = AsyncMock(spec=IEmailVerificationRepo)
        self.committed = False
        self.rolled_back = False

    async def _commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork) -> Any:
    return lambda: fake_uow


@pytest.fixture
def mock_notifier() -> Mock:
    return Mock(spec=IBookingNotifier)


@pytest.fixture
def mock_booking_metrics() -> Mock:
    return Mock(spec=BookingMetrics)


@pytest.fixture
def cinema() -> Cinema:
    return Cinema(id=1, name='CGV Cinemas - Jakarta', city='Jakarta', location='Blok M Plaza')


@pytest.fixture
def premium_seat() -> Seat:
    return Seat(
        id=10,
        cinema_id=1,
        seat_number='3A',
        row_number=3,
        seat_type=SeatType.PREMIUM,
        price=Decimal('70000.00'),
    )


@pytest.fixture
def show_date() -> date:
    return date(2026, 1, 15)
