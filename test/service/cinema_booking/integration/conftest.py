"""
Integration fixtures: a small catalog on a real SQLite database.

Cinema "CGV Cinemas - Jakarta" has seats 1A (standard 50000), 3A (premium 70000)
and 5A (vip 100000); "Cinemaxx - Surabaya" has seat 1A. Both offer the
2026-01-15 19:00 showing.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import AsyncGenerator, Callable
from unittest.mock import Mock

from pydantic import SecretStr
import pytest
from sqlalchemy import func, select

from src.platform.database.orm_db_setting import Base, Database
from src.platform.database.unit_of_work import AbstractUnitOfWork, SqlAlchemyUnitOfWork
from src.platform.metrics.booking_metrics import metrics
from src.service.cinema_booking.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.cinema_booking.app.command.process_payment_use_case import (
    ProcessPaymentUseCase,
)
from src.service.cinema_booking.app.interface.i_booking_notifier import IBookingNotifier
from src.service.cinema_booking.driven_adapter.model import (
    CinemaModel,
    PaymentMethodModel,
    SeatModel,
    UserModel,
)
from src.service.cinema_booking.driven_adapter.repo.seat_availability_repo_impl import (
    SeatAvailabilityRepoImpl,
)
from src.service.cinema_booking.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)


SHOW_DATE = '2026-01-15'
SHOW_TIME = '19:00'
DEFAULT_PASSWORD = 'P@ssw0rd'


@dataclass
class Catalog:
    cinema_id: int
    other_cinema_id: int
    standard_seat_id: int
    premium_seat_id: int
    vip_seat_id: int
    other_cinema_seat_id: int
    alice_id: int
    bob_id: int


def _seat(cinema_id: int, seat_number: str, row: int, seat_type: str, price: str) -> SeatModel:
    return SeatModel(
        cinema_id=cinema_id,
        seat_number=seat_number,
        row_number=row,
        seat_type=seat_type,
        price=Decimal(price),
    )


@pytest.fixture
def uow_factory() -> Callable[[], AbstractUnitOfWork]:
    database = Database()
    return lambda: SqlAlchemyUnitOfWork(session_factory=database.session)


@pytest.fixture
def mock_notifier() -> Mock:
    return Mock(spec=IBookingNotifier)


@pytest.fixture
def create_booking_use_case(
    uow_factory: Callable[[], AbstractUnitOfWork], mock_notifier: Mock
) -> CreateBookingUseCase:
    return CreateBookingUseCase(
        uow_factory=uow_factory, notifier=mock_notifier, booking_metrics=metrics
    )


@pytest.fixture
def process_payment_use_case(
    uow_factory: Callable[[], AbstractUnitOfWork], mock_notifier: Mock
) -> ProcessPaymentUseCase:
    return ProcessPaymentUseCase(
        uow_factory=uow_factory, notifier=mock_notifier, booking_metrics=metrics
    )


@pytest.fixture
async def catalog(clean_database: None) -> AsyncGenerator[Catalog, None]:
    hasher = BcryptPasswordHasher()
    hashed = hasher.hash_password(plain_password=SecretStr(DEFAULT_PASSWORD))

    async with Database().session() as session:
        jakarta = CinemaModel(
            name='CGV Cinemas - Jakarta', location='Blok M Plaza', city='Jakarta', total_seats=3
        )
        surabaya = CinemaModel(
            name='Cinemaxx - Surabaya', location='Pakuwon Indah', city='Surabaya', total_seats=1
        )
        session.add_all([jakarta, surabaya])
        await session.flush()

        standard = _seat(jakarta.id, '1A', 1, 'standard', '50000')
        premium = _seat(jakarta.id, '3A', 3, 'premium', '70000')
        vip = _seat(jakarta.id, '5A', 5, 'vip', '100000')
        other = _seat(surabaya.id, '1A', 1, 'standard', '50000')
        session.add_all([standard, premium, vip, other])

        session.add_all(
            [
                PaymentMethodModel(name='cash', type='cash', is_active=True),
                PaymentMethodModel(name='credit_card', type='credit_card', is_active=True),
                PaymentMethodModel(name='e_wallet', type='e_wallet', is_active=False),
            ]
        )

        alice = UserModel(
            username='alice', email='alice@example.com', hashed_password=hashed, is_verified=True
        )
        bob = UserModel(
            username='bob', email='bob@example.com', hashed_password=hashed, is_verified=True
        )
        session.add_all([alice, bob])
        await session.flush()

        availability_repo = SeatAvailabilityRepoImpl(session=session)
        for cinema_id in (jakarta.id, surabaya.id):
            await availability_repo.create_showings(
                cinema_id=cinema_id, show_date=date(2026, 1, 15), show_time=SHOW_TIME
            )

        await session.commit()

        seeded = Catalog(
            cinema_id=jakarta.id,
            other_cinema_id=surabaya.id,
            standard_seat_id=standard.id,
            premium_seat_id=premium.id,
            vip_seat_id=vip.id,
            other_cinema_seat_id=other.id,
            alice_id=alice.id,
            bob_id=bob.id,
        )

    yield seeded


async def count_rows(model: type[Base]) -> int:
    async with Database().session() as session:
        return await session.scalar(select(func.count()).select_from(model)) or 0
