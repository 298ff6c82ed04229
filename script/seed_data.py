#!/usr/bin/env python3
"""
Database Seed Script
Populate demo data into the database

Features:
1. Create Cinemas - 5 cinemas, 5 rows x 30 seats each (standard / premium / vip)
2. Create Showings - seat availability for the next 10 days at 5 show times
3. Create Payment Methods - every supported payment method type
4. Create Demo User - a verified account ready to log in

Notes:
- Run `python script/reset_database.py` first for an empty schema
- Re-running on a seeded database fails on the unique constraints
"""

import asyncio
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal

from pydantic import SecretStr
from sqlalchemy import func, select

from src.platform.database.orm_db_setting import Database, dispose_engine
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.cinema_booking.domain.entity.payment_entity import PaymentMethodType
from src.service.cinema_booking.domain.entity.seat_entity import SeatType
from src.service.cinema_booking.domain.entity.user_entity import UserEntity
from src.service.cinema_booking.driven_adapter.model import (
    BookingModel,
    CinemaModel,
    PaymentMethodModel,
    SeatAvailabilityModel,
    SeatModel,
    UserModel,
)
from src.service.cinema_booking.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)


ROWS = 5
SEATS_PER_ROW = 30
SHOWING_DAYS = 10
SHOW_TIMES = ['10:00', '13:00', '16:00', '19:00', '21:00']

DEMO_USERNAME = 'demo'
DEMO_EMAIL = 'demo@cinema.test'
DEFAULT_PASSWORD = 'P@ssw0rd'

SEEDED_MODELS = [
    CinemaModel,
    SeatModel,
    SeatAvailabilityModel,
    PaymentMethodModel,
    UserModel,
    BookingModel,
]


@dataclass
class CinemaConfig:
    """Cinema seed configuration"""

    name: str
    location: str
    city: str
    address: str
    total_seats: int
    image_url: str


CINEMAS = [
    CinemaConfig(
        name='CGV Cinemas - Jakarta',
        location='Blok M Plaza',
        city='Jakarta',
        address='Jl. Melawai No. 1, Blok M, Jakarta Selatan',
        total_seats=150,
        image_url='https://via.placeholder.com/300x200?text=CGV+Jakarta',
    ),
    CinemaConfig(
        name='Cinemaxx - Surabaya',
        location='Pakuwon Indah',
        city='Surabaya',
        address='Jl. Raya Pakuwon Indah, Surabaya',
        total_seats=200,
        image_url='https://via.placeholder.com/300x200?text=Cinemaxx+Surabaya',
    ),
    CinemaConfig(
        name='Premiere Cinema - Bandung',
        location='Bandung Indah Plaza',
        city='Bandung',
        address='Jl. Ir. H. Juanda No. 1, Bandung',
        total_seats=120,
        image_url='https://via.placeholder.com/300x200?text=Premiere+Bandung',
    ),
    CinemaConfig(
        name='TheScreen Cinemas - Medan',
        location='Medan Fair',
        city='Medan',
        address='Jl. Jend. Gatot Subroto No. 1, Medan',
        total_seats=180,
        image_url='https://via.placeholder.com/300x200?text=TheScreen+Medan',
    ),
    CinemaConfig(
        name='Studio 21 - Bali',
        location='Denpasar',
        city='Bali',
        address='Jl. Raya Puputan No. 1, Denpasar',
        total_seats=160,
        image_url='https://via.placeholder.com/300x200?text=Studio21+Bali',
    ),
]


def seat_tier(row: int) -> tuple[SeatType, Decimal]:
    """Rows 1-2 standard, rows 3-4 premium, row 5 vip"""
    if row == 5:
        return SeatType.VIP, Decimal('100000.00')
    if row >= 3:
        return SeatType.PREMIUM, Decimal('70000.00')
    return SeatType.STANDARD, Decimal('50000.00')


def seat_label(row: int, seat_num: int) -> str:
    # 1A .. 1Z, then the characters following 'Z'
    return f'{row}{chr(ord("A") + seat_num - 1)}'


def build_seats(cinema_id: int) -> list[SeatModel]:
    seats = []
    for row in range(1, ROWS + 1):
        seat_type, price = seat_tier(row)
        for seat_num in range(1, SEATS_PER_ROW + 1):
            seats.append(
                SeatModel(
                    cinema_id=cinema_id,
                    seat_number=seat_label(row, seat_num),
                    row_number=row,
                    seat_type=seat_type.value,
                    price=price,
                )
            )
    return seats


async def create_cinemas(uow: SqlAlchemyUnitOfWork) -> list[int]:
    print(f'🎬 Creating {len(CINEMAS)} cinemas...')
    assert uow.session is not None

    cinema_ids = []
    for config in CINEMAS:
        cinema = CinemaModel(
            name=config.name,
            location=config.location,
            city=config.city,
            address=config.address,
            total_seats=config.total_seats,
            image_url=config.image_url,
        )
        uow.session.add(cinema)
        await uow.session.flush()

        uow.session.add_all(build_seats(cinema.id))
        await uow.session.flush()

        print(
            f'   ✅ Created cinema: ID={cinema.id}, Name={config.name} '
            f'({ROWS * SEATS_PER_ROW} seats)'
        )
        cinema_ids.append(cinema.id)

    return cinema_ids


async def create_showings(uow: SqlAlchemyUnitOfWork, cinema_ids: list[int]) -> None:
    print(f'📅 Creating showings for {SHOWING_DAYS} days x {len(SHOW_TIMES)} times...')
    today = date.today()

    for cinema_id in cinema_ids:
        created = 0
        for offset in range(SHOWING_DAYS):
            show_date = today + timedelta(days=offset)
            for show_time in SHOW_TIMES:
                created += await uow.seat_availability_repo.create_showings(
                    cinema_id=cinema_id, show_date=show_date, show_time=show_time
                )
        print(f'   ✅ Cinema {cinema_id}: {created} availability rows')


async def create_payment_methods(uow: SqlAlchemyUnitOfWork) -> None:
    print('💳 Creating payment methods...')
    assert uow.session is not None

    for method_type in PaymentMethodType:
        uow.session.add(
            PaymentMethodModel(name=method_type.value, type=method_type.value, is_active=True)
        )
        print(f'   ✅ {method_type.value}')
    await uow.session.flush()


async def create_demo_user(uow: SqlAlchemyUnitOfWork) -> UserEntity:
    print('👤 Creating demo user...')
    hasher = BcryptPasswordHasher()

    user = await uow.user_command_repo.create(
        user_entity=UserEntity(
            username=DEMO_USERNAME,
            email=DEMO_EMAIL,
            hashed_password=hasher.hash_password(plain_password=SecretStr(DEFAULT_PASSWORD)),
            is_verified=True,
        )
    )
    print(f'   ✅ Created user: ID={user.id}, Username={user.username}')
    return user


async def verify_data() -> None:
    """Verify seeded data"""
    print('🔍 Verifying seeded data...')

    async with Database().session() as session:
        for model in SEEDED_MODELS:
            count = await session.scalar(select(func.count()).select_from(model))
            print(f'   {model.__tablename__} count: {count}')

    print('   ✅ Data verification completed!')


async def _seed_data() -> None:
    """Seed everything in a single transaction"""
    async with SqlAlchemyUnitOfWork(session_factory=Database().session) as uow:
        cinema_ids = await create_cinemas(uow)
        print()

        await create_showings(uow, cinema_ids)
        print()

        await create_payment_methods(uow)
        print()

        await create_demo_user(uow)
        print()

        await uow.commit()
        print('✅ All data committed successfully!')


async def main():
    print('🌱 Starting data seeding...')
    print('=' * 50)

    try:
        await _seed_data()
        await verify_data()

        print()
        print('=' * 50)
        print('🌱 Data seeding completed!')
        print(f'📋 Demo account: {DEMO_USERNAME} / {DEFAULT_PASSWORD}')

    except Exception as e:
        print(f'❌ Seeding failed: {e}')
        exit(1)

    finally:
        await dispose_engine()


if __name__ == '__main__':
    asyncio.run(main())
