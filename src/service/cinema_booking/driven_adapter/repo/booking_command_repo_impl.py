from datetime import date
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from src.platform.database.base_repo import SqlAlchemyRepo, is_unique_violation
from src.platform.exception.exceptions import ConflictError, NotFoundError, StorageError
from src.platform.logging.loguru_io import Logger
from src.service.cinema_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.cinema_booking.domain.entity.booking_entity import (
    SEAT_ALREADY_BOOKED,
    Booking,
    BookingStatus,
)
from src.service.cinema_booking.driven_adapter.model import BookingModel
from src.service.cinema_booking.driven_adapter.repo.orm_mapper import booking_to_entity


class BookingCommandRepoImpl(SqlAlchemyRepo, IBookingCommandRepo):
    @Logger.io
    async def is_seat_booked(self, *, seat_id: int, show_date: date, show_time: str) -> bool:
        async with self._get_session('check seat booking') as session:
            booking_id = await session.scalar(
                select(BookingModel.id)
                .where(
                    BookingModel.seat_id == seat_id,
                    BookingModel.show_date == show_date,
                    BookingModel.show_time == show_time,
                    BookingModel.status != BookingStatus.CANCELLED.value,
                )
                .limit(1)
            )
            return booking_id is not None

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        db_booking = BookingModel(
            user_id=booking.user_id,
            cinema_id=booking.cinema_id,
            seat_id=booking.seat_id,
            show_date=booking.show_date,
            show_time=booking.show_time,
            booking_date=booking.booking_date,
            status=booking.status.value,
            total_price=booking.total_price,
            payment_method=booking.payment_method,
            payment_status=booking.payment_status.value,
        )
        try:
            async with self._get_session('create booking') as session:
                session.add(db_booking)
                await session.flush()
                await session.refresh(db_booking)
        except IntegrityError as e:
            # A concurrent transaction won the showing
            if is_unique_violation(
                e,
                constraint='uq_bookings_active_showing',
                columns=('bookings.seat_id', 'bookings.show_date', 'bookings.show_time'),
            ):
                raise ConflictError(SEAT_ALREADY_BOOKED) from e
            raise StorageError(f'create booking failed: {e.orig}') from e

        return booking_to_entity(db_booking)

    @Logger.io
    async def get_by_id(self, *, booking_id: int) -> Optional[Booking]:
        async with self._get_session('get booking') as session:
            db_booking = await session.get(BookingModel, booking_id)
            return booking_to_entity(db_booking) if db_booking else None

    @Logger.io
    async def update_payment_status(self, *, booking: Booking) -> Booking:
        async with self._get_session('update booking status') as session:
            db_booking = await session.get(BookingModel, booking.id)
            if db_booking is None:
                raise NotFoundError('booking not found')

            db_booking.status = booking.status.value
            db_booking.payment_status = booking.payment_status.value
            if booking.updated_at is not None:
                db_booking.updated_at = booking.updated_at
            await session.flush()
            return booking_to_entity(db_booking)
