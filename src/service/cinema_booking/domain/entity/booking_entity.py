from datetime import date, datetime, timezone
from decimal import Decimal
from enum import StrEnum
from typing import Optional

import attrs

from src.platform.exception.exceptions import ConflictError, DomainError, ForbiddenError
from src.platform.logging.loguru_io import Logger
from src.service.cinema_booking.domain.entity.cinema_entity import Cinema
from src.service.cinema_booking.domain.entity.seat_entity import Seat
from src.service.cinema_booking.domain.value_object.showing import Showing


SEAT_ALREADY_BOOKED = 'seat is already booked for this date and time'
BOOKING_ALREADY_PAID = 'booking already paid'


class BookingStatus(StrEnum):
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'


class PaymentStatus(StrEnum):
    PENDING = 'pending'
    PAID = 'paid'
    FAILED = 'failed'


@attrs.define
class Booking:
    user_id: int
    cinema_id: int
    seat_id: int
    show_date: date
    show_time: str
    total_price: Decimal
    payment_method: str
    status: BookingStatus = BookingStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    booking_date: Optional[datetime] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        user_id: int,
        cinema: Cinema,
        seat: Seat,
        show_date: date,
        show_time: str,
        payment_method: str,
    ) -> 'Booking':
        """
        New reservation for one seat of one showing.

        The price is always the catalog price of the seat at creation time.

        Raises:
            DomainError: When the seat is not part of the cinema
        """
        if not seat.belongs_to(cinema.id):
            raise DomainError('seat does not belong to this cinema')

        now = datetime.now(timezone.utc)
        return cls(
            user_id=user_id,
            cinema_id=seat.cinema_id,
            seat_id=seat.id or 0,
            show_date=show_date,
            show_time=show_time,
            total_price=seat.price,
            payment_method=payment_method,
            status=BookingStatus.PENDING,
            payment_status=PaymentStatus.PENDING,
            booking_date=now,
            created_at=now,
            updated_at=now,
        )

    @property
    def showing(self) -> Showing:
        return Showing(
            cinema_id=self.cinema_id,
            seat_id=self.seat_id,
            show_date=self.show_date,
            show_time=self.show_time,
        )

    def validate_owned_by(self, user_id: int) -> None:
        if self.user_id != user_id:
            raise ForbiddenError('unauthorized to pay for this booking')

    def validate_amount(self, amount: Decimal) -> None:
        # Exact match, no tolerance
        if amount != self.total_price:
            raise DomainError(
                f'amount mismatch: expected {self.total_price:.2f}, got {amount:.2f}'
            )

    @Logger.io
    def validate_can_be_paid(self) -> None:
        """
        Raises:
            ConflictError: Booking already paid
            DomainError: When booking status does not allow payment
        """
        if self.payment_status == PaymentStatus.PAID:
            raise ConflictError(BOOKING_ALREADY_PAID)
        elif self.status == BookingStatus.CANCELLED:
            raise DomainError('Cannot pay for cancelled booking')
        elif self.status != BookingStatus.PENDING:
            raise DomainError('Booking is not in a payable state')

    @Logger.io
    def mark_as_paid(self) -> 'Booking':
        now = datetime.now(timezone.utc)
        return attrs.evolve(
            self,
            status=BookingStatus.CONFIRMED,
            payment_status=PaymentStatus.PAID,
            updated_at=now,
        )
