"""
Booking Command Repository Interface

Write side of the booking ledger. The ledger is the source of truth for
whether a showing is claimed.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from src.service.cinema_booking.domain.entity.booking_entity import Booking


class IBookingCommandRepo(ABC):
    @abstractmethod
    async def is_seat_booked(self, *, seat_id: int, show_date: date, show_time: str) -> bool:
        """True iff a non-cancelled booking exists for exactly this showing."""
        pass

    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        """
        Insert and flush the booking.

        Raises:
            ConflictError: another active booking already holds the showing
        """
        pass

    @abstractmethod
    async def get_by_id(self, *, booking_id: int) -> Optional[Booking]:
        pass

    @abstractmethod
    async def update_payment_status(self, *, booking: Booking) -> Booking:
        """Persist status and payment_status of an already stored booking."""
        pass
