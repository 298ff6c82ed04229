"""Application layer DTOs"""

from src.service.cinema_booking.app.dto.booking_history_item import BookingHistoryItem
from src.service.cinema_booking.app.dto.seat_availability_result import SeatAvailabilityResult

__all__ = [
    'BookingHistoryItem',
    'SeatAvailabilityResult',
]
