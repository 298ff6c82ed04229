from abc import ABC, abstractmethod
from typing import List, Tuple

from src.service.cinema_booking.app.dto.booking_history_item import BookingHistoryItem
from src.service.cinema_booking.domain.value_object.pagination import PageRequest


class IBookingQueryRepo(ABC):
    @abstractmethod
    async def list_by_user(
        self, *, user_id: int, page_request: PageRequest
    ) -> Tuple[List[BookingHistoryItem], int]:
        """
        The user's bookings, newest booking_date first.

        Returns:
            (items on the requested page, total bookings of the user)
        """
        pass
