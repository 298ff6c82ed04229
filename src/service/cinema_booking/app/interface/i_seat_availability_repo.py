from abc import ABC, abstractmethod
from datetime import date
from typing import List

from src.service.cinema_booking.domain.entity.seat_entity import SeatAvailability


class ISeatAvailabilityRepo(ABC):
    """Per-showing seat availability flags"""

    @abstractmethod
    async def set_availability(
        self,
        *,
        cinema_id: int,
        seat_id: int,
        show_date: date,
        show_time: str,
        is_available: bool,
    ) -> None:
        """Upsert the flag for (seat_id, show_date, show_time)."""
        pass

    @abstractmethod
    async def get_availability(
        self, *, cinema_id: int, show_date: date, show_time: str
    ) -> List[SeatAvailability]:
        """
        Every offered row of the showing with its seat loaded.

        Ordered by row_number, then seat_number.
        """
        pass

    @abstractmethod
    async def create_showings(self, *, cinema_id: int, show_date: date, show_time: str) -> int:
        """
        Offer every seat of the cinema for one showing.

        Returns:
            Number of rows inserted; existing rows are skipped
        """
        pass
