from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from src.service.cinema_booking.domain.entity.cinema_entity import Cinema
from src.service.cinema_booking.domain.entity.seat_entity import Seat
from src.service.cinema_booking.domain.value_object.pagination import PageRequest


class ICatalogQueryRepo(ABC):
    """Read-only access to cinemas and their seats"""

    @abstractmethod
    async def get_seat_by_id(self, *, seat_id: int) -> Optional[Seat]:
        pass

    @abstractmethod
    async def get_cinema_by_id(self, *, cinema_id: int) -> Optional[Cinema]:
        pass

    @abstractmethod
    async def list_cinemas(
        self,
        *,
        page_request: PageRequest,
        city: Optional[str] = None,
        name: Optional[str] = None,
    ) -> Tuple[List[Cinema], int]:
        """
        Cinemas ordered by name, filtered case-insensitively by substring.

        Returns:
            (cinemas on the requested page, total matching cinemas)
        """
        pass
