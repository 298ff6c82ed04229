from datetime import date
from typing import List

import attrs

from src.service.cinema_booking.domain.entity.seat_entity import SeatAvailability


@attrs.define(frozen=True)
class SeatAvailabilityResult:
    cinema_id: int
    show_date: date
    show_time: str
    available_seats: List[SeatAvailability]
    unavailable_seats: List[SeatAvailability]

    @property
    def total_available(self) -> int:
        return len(self.available_seats)

    @property
    def total_unavailable(self) -> int:
        return len(self.unavailable_seats)

    @classmethod
    def partition(
        cls, *, cinema_id: int, show_date: date, show_time: str, rows: List[SeatAvailability]
    ) -> 'SeatAvailabilityResult':
        return cls(
            cinema_id=cinema_id,
            show_date=show_date,
            show_time=show_time,
            available_seats=[row for row in rows if row.is_available],
            unavailable_seats=[row for row in rows if not row.is_available],
        )
