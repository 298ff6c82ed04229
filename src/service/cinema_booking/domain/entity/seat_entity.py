from datetime import date, datetime
from decimal import Decimal
from enum import StrEnum
from typing import Optional

import attrs


class SeatType(StrEnum):
    STANDARD = 'standard'
    PREMIUM = 'premium'
    VIP = 'vip'


@attrs.define
class Seat:
    """Catalog seat. Price and type never change after creation."""

    cinema_id: int
    seat_number: str
    row_number: int
    seat_type: SeatType
    price: Decimal
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def belongs_to(self, cinema_id: Optional[int]) -> bool:
        return cinema_id is not None and self.cinema_id == cinema_id


@attrs.define
class SeatAvailability:
    """
    Per-showing availability flag, a derived index of the booking ledger.

    A missing row means the showing is not offered.
    """

    cinema_id: int
    seat_id: int
    show_date: date
    show_time: str
    is_available: bool = True
    id: Optional[int] = None
    seat: Optional[Seat] = None
    updated_at: Optional[datetime] = None
