from datetime import date, datetime
from decimal import Decimal
from typing import Optional

import attrs

from src.service.cinema_booking.domain.entity.booking_entity import BookingStatus, PaymentStatus


@attrs.define(frozen=True)
class BookingHistoryItem:
    """A booking joined with the cinema name and seat number it refers to."""

    id: int
    user_id: int
    cinema_id: int
    cinema_name: str
    seat_id: int
    seat_number: str
    show_date: date
    show_time: str
    status: BookingStatus
    payment_status: PaymentStatus
    total_price: Decimal
    payment_method: str
    booking_date: Optional[datetime] = None
