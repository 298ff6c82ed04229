from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.service.cinema_booking.domain.entity.booking_entity import BookingStatus, PaymentStatus


class BookingCreateRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'cinema_id': 1,
                'seat_id': 63,
                'date': '2026-01-15',
                'time': '19:00',
                'payment_method': 'cash',
            }
        }
    )

    cinema_id: int = Field(..., gt=0)
    seat_id: int = Field(..., gt=0)
    date: str = Field(..., description='YYYY-MM-DD')
    time: str = Field(..., min_length=1, max_length=10)
    payment_method: str = Field(..., min_length=1, max_length=50)


class BookingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    cinema_id: int
    seat_id: int
    show_date: date
    show_time: str
    status: BookingStatus
    payment_status: PaymentStatus
    total_price: Decimal
    payment_method: str
    booking_date: Optional[datetime] = None


class BookingHistoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    cinema_id: int
    cinema_name: str
    seat_id: int
    seat_number: str
    show_date: date
    show_time: str
    total_price: Decimal
    status: BookingStatus
    payment_status: PaymentStatus
    payment_method: str
    booking_date: Optional[datetime] = None


class BookingHistoryListResponse(BaseModel):
    data: List[BookingHistoryResponse]
    page: int
    limit: int
    total: int
    total_pages: int
