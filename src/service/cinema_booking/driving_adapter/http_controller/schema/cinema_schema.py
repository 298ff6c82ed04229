from datetime import date
from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict

from src.service.cinema_booking.domain.entity.seat_entity import SeatType


class CinemaResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    location: str
    city: str
    address: str
    total_seats: int
    image_url: str


class CinemaListResponse(BaseModel):
    data: List[CinemaResponse]
    page: int
    limit: int
    total: int
    total_pages: int


class SeatResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    cinema_id: int
    seat_number: str
    row_number: int
    seat_type: SeatType
    price: Decimal


class SeatAvailabilityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    seat_id: int
    is_available: bool
    seat: SeatResponse


class SeatMapResponse(BaseModel):
    cinema_id: int
    show_date: date
    show_time: str
    available_seats: List[SeatAvailabilityResponse]
    unavailable_seats: List[SeatAvailabilityResponse]
    total_available: int
    total_unavailable: int
