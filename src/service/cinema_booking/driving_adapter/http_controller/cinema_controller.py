from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from src.platform.logging.loguru_io import Logger
from src.service.cinema_booking.app.query.get_cinema_use_case import GetCinemaUseCase
from src.service.cinema_booking.app.query.get_seat_availability_use_case import (
    GetSeatAvailabilityUseCase,
)
from src.service.cinema_booking.app.query.list_cinemas_use_case import ListCinemasUseCase
from src.service.cinema_booking.app.query.list_payment_methods_use_case import (
    ListPaymentMethodsUseCase,
)
from src.service.cinema_booking.driving_adapter.http_controller.deadline import request_deadline
from src.service.cinema_booking.driving_adapter.http_controller.schema.cinema_schema import (
    CinemaListResponse,
    CinemaResponse,
    SeatAvailabilityResponse,
    SeatMapResponse,
)
from src.service.cinema_booking.driving_adapter.http_controller.schema.payment_schema import (
    PaymentMethodResponse,
)


router = APIRouter()


@router.get('/cinemas', response_model=CinemaListResponse)
@Logger.io
async def list_cinemas(
    page: Optional[int] = None,
    limit: Optional[int] = None,
    city: Optional[str] = None,
    name: Optional[str] = None,
    use_case: ListCinemasUseCase = Depends(ListCinemasUseCase.depends),
) -> CinemaListResponse:
    with request_deadline():
        result = await use_case.list_cinemas(page=page, limit=limit, city=city, name=name)
    return CinemaListResponse(
        data=[CinemaResponse.model_validate(cinema) for cinema in result.data],
        page=result.page,
        limit=result.limit,
        total=result.total,
        total_pages=result.total_pages,
    )


@router.get('/cinemas/{cinema_id}', response_model=CinemaResponse)
@Logger.io
async def get_cinema(
    cinema_id: int,
    use_case: GetCinemaUseCase = Depends(GetCinemaUseCase.depends),
) -> CinemaResponse:
    with request_deadline():
        cinema = await use_case.get_cinema(cinema_id=cinema_id)
    return CinemaResponse.model_validate(cinema)


@router.get('/cinemas/{cinema_id}/seats', response_model=SeatMapResponse)
@Logger.io
async def get_seat_availability(
    cinema_id: int,
    date: str = Query(..., description='YYYY-MM-DD'),
    time: str = Query(..., min_length=1),
    use_case: GetSeatAvailabilityUseCase = Depends(GetSeatAvailabilityUseCase.depends),
) -> SeatMapResponse:
    with request_deadline():
        result = await use_case.get_seat_availability(
            cinema_id=cinema_id, show_date=date, show_time=time
        )
    return SeatMapResponse(
        cinema_id=result.cinema_id,
        show_date=result.show_date,
        show_time=result.show_time,
        available_seats=[
            SeatAvailabilityResponse.model_validate(row) for row in result.available_seats
        ],
        unavailable_seats=[
            SeatAvailabilityResponse.model_validate(row) for row in result.unavailable_seats
        ],
        total_available=result.total_available,
        total_unavailable=result.total_unavailable,
    )


@router.get('/payment-methods', response_model=List[PaymentMethodResponse])
@Logger.io
async def list_payment_methods(
    use_case: ListPaymentMethodsUseCase = Depends(ListPaymentMethodsUseCase.depends),
) -> List[PaymentMethodResponse]:
    with request_deadline():
        methods = await use_case.list_payment_methods()
    return [PaymentMethodResponse.model_validate(method) for method in methods]
