from typing import Optional

from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.cinema_booking.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.cinema_booking.app.command.process_payment_use_case import (
    ProcessPaymentUseCase,
)
from src.service.cinema_booking.app.query.list_user_bookings_use_case import (
    ListUserBookingsUseCase,
)
from src.service.cinema_booking.driving_adapter.http_controller.auth.current_user import (
    get_current_user_id,
)
from src.service.cinema_booking.driving_adapter.http_controller.deadline import request_deadline
from src.service.cinema_booking.driving_adapter.http_controller.schema.booking_schema import (
    BookingCreateRequest,
    BookingHistoryListResponse,
    BookingHistoryResponse,
    BookingResponse,
)
from src.service.cinema_booking.driving_adapter.http_controller.schema.payment_schema import (
    PaymentRequest,
    PaymentResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('/booking', response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_booking(
    request: BookingCreateRequest,
    user_id: int = Depends(get_current_user_id),
    use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
) -> BookingResponse:
    with tracer.start_as_current_span('controller.create_booking') as span:
        span.set_attribute('user_id', user_id)
        span.set_attribute('cinema_id', request.cinema_id)
        span.set_attribute('seat_id', request.seat_id)

        with request_deadline():
            booking = await use_case.create_booking(
                user_id=user_id,
                cinema_id=request.cinema_id,
                seat_id=request.seat_id,
                show_date=request.date,
                show_time=request.time,
                payment_method=request.payment_method,
            )
        return BookingResponse.model_validate(booking)


@router.get('/user/bookings', response_model=BookingHistoryListResponse)
@Logger.io
async def list_my_bookings(
    page: Optional[int] = None,
    limit: Optional[int] = None,
    user_id: int = Depends(get_current_user_id),
    use_case: ListUserBookingsUseCase = Depends(ListUserBookingsUseCase.depends),
) -> BookingHistoryListResponse:
    with request_deadline():
        result = await use_case.list_user_bookings(user_id=user_id, page=page, limit=limit)
    return BookingHistoryListResponse(
        data=[BookingHistoryResponse.model_validate(item) for item in result.data],
        page=result.page,
        limit=result.limit,
        total=result.total,
        total_pages=result.total_pages,
    )


@router.post('/pay', response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def pay(
    request: PaymentRequest,
    user_id: int = Depends(get_current_user_id),
    use_case: ProcessPaymentUseCase = Depends(ProcessPaymentUseCase.depends),
) -> PaymentResponse:
    with tracer.start_as_current_span('controller.process_payment') as span:
        span.set_attribute('user_id', user_id)
        span.set_attribute('booking_id', request.booking_id)

        with request_deadline():
            payment = await use_case.process_payment(
                user_id=user_id,
                booking_id=request.booking_id,
                payment_method=request.payment_method,
                amount=request.amount,
            )
        return PaymentResponse.model_validate(payment)
