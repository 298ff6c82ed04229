import time
from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import BookingMetrics, result_label
from src.service.cinema_booking.app.interface.i_booking_notifier import (
    IBookingNotifier,
    NotificationKind,
)
from src.service.cinema_booking.domain.entity.booking_entity import SEAT_ALREADY_BOOKED, Booking
from src.service.cinema_booking.domain.value_object.showing import parse_show_date


class CreateBookingUseCase:
    """
    Reserve one seat for one showing.

    Flow (first failure aborts, nothing is written):
    1. Parse the show date
    2. Load seat and cinema, check the seat belongs to the cinema
    3. Conflict check against the booking ledger
    4. Insert the booking and mark the availability row taken
    5. Commit, then emit booking_confirmed (fire-and-forget)

    Steps 3-5 share one transaction. A concurrent winner surfaces either in the
    conflict check or as a unique-index violation on insert; both are Conflict.
    """

    def __init__(
        self,
        *,
        uow_factory: Callable[[], AbstractUnitOfWork],
        notifier: IBookingNotifier,
        booking_metrics: BookingMetrics,
    ) -> None:
        self.uow_factory = uow_factory
        self.notifier = notifier
        self.booking_metrics = booking_metrics
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
        notifier: IBookingNotifier = Depends(Provide[Container.booking_notifier]),
        booking_metrics: BookingMetrics = Depends(Provide[Container.booking_metrics]),
    ) -> Self:
        return cls(uow_factory=uow_factory, notifier=notifier, booking_metrics=booking_metrics)

    @Logger.io
    async def create_booking(
        self,
        *,
        user_id: int,
        cinema_id: int,
        seat_id: int,
        show_date: str,
        show_time: str,
        payment_method: str,
    ) -> Booking:
        start = time.perf_counter()
        error: BaseException | None = None
        try:
            return await self._create_booking(
                user_id=user_id,
                cinema_id=cinema_id,
                seat_id=seat_id,
                show_date=show_date,
                show_time=show_time,
                payment_method=payment_method,
            )
        except Exception as e:
            error = e
            raise
        finally:
            self.booking_metrics.record_booking(
                cinema_id=cinema_id,
                result=result_label(error),
                duration=time.perf_counter() - start,
            )

    async def _create_booking(
        self,
        *,
        user_id: int,
        cinema_id: int,
        seat_id: int,
        show_date: str,
        show_time: str,
        payment_method: str,
    ) -> Booking:
        with self.tracer.start_as_current_span(
            'use_case.create_booking',
            attributes={
                'user.id': user_id,
                'cinema.id': cinema_id,
                'seat.id': seat_id,
                'showing.date': show_date,
                'showing.time': show_time,
            },
        ):
            parsed_date = parse_show_date(show_date)

            async with self.uow_factory() as uow:
                seat = await uow.catalog_query_repo.get_seat_by_id(seat_id=seat_id)
                if seat is None:
                    raise NotFoundError('seat not found')

                cinema = await uow.catalog_query_repo.get_cinema_by_id(cinema_id=cinema_id)
                if cinema is None:
                    raise NotFoundError('cinema not found')

                booking = Booking.create(
                    user_id=user_id,
                    cinema=cinema,
                    seat=seat,
                    show_date=parsed_date,
                    show_time=show_time,
                    payment_method=payment_method,
                )

                if await uow.booking_command_repo.is_seat_booked(
                    seat_id=seat_id, show_date=parsed_date, show_time=show_time
                ):
                    raise ConflictError(SEAT_ALREADY_BOOKED)

                booking = await uow.booking_command_repo.create(booking=booking)
                await uow.seat_availability_repo.set_availability(
                    cinema_id=cinema_id,
                    seat_id=seat_id,
                    show_date=parsed_date,
                    show_time=show_time,
                    is_available=False,
                )
                await uow.commit()

            Logger.base.info(
                f'🎟️ [CREATE-BOOKING] Booking {booking.id} created: user {user_id}, '
                f'seat {seat.seat_number} @ {cinema.name}, {parsed_date} {show_time}'
            )

            self.notifier.notify(
                NotificationKind.BOOKING_CONFIRMED,
                {
                    'booking_id': booking.id,
                    'user_id': user_id,
                    'cinema_name': cinema.name,
                    'seat_numbers': [seat.seat_number],
                    'show_date': parsed_date.isoformat(),
                    'show_time': show_time,
                },
            )
            return booking
