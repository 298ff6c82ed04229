from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.cinema_booking.app.dto.seat_availability_result import SeatAvailabilityResult
from src.service.cinema_booking.app.interface.i_seat_availability_repo import (
    ISeatAvailabilityRepo,
)
from src.service.cinema_booking.domain.value_object.showing import parse_show_date


class GetSeatAvailabilityUseCase:
    def __init__(self, *, seat_availability_repo: ISeatAvailabilityRepo) -> None:
        self.seat_availability_repo = seat_availability_repo

    @classmethod
    @inject
    def depends(
        cls,
        seat_availability_repo: ISeatAvailabilityRepo = Depends(
            Provide[Container.seat_availability_query_repo]
        ),
    ) -> Self:
        return cls(seat_availability_repo=seat_availability_repo)

    @Logger.io
    async def get_seat_availability(
        self, *, cinema_id: int, show_date: str, show_time: str
    ) -> SeatAvailabilityResult:
        """
        Seat map of one showing, split into available and taken seats.

        An empty result means the showing is not offered.
        """
        parsed_date = parse_show_date(show_date)
        rows = await self.seat_availability_repo.get_availability(
            cinema_id=cinema_id, show_date=parsed_date, show_time=show_time
        )
        return SeatAvailabilityResult.partition(
            cinema_id=cinema_id, show_date=parsed_date, show_time=show_time, rows=rows
        )
