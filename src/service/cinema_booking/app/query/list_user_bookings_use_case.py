from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.cinema_booking.app.dto.booking_history_item import BookingHistoryItem
from src.service.cinema_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.cinema_booking.domain.value_object.pagination import (
    PageRequest,
    PaginatedResult,
)


class ListUserBookingsUseCase:
    def __init__(self, *, booking_query_repo: IBookingQueryRepo) -> None:
        self.booking_query_repo = booking_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
    ) -> Self:
        return cls(booking_query_repo=booking_query_repo)

    @Logger.io
    async def list_user_bookings(
        self, *, user_id: int, page: Optional[int] = None, limit: Optional[int] = None
    ) -> PaginatedResult[BookingHistoryItem]:
        page_request = PageRequest.of(page, limit)
        items, total = await self.booking_query_repo.list_by_user(
            user_id=user_id, page_request=page_request
        )
        return PaginatedResult.build(data=items, total=total, page_request=page_request)
