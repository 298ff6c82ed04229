from typing import List, Tuple

from sqlalchemy import func, select

from src.platform.database.base_repo import SqlAlchemyRepo
from src.platform.logging.loguru_io import Logger
from src.service.cinema_booking.app.dto.booking_history_item import BookingHistoryItem
from src.service.cinema_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.cinema_booking.domain.entity.booking_entity import BookingStatus, PaymentStatus
from src.service.cinema_booking.domain.value_object.pagination import PageRequest
from src.service.cinema_booking.driven_adapter.model import BookingModel, CinemaModel, SeatModel


class BookingQueryRepoImpl(SqlAlchemyRepo, IBookingQueryRepo):
    @staticmethod
    def _to_history_item(
        db_booking: BookingModel, cinema_name: str, seat_number: str
    ) -> BookingHistoryItem:
        return BookingHistoryItem(
            id=db_booking.id,
            user_id=db_booking.user_id,
            cinema_id=db_booking.cinema_id,
            cinema_name=cinema_name,
            seat_id=db_booking.seat_id,
            seat_number=seat_number,
            show_date=db_booking.show_date,
            show_time=db_booking.show_time,
            status=BookingStatus(db_booking.status),
            payment_status=PaymentStatus(db_booking.payment_status),
            total_price=db_booking.total_price,
            payment_method=db_booking.payment_method,
            booking_date=db_booking.booking_date,
        )

    @Logger.io
    async def list_by_user(
        self, *, user_id: int, page_request: PageRequest
    ) -> Tuple[List[BookingHistoryItem], int]:
        async with self._get_session('list user bookings') as session:
            total = await session.scalar(
                select(func.count(BookingModel.id)).where(BookingModel.user_id == user_id)
            )
            result = await session.execute(
                select(BookingModel, CinemaModel.name, SeatModel.seat_number)
                .join(CinemaModel, CinemaModel.id == BookingModel.cinema_id)
                .join(SeatModel, SeatModel.id == BookingModel.seat_id)
                .where(BookingModel.user_id == user_id)
                .order_by(BookingModel.booking_date.desc(), BookingModel.id.desc())
                .offset(page_request.offset)
                .limit(page_request.limit)
            )
            items = [
                self._to_history_item(db_booking, cinema_name, seat_number)
                for db_booking, cinema_name, seat_number in result.all()
            ]

        return items, total or 0
