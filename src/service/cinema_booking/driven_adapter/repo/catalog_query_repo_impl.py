from typing import List, Optional, Tuple

from sqlalchemy import func, select

from src.platform.database.base_repo import SqlAlchemyRepo
from src.platform.logging.loguru_io import Logger
from src.service.cinema_booking.app.interface.i_catalog_query_repo import ICatalogQueryRepo
from src.service.cinema_booking.domain.entity.cinema_entity import Cinema
from src.service.cinema_booking.domain.entity.seat_entity import Seat
from src.service.cinema_booking.domain.value_object.pagination import PageRequest
from src.service.cinema_booking.driven_adapter.model import CinemaModel, SeatModel
from src.service.cinema_booking.driven_adapter.repo.orm_mapper import (
    cinema_to_entity,
    seat_to_entity,
)


class CatalogQueryRepoImpl(SqlAlchemyRepo, ICatalogQueryRepo):
    @Logger.io
    async def get_seat_by_id(self, *, seat_id: int) -> Optional[Seat]:
        async with self._get_session('get seat') as session:
            db_seat = await session.get(SeatModel, seat_id)
            return seat_to_entity(db_seat) if db_seat else None

    @Logger.io
    async def get_cinema_by_id(self, *, cinema_id: int) -> Optional[Cinema]:
        async with self._get_session('get cinema') as session:
            db_cinema = await session.get(CinemaModel, cinema_id)
            return cinema_to_entity(db_cinema) if db_cinema else None

    @Logger.io
    async def list_cinemas(
        self,
        *,
        page_request: PageRequest,
        city: Optional[str] = None,
        name: Optional[str] = None,
    ) -> Tuple[List[Cinema], int]:
        stmt = select(CinemaModel)
        if city:
            stmt = stmt.where(CinemaModel.city.ilike(f'%{city}%'))
        if name:
            stmt = stmt.where(CinemaModel.name.ilike(f'%{name}%'))

        async with self._get_session('list cinemas') as session:
            total = await session.scalar(select(func.count()).select_from(stmt.subquery()))
            result = await session.execute(
                stmt.order_by(CinemaModel.name, CinemaModel.id)
                .offset(page_request.offset)
                .limit(page_request.limit)
            )
            cinemas = [cinema_to_entity(row) for row in result.scalars().all()]

        return cinemas, total or 0
