from datetime import date
from typing import List

from sqlalchemy import select, update
from sqlalchemy.dialects import postgresql, sqlite

from src.platform.database.base_repo import SqlAlchemyRepo
from src.platform.logging.loguru_io import Logger
from src.service.cinema_booking.app.interface.i_seat_availability_repo import (
    ISeatAvailabilityRepo,
)
from src.service.cinema_booking.domain.entity.seat_entity import SeatAvailability
from src.service.cinema_booking.driven_adapter.model import SeatAvailabilityModel, SeatModel
from src.service.cinema_booking.driven_adapter.repo.orm_mapper import (
    seat_availability_to_entity,
)


_UPSERT_INSERTS = {
    'postgresql': postgresql.insert,
    'sqlite': sqlite.insert,
}


class SeatAvailabilityRepoImpl(SqlAlchemyRepo, ISeatAvailabilityRepo):
    @Logger.io
    async def set_availability(
        self,
        *,
        cinema_id: int,
        seat_id: int,
        show_date: date,
        show_time: str,
        is_available: bool,
    ) -> None:
        async with self._get_session('set seat availability') as session:
            dialect = session.get_bind().dialect.name
            insert = _UPSERT_INSERTS.get(dialect)
            if insert is not None:
                stmt = insert(SeatAvailabilityModel).values(
                    cinema_id=cinema_id,
                    seat_id=seat_id,
                    show_date=show_date,
                    show_time=show_time,
                    is_available=is_available,
                )
                await session.execute(
                    stmt.on_conflict_do_update(
                        index_elements=['seat_id', 'show_date', 'show_time'],
                        set_={'is_available': is_available, 'cinema_id': cinema_id},
                    )
                )
                return

            # Dialects without ON CONFLICT: update, insert when nothing matched
            result = await session.execute(
                update(SeatAvailabilityModel)
                .where(
                    SeatAvailabilityModel.seat_id == seat_id,
                    SeatAvailabilityModel.show_date == show_date,
                    SeatAvailabilityModel.show_time == show_time,
                )
                .values(is_available=is_available, cinema_id=cinema_id)
            )
            if result.rowcount == 0:  # type: ignore[attr-defined]
                session.add(
                    SeatAvailabilityModel(
                        cinema_id=cinema_id,
                        seat_id=seat_id,
                        show_date=show_date,
                        show_time=show_time,
                        is_available=is_available,
                    )
                )
                await session.flush()

    @Logger.io
    async def get_availability(
        self, *, cinema_id: int, show_date: date, show_time: str
    ) -> List[SeatAvailability]:
        async with self._get_session('get seat availability') as session:
            result = await session.execute(
                select(SeatAvailabilityModel, SeatModel)
                .join(SeatModel, SeatModel.id == SeatAvailabilityModel.seat_id)
                .where(
                    SeatAvailabilityModel.cinema_id == cinema_id,
                    SeatAvailabilityModel.show_date == show_date,
                    SeatAvailabilityModel.show_time == show_time,
                )
                .order_by(SeatModel.row_number, SeatModel.seat_number)
            )
            return [seat_availability_to_entity(row, seat) for row, seat in result.all()]

    @Logger.io
    async def create_showings(self, *, cinema_id: int, show_date: date, show_time: str) -> int:
        async with self._get_session('create showings') as session:
            seat_ids = (
                await session.scalars(select(SeatModel.id).where(SeatModel.cinema_id == cinema_id))
            ).all()
            existing = set(
                (
                    await session.scalars(
                        select(SeatAvailabilityModel.seat_id).where(
                            SeatAvailabilityModel.cinema_id == cinema_id,
                            SeatAvailabilityModel.show_date == show_date,
                            SeatAvailabilityModel.show_time == show_time,
                        )
                    )
                ).all()
            )

            new_rows = [
                SeatAvailabilityModel(
                    cinema_id=cinema_id,
                    seat_id=seat_id,
                    show_date=show_date,
                    show_time=show_time,
                    is_available=True,
                )
                for seat_id in seat_ids
                if seat_id not in existing
            ]
            session.add_all(new_rows)
            await session.flush()
            return len(new_rows)
