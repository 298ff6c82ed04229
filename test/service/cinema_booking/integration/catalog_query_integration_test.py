from datetime import date
from typing import Callable

import pytest

from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import DomainError, NotFoundError
from src.service.cinema_booking.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.cinema_booking.app.query.get_cinema_use_case import GetCinemaUseCase
from src.service.cinema_booking.app.query.get_seat_availability_use_case import (
    GetSeatAvailabilityUseCase,
)
from src.service.cinema_booking.app.query.list_cinemas_use_case import ListCinemasUseCase
from src.service.cinema_booking.app.query.list_payment_methods_use_case import (
    ListPaymentMethodsUseCase,
)
from src.service.cinema_booking.driven_adapter.repo.catalog_query_repo_impl import (
    CatalogQueryRepoImpl,
)
from src.service.cinema_booking.driven_adapter.repo.payment_method_query_repo_impl import (
    PaymentMethodQueryRepoImpl,
)
from src.service.cinema_booking.driven_adapter.repo.seat_availability_repo_impl import (
    SeatAvailabilityRepoImpl,
)
from test.service.cinema_booking.integration.conftest import SHOW_DATE, SHOW_TIME, Catalog


@pytest.fixture
def catalog_repo() -> CatalogQueryRepoImpl:
    return CatalogQueryRepoImpl(session_factory=Database().session)


@pytest.fixture
def availability_repo() -> SeatAvailabilityRepoImpl:
    return SeatAvailabilityRepoImpl(session_factory=Database().session)


@pytest.mark.integration
class TestCinemaCatalog:
    @pytest.mark.asyncio
    async def test_list_cinemas__ordered_by_name(
        self, catalog_repo: CatalogQueryRepoImpl, catalog: Catalog
    ) -> None:
        result = await ListCinemasUseCase(catalog_query_repo=catalog_repo).list_cinemas()

        assert result.total == 2
        assert result.total_pages == 1
        assert [cinema.name for cinema in result.data] == [
            'CGV Cinemas - Jakarta',
            'Cinemaxx - Surabaya',
        ]

    @pytest.mark.asyncio
    async def test_list_cinemas__city_filter_is_case_insensitive(
        self, catalog_repo: CatalogQueryRepoImpl, catalog: Catalog
    ) -> None:
        result = await ListCinemasUseCase(catalog_query_repo=catalog_repo).list_cinemas(
            city='surabaya'
        )

        assert result.total == 1
        assert result.data[0].id == catalog.other_cinema_id

    @pytest.mark.asyncio
    async def test_list_cinemas__paging(
        self, catalog_repo: CatalogQueryRepoImpl, catalog: Catalog
    ) -> None:
        result = await ListCinemasUseCase(catalog_query_repo=catalog_repo).list_cinemas(
            page=2, limit=1
        )

        assert result.total == 2
        assert result.total_pages == 2
        assert [cinema.name for cinema in result.data] == ['Cinemaxx - Surabaya']

    @pytest.mark.asyncio
    async def test_get_cinema__not_found(
        self, catalog_repo: CatalogQueryRepoImpl, catalog: Catalog
    ) -> None:
        with pytest.raises(NotFoundError, match='cinema not found'):
            await GetCinemaUseCase(catalog_query_repo=catalog_repo).get_cinema(cinema_id=9999)


@pytest.mark.integration
class TestSeatAvailability:
    @pytest.mark.asyncio
    async def test_booked_seat_moves_to_unavailable(
        self,
        availability_repo: SeatAvailabilityRepoImpl,
        create_booking_use_case: CreateBookingUseCase,
        catalog: Catalog,
    ) -> None:
        use_case = GetSeatAvailabilityUseCase(seat_availability_repo=availability_repo)

        before = await use_case.get_seat_availability(
            cinema_id=catalog.cinema_id, show_date=SHOW_DATE, show_time=SHOW_TIME
        )
        assert before.total_available == 3
        assert before.total_unavailable == 0
        assert [row.seat.seat_number for row in before.available_seats if row.seat] == [
            '1A',
            '3A',
            '5A',
        ]

        await create_booking_use_case.create_booking(
            user_id=catalog.alice_id,
            cinema_id=catalog.cinema_id,
            seat_id=catalog.premium_seat_id,
            show_date=SHOW_DATE,
            show_time=SHOW_TIME,
            payment_method='cash',
        )

        after = await use_case.get_seat_availability(
            cinema_id=catalog.cinema_id, show_date=SHOW_DATE, show_time=SHOW_TIME
        )
        assert after.total_available == 2
        assert [row.seat_id for row in after.unavailable_seats] == [catalog.premium_seat_id]

    @pytest.mark.asyncio
    async def test_showing_not_offered__empty(
        self, availability_repo: SeatAvailabilityRepoImpl, catalog: Catalog
    ) -> None:
        result = await GetSeatAvailabilityUseCase(
            seat_availability_repo=availability_repo
        ).get_seat_availability(cinema_id=catalog.cinema_id, show_date=SHOW_DATE, show_time='08:00')

        assert result.total_available == 0
        assert result.total_unavailable == 0

    @pytest.mark.asyncio
    async def test_invalid_date(
        self, availability_repo: SeatAvailabilityRepoImpl, catalog: Catalog
    ) -> None:
        with pytest.raises(DomainError, match='invalid date format'):
            await GetSeatAvailabilityUseCase(
                seat_availability_repo=availability_repo
            ).get_seat_availability(
                cinema_id=catalog.cinema_id, show_date='15/01/2026', show_time=SHOW_TIME
            )

    @pytest.mark.asyncio
    async def test_set_availability__idempotent_upsert(
        self,
        availability_repo: SeatAvailabilityRepoImpl,
        uow_factory: Callable[[], AbstractUnitOfWork],
        catalog: Catalog,
    ) -> None:
        async with uow_factory() as uow:
            for _ in range(2):
                await uow.seat_availability_repo.set_availability(
                    cinema_id=catalog.cinema_id,
                    seat_id=catalog.vip_seat_id,
                    show_date=date(2026, 1, 15),
                    show_time=SHOW_TIME,
                    is_available=False,
                )
            await uow.commit()

        rows = await availability_repo.get_availability(
            cinema_id=catalog.cinema_id, show_date=date(2026, 1, 15), show_time=SHOW_TIME
        )
        assert len(rows) == 3
        assert [row.seat_id for row in rows if not row.is_available] == [catalog.vip_seat_id]

    @pytest.mark.asyncio
    async def test_create_showings__skips_existing_rows(
        self, availability_repo: SeatAvailabilityRepoImpl, catalog: Catalog
    ) -> None:
        created = await availability_repo.create_showings(
            cinema_id=catalog.cinema_id, show_date=date(2026, 1, 15), show_time=SHOW_TIME
        )

        assert created == 0


@pytest.mark.integration
class TestPaymentMethods:
    @pytest.mark.asyncio
    async def test_only_active_methods_listed(self, catalog: Catalog) -> None:
        methods = await ListPaymentMethodsUseCase(
            payment_method_query_repo=PaymentMethodQueryRepoImpl(
                session_factory=Database().session
            )
        ).list_payment_methods()

        assert [method.name for method in methods] == ['cash', 'credit_card']
