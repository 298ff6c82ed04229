from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.cinema_booking.app.interface.i_catalog_query_repo import ICatalogQueryRepo
from src.service.cinema_booking.domain.entity.cinema_entity import Cinema
from src.service.cinema_booking.domain.value_object.pagination import (
    PageRequest,
    PaginatedResult,
)


class ListCinemasUseCase:
    def __init__(self, *, catalog_query_repo: ICatalogQueryRepo) -> None:
        self.catalog_query_repo = catalog_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        catalog_query_repo: ICatalogQueryRepo = Depends(Provide[Container.catalog_query_repo]),
    ) -> Self:
        return cls(catalog_query_repo=catalog_query_repo)

    @Logger.io
    async def list_cinemas(
        self,
        *,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        city: Optional[str] = None,
        name: Optional[str] = None,
    ) -> PaginatedResult[Cinema]:
        page_request = PageRequest.of(page, limit)
        cinemas, total = await self.catalog_query_repo.list_cinemas(
            page_request=page_request, city=city, name=name
        )
        return PaginatedResult.build(data=cinemas, total=total, page_request=page_request)
