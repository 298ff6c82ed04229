from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.cinema_booking.app.interface.i_payment_method_query_repo import (
    IPaymentMethodQueryRepo,
)
from src.service.cinema_booking.domain.entity.payment_entity import PaymentMethod


class ListPaymentMethodsUseCase:
    def __init__(self, *, payment_method_query_repo: IPaymentMethodQueryRepo) -> None:
        self.payment_method_query_repo = payment_method_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        payment_method_query_repo: IPaymentMethodQueryRepo = Depends(
            Provide[Container.payment_method_query_repo]
        ),
    ) -> Self:
        return cls(payment_method_query_repo=payment_method_query_repo)

    @Logger.io
    async def list_payment_methods(self) -> List[PaymentMethod]:
        return await self.payment_method_query_repo.list_active()
