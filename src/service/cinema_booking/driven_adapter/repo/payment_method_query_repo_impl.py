from typing import List, Optional

from sqlalchemy import select

from src.platform.database.base_repo import SqlAlchemyRepo
from src.platform.logging.loguru_io import Logger
from src.service.cinema_booking.app.interface.i_payment_method_query_repo import (
    IPaymentMethodQueryRepo,
)
from src.service.cinema_booking.domain.entity.payment_entity import PaymentMethod
from src.service.cinema_booking.driven_adapter.model import PaymentMethodModel
from src.service.cinema_booking.driven_adapter.repo.orm_mapper import payment_method_to_entity


class PaymentMethodQueryRepoImpl(SqlAlchemyRepo, IPaymentMethodQueryRepo):
    @Logger.io
    async def get_active_by_name(self, *, name: str) -> Optional[PaymentMethod]:
        async with self._get_session('get payment method') as session:
            db_method = await session.scalar(
                select(PaymentMethodModel).where(
                    PaymentMethodModel.name == name,
                    PaymentMethodModel.is_active.is_(True),
                )
            )
            return payment_method_to_entity(db_method) if db_method else None

    @Logger.io
    async def list_active(self) -> List[PaymentMethod]:
        async with self._get_session('list payment methods') as session:
            result = await session.scalars(
                select(PaymentMethodModel)
                .where(PaymentMethodModel.is_active.is_(True))
                .order_by(PaymentMethodModel.name)
            )
            return [payment_method_to_entity(row) for row in result.all()]
