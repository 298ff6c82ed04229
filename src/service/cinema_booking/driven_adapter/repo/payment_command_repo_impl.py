from sqlalchemy.exc import IntegrityError

from src.platform.database.base_repo import SqlAlchemyRepo, is_unique_violation
from src.platform.exception.exceptions import ConflictError, StorageError
from src.platform.logging.loguru_io import Logger
from src.service.cinema_booking.app.interface.i_payment_command_repo import IPaymentCommandRepo
from src.service.cinema_booking.domain.entity.booking_entity import BOOKING_ALREADY_PAID
from src.service.cinema_booking.domain.entity.payment_entity import Payment
from src.service.cinema_booking.driven_adapter.model import PaymentModel
from src.service.cinema_booking.driven_adapter.repo.orm_mapper import payment_to_entity


class PaymentCommandRepoImpl(SqlAlchemyRepo, IPaymentCommandRepo):
    @Logger.io
    async def create(self, *, payment: Payment) -> Payment:
        db_payment = PaymentModel(
            booking_id=payment.booking_id,
            user_id=payment.user_id,
            amount=payment.amount,
            payment_method=payment.payment_method,
            status=payment.status.value,
            transaction_id=payment.transaction_id,
        )
        try:
            async with self._get_session('create payment') as session:
                session.add(db_payment)
                await session.flush()
                await session.refresh(db_payment)
        except IntegrityError as e:
            if is_unique_violation(
                e, constraint='uq_payments_successful_booking', columns=('payments.booking_id',)
            ):
                raise ConflictError(BOOKING_ALREADY_PAID) from e
            raise StorageError(f'create payment failed: {e.orig}') from e

        return payment_to_entity(db_payment)
