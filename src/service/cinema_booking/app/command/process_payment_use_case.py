import time
from decimal import Decimal
from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import BookingMetrics, result_label
from src.service.cinema_booking.app.interface.i_booking_notifier import (
    IBookingNotifier,
    NotificationKind,
)
from src.service.cinema_booking.domain.entity.payment_entity import Payment


class ProcessPaymentUseCase:
    """
    Pay for a pending booking (no external gateway, payment always succeeds).

    Every check runs before the first write, so a rejected payment leaves
    both the booking and the payments table untouched.
    """

    def __init__(
        self,
        *,
        uow_factory: Callable[[], AbstractUnitOfWork],
        notifier: IBookingNotifier,
        booking_metrics: BookingMetrics,
    ) -> None:
        self.uow_factory = uow_factory
        self.notifier = notifier
        self.booking_metrics = booking_metrics
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
        notifier: IBookingNotifier = Depends(Provide[Container.booking_notifier]),
        booking_metrics: BookingMetrics = Depends(Provide[Container.booking_metrics]),
    ) -> Self:
        return cls(uow_factory=uow_factory, notifier=notifier, booking_metrics=booking_metrics)

    @Logger.io
    async def process_payment(
        self,
        *,
        user_id: int,
        booking_id: int,
        payment_method: str,
        amount: Decimal,
    ) -> Payment:
        start = time.perf_counter()
        error: BaseException | None = None
        try:
            return await self._process_payment(
                user_id=user_id,
                booking_id=booking_id,
                payment_method=payment_method,
                amount=amount,
            )
        except Exception as e:
            error = e
            raise
        finally:
            self.booking_metrics.record_payment(
                payment_method=payment_method,
                result=result_label(error),
                duration=time.perf_counter() - start,
            )

    async def _process_payment(
        self,
        *,
        user_id: int,
        booking_id: int,
        payment_method: str,
        amount: Decimal,
    ) -> Payment:
        with self.tracer.start_as_current_span(
            'use_case.process_payment',
            attributes={
                'user.id': user_id,
                'booking.id': booking_id,
                'payment.method': payment_method,
            },
        ):
            async with self.uow_factory() as uow:
                booking = await uow.booking_command_repo.get_by_id(booking_id=booking_id)
                if booking is None:
                    raise NotFoundError('booking not found')

                booking.validate_owned_by(user_id)
                booking.validate_amount(amount)

                method = await uow.payment_method_query_repo.get_active_by_name(
                    name=payment_method
                )
                if method is None:
                    raise DomainError('invalid payment method')

                booking.validate_can_be_paid()

                payment = await uow.payment_command_repo.create(
                    payment=Payment.create_successful(
                        booking=booking, user_id=user_id, payment_method=method
                    )
                )
                await uow.booking_command_repo.update_payment_status(
                    booking=booking.mark_as_paid()
                )
                await uow.commit()

            Logger.base.info(
                f'💳 [PAYMENT] Booking {booking_id} paid by user {user_id}: '
                f'{payment.amount:.2f} via {method.name} ({payment.transaction_id})'
            )

            self.notifier.notify(
                NotificationKind.PAYMENT_CONFIRMED,
                {
                    'booking_id': booking_id,
                    'payment_id': payment.id,
                    'user_id': user_id,
                    'amount': payment.amount,
                    'payment_method': payment.payment_method,
                },
            )
            return payment
