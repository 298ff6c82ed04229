"""
Unit tests for ProcessPaymentUseCase

Every rejection happens before the first write: no payment row, no booking update,
no commit, no notification.
"""

from datetime import date
from decimal import Decimal
from typing import Any
from unittest.mock import Mock

import attrs
import pytest

from src.platform.exception.exceptions import (
    ConflictError,
    DomainError,
    ForbiddenError,
    NotFoundError,
)
from src.service.cinema_booking.app.command.process_payment_use_case import (
    ProcessPaymentUseCase,
)
from src.service.cinema_booking.app.interface.i_booking_notifier import NotificationKind
from src.service.cinema_booking.domain.entity.booking_entity import (
    Booking,
    BookingStatus,
    PaymentStatus,
)
from src.service.cinema_booking.domain.entity.payment_entity import (
    Payment,
    PaymentMethod,
    PaymentMethodType,
    TransactionStatus,
)
from test.service.cinema_booking.unit.conftest import FakeUnitOfWork


OWNER_ID = 7
OTHER_USER_ID = 8


@pytest.fixture
def pending_booking(show_date: date) -> Booking:
    return Booking(
        id=42,
        user_id=OWNER_ID,
        cinema_id=1,
        seat_id=10,
        show_date=show_date,
        show_time='19:00',
        total_price=Decimal('70000.00'),
        payment_method='cash',
    )


@pytest.fixture
def process_payment_use_case(
    uow_factory: Any, mock_notifier: Mock, mock_booking_metrics: Mock
) -> ProcessPaymentUseCase:
    return ProcessPaymentUseCase(
        uow_factory=uow_factory,
        notifier=mock_notifier,
        booking_metrics=mock_booking_metrics,
    )


@pytest.fixture
def payable_uow(fake_uow: FakeUnitOfWork, pending_booking: Booking) -> FakeUnitOfWork:
    async def _persist(*, payment: Payment) -> Payment:
        return attrs.evolve(payment, id=5)

    fake_uow.booking_command_repo.get_by_id.return_value = pending_booking
    fake_uow.payment_method_query_repo.get_active_by_name.return_value = PaymentMethod(
        id=1, name='cash', type=PaymentMethodType.CASH
    )
    fake_uow.payment_command_repo.create.side_effect = _persist
    return fake_uow


def _assert_nothing_written(uow: FakeUnitOfWork, notifier: Mock) -> None:
    uow.payment_command_repo.create.assert_not_awaited()
    uow.booking_command_repo.update_payment_status.assert_not_awaited()
    assert uow.committed is False
    notifier.notify.assert_not_called()


@pytest.mark.unit
class TestProcessPaymentUseCase:
    @pytest.mark.asyncio
    async def test_process_payment_success(
        self,
        process_payment_use_case: ProcessPaymentUseCase,
        payable_uow: FakeUnitOfWork,
        mock_notifier: Mock,
    ) -> None:
        # Act
        payment = await process_payment_use_case.process_payment(
            user_id=OWNER_ID, booking_id=42, payment_method='cash', amount=Decimal('70000')
        )

        # Assert - payment recorded
        assert payment.id == 5
        assert payment.status == TransactionStatus.SUCCESS
        assert payment.amount == Decimal('70000.00')
        assert payment.transaction_id.startswith(f'TXN-42-{OWNER_ID}-')

        # Assert - booking confirmed in the same unit of work
        updated: Booking = payable_uow.booking_command_repo.update_payment_status.call_args.kwargs[
            'booking'
        ]
        assert updated.status == BookingStatus.CONFIRMED
        assert updated.payment_status == PaymentStatus.PAID
        assert payable_uow.committed is True

        # Assert - payment_confirmed notification
        kind, payload = mock_notifier.notify.call_args.args
        assert kind == NotificationKind.PAYMENT_CONFIRMED
        assert payload['payment_id'] == 5
        assert payload['amount'] == Decimal('70000.00')

    @pytest.mark.asyncio
    async def test_process_payment_fail__booking_not_found(
        self,
        process_payment_use_case: ProcessPaymentUseCase,
        payable_uow: FakeUnitOfWork,
        mock_notifier: Mock,
    ) -> None:
        payable_uow.booking_command_repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError, match='booking not found'):
            await process_payment_use_case.process_payment(
                user_id=OWNER_ID, booking_id=999, payment_method='cash', amount=Decimal('70000')
            )

        _assert_nothing_written(payable_uow, mock_notifier)

    @pytest.mark.asyncio
    async def test_process_payment_fail__not_the_owner(
        self,
        process_payment_use_case: ProcessPaymentUseCase,
        payable_uow: FakeUnitOfWork,
        mock_notifier: Mock,
        mock_booking_metrics: Mock,
    ) -> None:
        with pytest.raises(ForbiddenError) as exc_info:
            await process_payment_use_case.process_payment(
                user_id=OTHER_USER_ID,
                booking_id=42,
                payment_method='cash',
                amount=Decimal('70000'),
            )

        assert exc_info.value.status_code == 403
        _assert_nothing_written(payable_uow, mock_notifier)
        assert mock_booking_metrics.record_payment.call_args.kwargs['result'] == 'forbidden'

    @pytest.mark.asyncio
    @pytest.mark.parametrize('amount', ['69999.99', '70000.01', '50000'])
    async def test_process_payment_fail__amount_mismatch(
        self,
        process_payment_use_case: ProcessPaymentUseCase,
        payable_uow: FakeUnitOfWork,
        mock_notifier: Mock,
        amount: str,
    ) -> None:
        with pytest.raises(DomainError) as exc_info:
            await process_payment_use_case.process_payment(
                user_id=OWNER_ID, booking_id=42, payment_method='cash', amount=Decimal(amount)
            )

        assert str(exc_info.value.message) == (
            f'amount mismatch: expected 70000.00, got {Decimal(amount):.2f}'
        )
        _assert_nothing_written(payable_uow, mock_notifier)

    @pytest.mark.asyncio
    async def test_process_payment_fail__unknown_payment_method(
        self,
        process_payment_use_case: ProcessPaymentUseCase,
        payable_uow: FakeUnitOfWork,
        mock_notifier: Mock,
    ) -> None:
        payable_uow.payment_method_query_repo.get_active_by_name.return_value = None

        with pytest.raises(DomainError, match='invalid payment method'):
            await process_payment_use_case.process_payment(
                user_id=OWNER_ID, booking_id=42, payment_method='bitcoin', amount=Decimal('70000')
            )

        _assert_nothing_written(payable_uow, mock_notifier)

    @pytest.mark.asyncio
    async def test_process_payment_fail__already_paid(
        self,
        process_payment_use_case: ProcessPaymentUseCase,
        payable_uow: FakeUnitOfWork,
        pending_booking: Booking,
        mock_notifier: Mock,
    ) -> None:
        payable_uow.booking_command_repo.get_by_id.return_value = pending_booking.mark_as_paid()

        with pytest.raises(ConflictError, match='booking already paid'):
            await process_payment_use_case.process_payment(
                user_id=OWNER_ID, booking_id=42, payment_method='cash', amount=Decimal('70000')
            )

        _assert_nothing_written(payable_uow, mock_notifier)

    @pytest.mark.asyncio
    async def test_process_payment_fail__cancelled_booking(
        self,
        process_payment_use_case: ProcessPaymentUseCase,
        payable_uow: FakeUnitOfWork,
        pending_booking: Booking,
        mock_notifier: Mock,
    ) -> None:
        payable_uow.booking_command_repo.get_by_id.return_value = attrs.evolve(
            pending_booking, status=BookingStatus.CANCELLED
        )

        with pytest.raises(DomainError, match='Cannot pay for cancelled booking'):
            await process_payment_use_case.process_payment(
                user_id=OWNER_ID, booking_id=42, payment_method='cash', amount=Decimal('70000')
            )

        _assert_nothing_written(payable_uow, mock_notifier)
