from datetime import datetime, timezone
from decimal import Decimal
from enum import StrEnum
from typing import Optional

import attrs
import uuid_utils

from src.service.cinema_booking.domain.entity.booking_entity import Booking


class PaymentMethodType(StrEnum):
    CREDIT_CARD = 'credit_card'
    DEBIT_CARD = 'debit_card'
    E_WALLET = 'e_wallet'
    TRANSFER = 'transfer'
    CASH = 'cash'


class TransactionStatus(StrEnum):
    PENDING = 'pending'
    SUCCESS = 'success'
    FAILED = 'failed'


@attrs.define
class PaymentMethod:
    name: str
    type: PaymentMethodType
    is_active: bool = True
    id: Optional[int] = None


def build_transaction_id(*, booking_id: int, user_id: int) -> str:
    # Readable booking/user prefix plus a uuid7 suffix so retries never collide
    return f'TXN-{booking_id}-{user_id}-{uuid_utils.uuid7().hex[:12].upper()}'


@attrs.define
class Payment:
    booking_id: int
    user_id: int
    amount: Decimal
    payment_method: str
    transaction_id: str
    status: TransactionStatus = TransactionStatus.SUCCESS
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @classmethod
    def create_successful(
        cls, *, booking: Booking, user_id: int, payment_method: PaymentMethod
    ) -> 'Payment':
        """No external gateway is involved, so every accepted payment succeeds."""
        return cls(
            booking_id=booking.id or 0,
            user_id=user_id,
            amount=booking.total_price,
            payment_method=payment_method.name,
            transaction_id=build_transaction_id(booking_id=booking.id or 0, user_id=user_id),
            status=TransactionStatus.SUCCESS,
            created_at=datetime.now(timezone.utc),
        )
