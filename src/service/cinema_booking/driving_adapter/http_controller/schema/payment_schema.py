from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from src.service.cinema_booking.domain.entity.payment_entity import (
    PaymentMethodType,
    TransactionStatus,
)


class PaymentRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {'booking_id': 1, 'payment_method': 'cash', 'amount': '70000.00'}
        }
    )

    booking_id: int = Field(..., gt=0)
    payment_method: str = Field(..., min_length=1, max_length=50)
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)


class PaymentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    booking_id: int
    amount: Decimal
    payment_method: str
    status: TransactionStatus
    transaction_id: str
    created_at: Optional[datetime] = None


class PaymentMethodResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    type: PaymentMethodType
    is_active: bool
