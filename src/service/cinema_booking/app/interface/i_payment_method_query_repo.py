from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.cinema_booking.domain.entity.payment_entity import PaymentMethod


class IPaymentMethodQueryRepo(ABC):
    @abstractmethod
    async def get_active_by_name(self, *, name: str) -> Optional[PaymentMethod]:
        pass

    @abstractmethod
    async def list_active(self) -> List[PaymentMethod]:
        pass
