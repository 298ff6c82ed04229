from abc import ABC, abstractmethod

from src.service.cinema_booking.domain.entity.payment_entity import Payment


class IPaymentCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, payment: Payment) -> Payment:
        """
        Raises:
            ConflictError: the booking already has a successful payment
        """
        pass
