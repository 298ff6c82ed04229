from abc import ABC, abstractmethod
from typing import Optional

from src.service.cinema_booking.domain.entity.email_verification_entity import EmailVerification


class IEmailVerificationRepo(ABC):
    @abstractmethod
    async def create(self, *, verification: EmailVerification) -> EmailVerification:
        pass

    @abstractmethod
    async def get_latest_by_email(self, *, email: str) -> Optional[EmailVerification]:
        pass

    @abstractmethod
    async def mark_verified(self, *, verification_id: int) -> None:
        pass
