from abc import ABC, abstractmethod

from src.service.cinema_booking.domain.entity.user_entity import UserEntity


class IUserCommandRepo(ABC):
    """User Command Repository Abstract Interface - Handles write operations"""

    @abstractmethod
    async def create(self, *, user_entity: UserEntity) -> UserEntity:
        pass

    @abstractmethod
    async def mark_verified(self, *, user_id: int) -> None:
        pass
