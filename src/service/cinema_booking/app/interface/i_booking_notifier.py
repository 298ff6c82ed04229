from abc import ABC, abstractmethod
from enum import StrEnum
from typing import Any, Dict


class NotificationKind(StrEnum):
    BOOKING_CONFIRMED = 'booking_confirmed'
    PAYMENT_CONFIRMED = 'payment_confirmed'


class IBookingNotifier(ABC):
    """Best-effort side channel for confirmations"""

    @abstractmethod
    def notify(self, kind: NotificationKind, payload: Dict[str, Any]) -> None:
        """Fire-and-forget. Must never raise into the caller."""
        pass
