from abc import ABC, abstractmethod


class IEmailSender(ABC):
    @abstractmethod
    async def send_otp(self, *, email: str, username: str, otp_code: str) -> None:
        pass
