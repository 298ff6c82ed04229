from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.cinema_booking.app.interface.i_email_sender import IEmailSender
from src.service.cinema_booking.domain.entity.email_verification_entity import EmailVerification


class IssueOtpUseCase:
    """Store a fresh OTP for the user and hand it to the email sender."""

    def __init__(
        self,
        *,
        uow_factory: Callable[[], AbstractUnitOfWork],
        email_sender: IEmailSender,
        otp_expire_minutes: int,
    ) -> None:
        self.uow_factory = uow_factory
        self.email_sender = email_sender
        self.otp_expire_minutes = otp_expire_minutes

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
        email_sender: IEmailSender = Depends(Provide[Container.email_sender]),
        config: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(
            uow_factory=uow_factory,
            email_sender=email_sender,
            otp_expire_minutes=config.OTP_EXPIRE_MINUTES,
        )

    @Logger.io
    async def issue_otp(self, *, user_id: int, email: str, username: str) -> EmailVerification:
        async with self.uow_factory() as uow:
            verification = await uow.email_verification_repo.create(
                verification=EmailVerification.issue(
                    user_id=user_id, email=email, expire_minutes=self.otp_expire_minutes
                )
            )
            await uow.commit()

        await self.email_sender.send_otp(
            email=email, username=username, otp_code=verification.otp_code
        )
        Logger.base.info(f'🔐 [OTP] Issued OTP for {email}')
        return verification
