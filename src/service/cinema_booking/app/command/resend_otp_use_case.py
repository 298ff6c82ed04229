from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema_booking.app.command.issue_otp_use_case import IssueOtpUseCase


class ResendOtpUseCase:
    def __init__(
        self,
        *,
        uow_factory: Callable[[], AbstractUnitOfWork],
        issue_otp: IssueOtpUseCase,
        cooldown_seconds: int,
    ) -> None:
        self.uow_factory = uow_factory
        self.issue_otp = issue_otp
        self.cooldown_seconds = cooldown_seconds

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
        issue_otp: IssueOtpUseCase = Depends(IssueOtpUseCase.depends),
        config: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(
            uow_factory=uow_factory,
            issue_otp=issue_otp,
            cooldown_seconds=config.OTP_RESEND_COOLDOWN_SECONDS,
        )

    @Logger.io
    async def resend(self, *, email: str) -> None:
        async with self.uow_factory() as uow:
            verification = await uow.email_verification_repo.get_latest_by_email(email=email)
            if verification is None:
                raise NotFoundError('no OTP found for this email')
            verification.validate_can_resend(cooldown_seconds=self.cooldown_seconds)

            user = await uow.user_query_repo.get_by_id(user_id=verification.user_id)

        await self.issue_otp.issue_otp(
            user_id=verification.user_id,
            email=email,
            username=user.username if user else email,
        )
