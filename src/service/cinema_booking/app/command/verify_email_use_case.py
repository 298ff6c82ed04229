from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger


class VerifyEmailUseCase:
    def __init__(self, *, uow_factory: Callable[[], AbstractUnitOfWork]) -> None:
        self.uow_factory = uow_factory

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
    ) -> Self:
        return cls(uow_factory=uow_factory)

    @Logger.io
    async def verify(self, *, email: str, otp_code: str) -> None:
        """Check the latest OTP of the email; verification record and user flip together."""
        async with self.uow_factory() as uow:
            verification = await uow.email_verification_repo.get_latest_by_email(email=email)
            if verification is None:
                raise NotFoundError('no OTP found for this email')

            verified = verification.verify(otp_code)

            await uow.email_verification_repo.mark_verified(verification_id=verified.id or 0)
            await uow.user_command_repo.mark_verified(user_id=verified.user_id)
            await uow.commit()

        Logger.base.info(f'✅ [VERIFY-EMAIL] {email} verified')
