from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, update

from src.platform.database.base_repo import SqlAlchemyRepo
from src.platform.logging.loguru_io import Logger
from src.service.cinema_booking.app.interface.i_email_verification_repo import (
    IEmailVerificationRepo,
)
from src.service.cinema_booking.domain.entity.email_verification_entity import EmailVerification
from src.service.cinema_booking.driven_adapter.model import EmailVerificationModel
from src.service.cinema_booking.driven_adapter.repo.orm_mapper import (
    email_verification_to_entity,
)


class EmailVerificationRepoImpl(SqlAlchemyRepo, IEmailVerificationRepo):
    @Logger.io
    async def create(self, *, verification: EmailVerification) -> EmailVerification:
        async with self._get_session('create email verification') as session:
            model = EmailVerificationModel(
                user_id=verification.user_id,
                email=verification.email,
                otp_code=verification.otp_code,
                expires_at=verification.expires_at,
                is_verified=verification.is_verified,
                created_at=verification.created_at or datetime.now(timezone.utc),
            )
            session.add(model)
            await session.flush()
            await session.refresh(model)
            return email_verification_to_entity(model)

    @Logger.io
    async def get_latest_by_email(self, *, email: str) -> Optional[EmailVerification]:
        async with self._get_session('get email verification') as session:
            model = await session.scalar(
                select(EmailVerificationModel)
                .where(EmailVerificationModel.email == email)
                .order_by(EmailVerificationModel.id.desc())
                .limit(1)
            )
            return email_verification_to_entity(model) if model else None

    @Logger.io
    async def mark_verified(self, *, verification_id: int) -> None:
        async with self._get_session('mark email verified') as session:
            await session.execute(
                update(EmailVerificationModel)
                .where(EmailVerificationModel.id == verification_id)
                .values(is_verified=True)
            )
