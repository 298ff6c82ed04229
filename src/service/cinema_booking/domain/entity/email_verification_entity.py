import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError


OTP_LENGTH = 6


def generate_otp_code() -> str:
    return ''.join(secrets.choice('0123456789') for _ in range(OTP_LENGTH))


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


@attrs.define
class EmailVerification:
    """One OTP issued for an email. The latest record for the email is the one that counts."""

    user_id: int
    email: str
    otp_code: str = attrs.field(repr=False)
    expires_at: datetime
    is_verified: bool = False
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @classmethod
    def issue(cls, *, user_id: int, email: str, expire_minutes: int) -> 'EmailVerification':
        now = datetime.now(timezone.utc)
        return cls(
            user_id=user_id,
            email=email,
            otp_code=generate_otp_code(),
            expires_at=now + timedelta(minutes=expire_minutes),
            created_at=now,
        )

    def is_expired(self, *, now: Optional[datetime] = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return now > _as_utc(self.expires_at)

    def verify(self, otp_code: str) -> 'EmailVerification':
        """
        Raises:
            DomainError: already verified, expired, or wrong code
        """
        if self.is_verified:
            raise DomainError('email already verified')
        if self.is_expired():
            raise DomainError('OTP has expired, please request a new one')
        if not secrets.compare_digest(self.otp_code.encode(), otp_code.encode()):
            raise DomainError('invalid OTP code')

        return attrs.evolve(self, is_verified=True)

    def validate_can_resend(self, *, cooldown_seconds: int) -> None:
        if self.is_verified:
            raise DomainError('email already verified')
        if self.created_at is None:
            return
        elapsed = datetime.now(timezone.utc) - _as_utc(self.created_at)
        if elapsed < timedelta(seconds=cooldown_seconds):
            raise DomainError(
                f'please wait {cooldown_seconds} seconds before requesting a new OTP'
            )
