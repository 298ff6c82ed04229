from src.platform.logging.loguru_io import Logger
from src.service.cinema_booking.app.interface.i_email_sender import IEmailSender


class LoggingEmailSender(IEmailSender):
    """Writes the OTP mail to the log instead of delivering it."""

    def __init__(self, *, otp_expire_minutes: int) -> None:
        self.otp_expire_minutes = otp_expire_minutes

    async def send_otp(self, *, email: str, username: str, otp_code: str) -> None:
        Logger.base.info(
            f'📧 [EMAIL] To: {email} | Subject: Verify your email | '
            f'Hi {username}, your verification code is {otp_code}. '
            f'It expires in {self.otp_expire_minutes} minutes.'
        )
