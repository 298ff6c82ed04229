"""
Unit tests for the account use cases: register, login, verify email, resend OTP
"""

from datetime import datetime, timedelta, timezone
from typing import Any
from unittest.mock import AsyncMock, Mock

import attrs
from pydantic import SecretStr
import pytest

from src.platform.exception.exceptions import ConflictError, DomainError, LoginError, NotFoundError
from src.service.cinema_booking.app.command.issue_otp_use_case import IssueOtpUseCase
from src.service.cinema_booking.app.command.login_use_case import LoginUseCase
from src.service.cinema_booking.app.command.register_user_use_case import RegisterUserUseCase
from src.service.cinema_booking.app.command.resend_otp_use_case import ResendOtpUseCase
from src.service.cinema_booking.app.command.verify_email_use_case import VerifyEmailUseCase
from src.service.cinema_booking.app.interface.i_email_sender import IEmailSender
from src.service.cinema_booking.app.interface.i_password_hasher import IPasswordHasher
from src.service.cinema_booking.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.cinema_booking.domain.entity.email_verification_entity import EmailVerification
from src.service.cinema_booking.domain.entity.user_entity import UserEntity
from test.service.cinema_booking.unit.conftest import FakeUnitOfWork


PASSWORD = SecretStr('P@ssw0rd')


@pytest.fixture
def mock_password_hasher() -> Mock:
    hasher = Mock(spec=IPasswordHasher)
    hasher.hash_password.return_value = 'hashed'
    hasher.verify_password.return_value = True
    return hasher


@pytest.fixture
def mock_issue_otp() -> AsyncMock:
    return AsyncMock(spec=IssueOtpUseCase)


@pytest.fixture
def alice() -> UserEntity:
    return UserEntity(
        id=7, username='alice', email='alice@example.com', hashed_password='hashed'
    )


@pytest.fixture
def pending_verification() -> EmailVerification:
    return attrs.evolve(
        EmailVerification.issue(user_id=7, email='alice@example.com', expire_minutes=5),
        id=3,
        otp_code='123456',
    )


@pytest.mark.unit
class TestRegisterUserUseCase:
    @pytest.fixture
    def use_case(
        self, uow_factory: Any, mock_password_hasher: Mock, mock_issue_otp: AsyncMock
    ) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            uow_factory=uow_factory,
            password_hasher=mock_password_hasher,
            issue_otp=mock_issue_otp,
        )

    @pytest.fixture
    def free_names_uow(self, fake_uow: FakeUnitOfWork) -> FakeUnitOfWork:
        async def _persist(*, user_entity: UserEntity) -> UserEntity:
            return attrs.evolve(user_entity, id=7)

        fake_uow.user_query_repo.exists_by_username.return_value = False
        fake_uow.user_query_repo.exists_by_email.return_value = False
        fake_uow.user_command_repo.create.side_effect = _persist
        return fake_uow

    @pytest.mark.asyncio
    async def test_register_success__unverified_and_otp_sent(
        self,
        use_case: RegisterUserUseCase,
        free_names_uow: FakeUnitOfWork,
        mock_issue_otp: AsyncMock,
    ) -> None:
        user = await use_case.register(
            username='alice', email='alice@example.com', password=PASSWORD
        )

        assert user.id == 7
        assert user.is_verified is False
        assert user.hashed_password == 'hashed'
        assert free_names_uow.committed is True
        mock_issue_otp.issue_otp.assert_awaited_once_with(
            user_id=7, email='alice@example.com', username='alice'
        )

    @pytest.mark.asyncio
    async def test_register_success__otp_failure_does_not_fail_registration(
        self,
        use_case: RegisterUserUseCase,
        free_names_uow: FakeUnitOfWork,
        mock_issue_otp: AsyncMock,
    ) -> None:
        mock_issue_otp.issue_otp.side_effect = RuntimeError('smtp down')

        user = await use_case.register(
            username='alice', email='alice@example.com', password=PASSWORD
        )

        assert user.id == 7
        assert free_names_uow.committed is True

    @pytest.mark.asyncio
    async def test_register_fail__username_taken(
        self,
        use_case: RegisterUserUseCase,
        free_names_uow: FakeUnitOfWork,
        mock_issue_otp: AsyncMock,
    ) -> None:
        free_names_uow.user_query_repo.exists_by_username.return_value = True

        with pytest.raises(ConflictError, match='username already exists'):
            await use_case.register(username='alice', email='alice@example.com', password=PASSWORD)

        free_names_uow.user_command_repo.create.assert_not_awaited()
        mock_issue_otp.issue_otp.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_register_fail__email_taken(
        self, use_case: RegisterUserUseCase, free_names_uow: FakeUnitOfWork
    ) -> None:
        free_names_uow.user_query_repo.exists_by_email.return_value = True

        with pytest.raises(ConflictError, match='email already exists'):
            await use_case.register(username='alice', email='alice@example.com', password=PASSWORD)


@pytest.mark.unit
class TestIssueOtpUseCase:
    @pytest.mark.asyncio
    async def test_issue_otp__persists_then_sends(
        self, uow_factory: Any, fake_uow: FakeUnitOfWork
    ) -> None:
        async def _persist(*, verification: EmailVerification) -> EmailVerification:
            return attrs.evolve(verification, id=3)

        fake_uow.email_verification_repo.create.side_effect = _persist
        email_sender = AsyncMock(spec=IEmailSender)
        use_case = IssueOtpUseCase(
            uow_factory=uow_factory, email_sender=email_sender, otp_expire_minutes=5
        )

        verification = await use_case.issue_otp(
            user_id=7, email='alice@example.com', username='alice'
        )

        assert fake_uow.committed is True
        email_sender.send_otp.assert_awaited_once_with(
            email='alice@example.com', username='alice', otp_code=verification.otp_code
        )
        remaining = verification.expires_at - datetime.now(timezone.utc)
        assert timedelta(minutes=4) < remaining <= timedelta(minutes=5)


@pytest.mark.unit
class TestLoginUseCase:
    @pytest.fixture
    def mock_user_query_repo(self, alice: UserEntity) -> AsyncMock:
        repo = AsyncMock(spec=IUserQueryRepo)
        repo.get_by_username.return_value = alice
        return repo

    @pytest.fixture
    def mock_jwt_auth(self) -> Mock:
        jwt_auth = Mock()
        jwt_auth.create_jwt_token.return_value = 'signed.token'
        return jwt_auth

    @pytest.mark.asyncio
    async def test_login_success(
        self,
        mock_user_query_repo: AsyncMock,
        mock_password_hasher: Mock,
        mock_jwt_auth: Mock,
        alice: UserEntity,
    ) -> None:
        use_case = LoginUseCase(
            user_query_repo=mock_user_query_repo,
            password_hasher=mock_password_hasher,
            jwt_auth=mock_jwt_auth,
        )

        user, token = await use_case.login(username='alice', password=PASSWORD)

        assert user == alice
        assert token == 'signed.token'

    @pytest.mark.asyncio
    async def test_login_fail__wrong_password(
        self, mock_user_query_repo: AsyncMock, mock_password_hasher: Mock, mock_jwt_auth: Mock
    ) -> None:
        mock_password_hasher.verify_password.return_value = False
        use_case = LoginUseCase(
            user_query_repo=mock_user_query_repo,
            password_hasher=mock_password_hasher,
            jwt_auth=mock_jwt_auth,
        )

        with pytest.raises(LoginError, match='invalid credentials'):
            await use_case.login(username='alice', password=SecretStr('wrong'))

        mock_jwt_auth.create_jwt_token.assert_not_called()

    @pytest.mark.asyncio
    async def test_login_fail__unknown_user(
        self, mock_user_query_repo: AsyncMock, mock_password_hasher: Mock, mock_jwt_auth: Mock
    ) -> None:
        mock_user_query_repo.get_by_username.return_value = None
        use_case = LoginUseCase(
            user_query_repo=mock_user_query_repo,
            password_hasher=mock_password_hasher,
            jwt_auth=mock_jwt_auth,
        )

        with pytest.raises(LoginError, match='invalid credentials'):
            await use_case.login(username='nobody', password=PASSWORD)


@pytest.mark.unit
class TestVerifyEmailUseCase:
    @pytest.mark.asyncio
    async def test_verify_success__flips_record_and_user(
        self,
        uow_factory: Any,
        fake_uow: FakeUnitOfWork,
        pending_verification: EmailVerification,
    ) -> None:
        fake_uow.email_verification_repo.get_latest_by_email.return_value = pending_verification

        await VerifyEmailUseCase(uow_factory=uow_factory).verify(
            email='alice@example.com', otp_code='123456'
        )

        fake_uow.email_verification_repo.mark_verified.assert_awaited_once_with(verification_id=3)
        fake_uow.user_command_repo.mark_verified.assert_awaited_once_with(user_id=7)
        assert fake_uow.committed is True

    @pytest.mark.asyncio
    async def test_verify_fail__wrong_code(
        self,
        uow_factory: Any,
        fake_uow: FakeUnitOfWork,
        pending_verification: EmailVerification,
    ) -> None:
        fake_uow.email_verification_repo.get_latest_by_email.return_value = pending_verification

        with pytest.raises(DomainError, match='invalid OTP code'):
            await VerifyEmailUseCase(uow_factory=uow_factory).verify(
                email='alice@example.com', otp_code='000000'
            )

        fake_uow.user_command_repo.mark_verified.assert_not_awaited()
        assert fake_uow.committed is False

    @pytest.mark.asyncio
    async def test_verify_fail__no_otp(self, uow_factory: Any, fake_uow: FakeUnitOfWork) -> None:
        fake_uow.email_verification_repo.get_latest_by_email.return_value = None

        with pytest.raises(NotFoundError, match='no OTP found for this email'):
            await VerifyEmailUseCase(uow_factory=uow_factory).verify(
                email='nobody@example.com', otp_code='123456'
            )


@pytest.mark.unit
class TestResendOtpUseCase:
    @pytest.mark.asyncio
    async def test_resend_success__after_cooldown(
        self,
        uow_factory: Any,
        fake_uow: FakeUnitOfWork,
        pending_verification: EmailVerification,
        mock_issue_otp: AsyncMock,
        alice: UserEntity,
    ) -> None:
        fake_uow.email_verification_repo.get_latest_by_email.return_value = attrs.evolve(
            pending_verification, created_at=datetime.now(timezone.utc) - timedelta(minutes=2)
        )
        fake_uow.user_query_repo.get_by_id.return_value = alice
        use_case = ResendOtpUseCase(
            uow_factory=uow_factory, issue_otp=mock_issue_otp, cooldown_seconds=60
        )

        await use_case.resend(email='alice@example.com')

        mock_issue_otp.issue_otp.assert_awaited_once_with(
            user_id=7, email='alice@example.com', username='alice'
        )

    @pytest.mark.asyncio
    async def test_resend_fail__within_cooldown(
        self,
        uow_factory: Any,
        fake_uow: FakeUnitOfWork,
        pending_verification: EmailVerification,
        mock_issue_otp: AsyncMock,
    ) -> None:
        fake_uow.email_verification_repo.get_latest_by_email.return_value = pending_verification
        use_case = ResendOtpUseCase(
            uow_factory=uow_factory, issue_otp=mock_issue_otp, cooldown_seconds=60
        )

        with pytest.raises(DomainError, match='please wait 60 seconds'):
            await use_case.resend(email='alice@example.com')

        mock_issue_otp.issue_otp.assert_not_awaited()
