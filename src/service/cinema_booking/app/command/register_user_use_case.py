from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from pydantic import SecretStr

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.cinema_booking.app.command.issue_otp_use_case import IssueOtpUseCase
from src.service.cinema_booking.app.interface.i_password_hasher import IPasswordHasher
from src.service.cinema_booking.domain.entity.user_entity import UserEntity


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        uow_factory: Callable[[], AbstractUnitOfWork],
        password_hasher: IPasswordHasher,
        issue_otp: IssueOtpUseCase,
    ) -> None:
        self.uow_factory = uow_factory
        self.password_hasher = password_hasher
        self.issue_otp = issue_otp

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
        issue_otp: IssueOtpUseCase = Depends(IssueOtpUseCase.depends),
    ) -> Self:
        return cls(uow_factory=uow_factory, password_hasher=password_hasher, issue_otp=issue_otp)

    @Logger.io
    async def register(self, *, username: str, email: str, password: SecretStr) -> UserEntity:
        """
        Create an unverified user and send the first OTP.

        Raises:
            ConflictError: username or email already taken
        """
        async with self.uow_factory() as uow:
            if await uow.user_query_repo.exists_by_username(username=username):
                raise ConflictError('username already exists')
            if await uow.user_query_repo.exists_by_email(email=email):
                raise ConflictError('email already exists')

            user = await uow.user_command_repo.create(
                user_entity=UserEntity(
                    username=username,
                    email=email,
                    hashed_password=self.password_hasher.hash_password(plain_password=password),
                    is_verified=False,
                )
            )
            await uow.commit()

        Logger.base.info(f'👤 [REGISTER] User {user.id} registered ({username})')

        try:
            await self.issue_otp.issue_otp(user_id=user.id or 0, email=email, username=username)
        except Exception as e:
            # Registration stands; the user can ask for a new OTP
            Logger.base.error(f'❌ [REGISTER] Failed to send OTP to {email}: {e}')

        return user
