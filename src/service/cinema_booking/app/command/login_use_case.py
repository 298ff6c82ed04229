from typing import Self, Tuple

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from pydantic import SecretStr

from src.platform.config.di import Container
from src.platform.exception.exceptions import LoginError
from src.platform.logging.loguru_io import Logger
from src.service.cinema_booking.app.interface.i_password_hasher import IPasswordHasher
from src.service.cinema_booking.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.cinema_booking.domain.entity.user_entity import UserEntity
from src.service.cinema_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class LoginUseCase:
    def __init__(
        self,
        *,
        user_query_repo: IUserQueryRepo,
        password_hasher: IPasswordHasher,
        jwt_auth: JwtAuth,
    ) -> None:
        self.user_query_repo = user_query_repo
        self.password_hasher = password_hasher
        self.jwt_auth = jwt_auth

    @classmethod
    @inject
    def depends(
        cls,
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
        jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
    ) -> Self:
        return cls(
            user_query_repo=user_query_repo, password_hasher=password_hasher, jwt_auth=jwt_auth
        )

    @Logger.io
    async def login(self, *, username: str, password: SecretStr) -> Tuple[UserEntity, str]:
        user = UserEntity.validate_user_exists(
            await self.user_query_repo.get_by_username(username=username)
        )
        if not self.password_hasher.verify_password(
            plain_password=password, hashed_password=user.hashed_password
        ):
            raise LoginError('invalid credentials')

        return user, self.jwt_auth.create_jwt_token(user)
