from typing import Optional

from sqlalchemy import exists, select

from src.platform.database.base_repo import SqlAlchemyRepo
from src.platform.logging.loguru_io import Logger
from src.service.cinema_booking.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.cinema_booking.domain.entity.user_entity import UserEntity
from src.service.cinema_booking.driven_adapter.model import UserModel
from src.service.cinema_booking.driven_adapter.repo.orm_mapper import user_to_entity


class UserQueryRepoImpl(SqlAlchemyRepo, IUserQueryRepo):
    @Logger.io
    async def get_by_id(self, *, user_id: int) -> Optional[UserEntity]:
        async with self._get_session('get user') as session:
            user_model = await session.get(UserModel, user_id)
            return user_to_entity(user_model) if user_model else None

    @Logger.io
    async def get_by_username(self, *, username: str) -> Optional[UserEntity]:
        async with self._get_session('get user by username') as session:
            user_model = await session.scalar(
                select(UserModel).where(UserModel.username == username)
            )
            return user_to_entity(user_model) if user_model else None

    @Logger.io
    async def get_by_email(self, *, email: str) -> Optional[UserEntity]:
        async with self._get_session('get user by email') as session:
            user_model = await session.scalar(select(UserModel).where(UserModel.email == email))
            return user_to_entity(user_model) if user_model else None

    @Logger.io
    async def exists_by_username(self, *, username: str) -> bool:
        async with self._get_session('check username') as session:
            return bool(
                await session.scalar(select(exists().where(UserModel.username == username)))
            )

    @Logger.io
    async def exists_by_email(self, *, email: str) -> bool:
        async with self._get_session('check email') as session:
            return bool(await session.scalar(select(exists().where(UserModel.email == email))))
