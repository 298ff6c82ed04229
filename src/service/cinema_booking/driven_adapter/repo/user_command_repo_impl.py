from sqlalchemy import update
from sqlalchemy.exc import IntegrityError

from src.platform.database.base_repo import SqlAlchemyRepo, is_unique_violation
from src.platform.exception.exceptions import ConflictError, StorageError
from src.platform.logging.loguru_io import Logger
from src.service.cinema_booking.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.cinema_booking.domain.entity.user_entity import UserEntity
from src.service.cinema_booking.driven_adapter.model import UserModel
from src.service.cinema_booking.driven_adapter.repo.orm_mapper import user_to_entity


class UserCommandRepoImpl(SqlAlchemyRepo, IUserCommandRepo):
    @Logger.io
    async def create(self, *, user_entity: UserEntity) -> UserEntity:
        user_model = UserModel(
            username=user_entity.username,
            email=user_entity.email,
            hashed_password=user_entity.hashed_password,
            is_verified=user_entity.is_verified,
        )
        try:
            async with self._get_session('create user') as session:
                session.add(user_model)
                await session.flush()
                await session.refresh(user_model)
        except IntegrityError as e:
            # Lost a race against a concurrent registration
            if is_unique_violation(e, constraint='ix_users_username', columns=('users.username',)):
                raise ConflictError('username already exists') from e
            if is_unique_violation(e, constraint='ix_users_email', columns=('users.email',)):
                raise ConflictError('email already exists') from e
            raise StorageError(f'create user failed: {e.orig}') from e

        return user_to_entity(user_model)

    @Logger.io
    async def mark_verified(self, *, user_id: int) -> None:
        async with self._get_session('mark user verified') as session:
            await session.execute(
                update(UserModel).where(UserModel.id == user_id).values(is_verified=True)
            )
