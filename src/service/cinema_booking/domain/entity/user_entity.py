from datetime import datetime
from typing import Optional

import attrs

from src.platform.exception.exceptions import LoginError


@attrs.define
class UserEntity:
    username: str = ''
    email: str = ''
    hashed_password: str = attrs.field(default='', repr=False)  # Hide from repr for security
    is_verified: bool = False
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @staticmethod
    def validate_user_exists(user_entity: Optional['UserEntity']) -> 'UserEntity':
        if not user_entity:
            raise LoginError('invalid credentials')

        return user_entity

    def mark_as_verified(self) -> 'UserEntity':
        return attrs.evolve(self, is_verified=True)
