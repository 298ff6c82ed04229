"""
Bearer credential issuing and resolution
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from src.platform.config.core_setting import Settings
from src.platform.exception.exceptions import AuthenticationError
from src.service.cinema_booking.domain.entity.user_entity import UserEntity


BEARER_PREFIX = 'bearer '


class JwtAuth:
    def __init__(self, *, settings: Settings) -> None:
        self.secret = settings.SECRET_KEY.get_secret_value()
        self.algorithm = settings.ALGORITHM
        self.token_expire = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        self.cookie_name = settings.AUTH_COOKIE_NAME

    @property
    def token_max_age_seconds(self) -> int:
        return int(self.token_expire.total_seconds())

    def create_jwt_token(self, user_entity: UserEntity) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            'sub': str(user_entity.id),
            'iat': now,
            'exp': now + self.token_expire,
            'username': user_entity.username,
            'email': user_entity.email,
        }

        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={'require': ['sub', 'exp']},
            )
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError('token has expired') from e
        except jwt.PyJWTError as e:
            raise AuthenticationError('invalid token') from e

    def resolve_caller(self, credential: Optional[str]) -> int:
        """
        Map a bearer credential to the caller's user id.

        Raises:
            AuthenticationError: missing, malformed, expired or badly signed credential
        """
        if not credential:
            raise AuthenticationError('authorization token required')

        payload = self.decode_jwt_token(credential)
        try:
            return int(payload['sub'])
        except (TypeError, ValueError) as e:
            raise AuthenticationError('invalid token') from e


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    if not authorization.lower().startswith(BEARER_PREFIX):
        raise AuthenticationError('invalid authorization header format')
    return authorization[len(BEARER_PREFIX) :].strip() or None
