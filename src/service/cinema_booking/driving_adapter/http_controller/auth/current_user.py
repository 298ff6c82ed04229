from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Cookie, Depends, Header

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.service.cinema_booking.driving_adapter.http_controller.auth.jwt_auth import (
    JwtAuth,
    extract_bearer_token,
)


@inject
async def get_current_user_id(
    authorization: Optional[str] = Header(None),
    cookie_token: Optional[str] = Cookie(None, alias=settings.AUTH_COOKIE_NAME),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> int:
    """
    Get the caller's user id from the JWT (stateless, no DB query)

    Authorization header first, auth cookie as fallback.
    """
    token = extract_bearer_token(authorization) or cookie_token
    return jwt_auth.resolve_caller(token)
