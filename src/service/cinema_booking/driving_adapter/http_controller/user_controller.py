from fastapi import APIRouter, Depends, Response, status

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.service.cinema_booking.app.command.login_use_case import LoginUseCase
from src.service.cinema_booking.app.command.register_user_use_case import RegisterUserUseCase
from src.service.cinema_booking.app.command.resend_otp_use_case import ResendOtpUseCase
from src.service.cinema_booking.app.command.verify_email_use_case import VerifyEmailUseCase
from src.service.cinema_booking.app.query.get_user_profile_use_case import GetUserProfileUseCase
from src.service.cinema_booking.driving_adapter.http_controller.auth.current_user import (
    get_current_user_id,
)
from src.service.cinema_booking.driving_adapter.http_controller.deadline import request_deadline
from src.service.cinema_booking.driving_adapter.http_controller.schema.user_schema import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    ResendOtpRequest,
    UserResponse,
    VerifyEmailRequest,
)


# === API Router ===

router = APIRouter()


@router.post('/register', response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def register(
    request: RegisterRequest,
    use_case: RegisterUserUseCase = Depends(RegisterUserUseCase.depends),
) -> UserResponse:
    with request_deadline():
        user = await use_case.register(
            username=request.username, email=request.email, password=request.password
        )
    return UserResponse.model_validate(user)


@router.post('/login', response_model=LoginResponse)
@Logger.io
async def login(
    response: Response,
    request: LoginRequest,
    use_case: LoginUseCase = Depends(LoginUseCase.depends),
) -> LoginResponse:
    with request_deadline():
        user, token = await use_case.login(username=request.username, password=request.password)

    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=use_case.jwt_auth.token_max_age_seconds,
        httponly=True,
        samesite='lax',
        secure=not settings.DEBUG,
    )
    return LoginResponse(token=token, user=UserResponse.model_validate(user))


@router.post('/verify-email', response_model=MessageResponse)
@Logger.io
async def verify_email(
    request: VerifyEmailRequest,
    use_case: VerifyEmailUseCase = Depends(VerifyEmailUseCase.depends),
) -> MessageResponse:
    with request_deadline():
        await use_case.verify(email=request.email, otp_code=request.otp_code)
    return MessageResponse(message='email verified successfully')


@router.post('/resend-otp', response_model=MessageResponse)
@Logger.io
async def resend_otp(
    request: ResendOtpRequest,
    use_case: ResendOtpUseCase = Depends(ResendOtpUseCase.depends),
) -> MessageResponse:
    with request_deadline():
        await use_case.resend(email=request.email)
    return MessageResponse(message='OTP sent')


@router.post('/logout', response_model=MessageResponse)
@Logger.io
async def logout(
    response: Response,
    user_id: int = Depends(get_current_user_id),
) -> MessageResponse:
    # Tokens are stateless; clearing the cookie is all there is
    response.delete_cookie(key=settings.AUTH_COOKIE_NAME, httponly=True, samesite='lax')
    return MessageResponse(message='logged out')


@router.get('/user/profile', response_model=UserResponse)
@Logger.io
async def get_profile(
    user_id: int = Depends(get_current_user_id),
    use_case: GetUserProfileUseCase = Depends(GetUserProfileUseCase.depends),
) -> UserResponse:
    with request_deadline():
        user = await use_case.get_profile(user_id=user_id)
    return UserResponse.model_validate(user)
