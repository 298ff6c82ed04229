"""
User API Schemas - Pydantic models for request/response
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, SecretStr


class RegisterRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {'username': 'johndoe', 'email': 'john@example.com', 'password': 'P@ssw0rd'}
        }
    )

    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: SecretStr = Field(
        ...,
        min_length=6,
        max_length=72,
        description='Password must be 6-72 characters (bcrypt limit)',
    )


class LoginRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={'example': {'username': 'johndoe', 'password': 'P@ssw0rd'}}
    )

    username: str = Field(..., min_length=1)
    password: SecretStr = Field(..., min_length=1, max_length=72)


class VerifyEmailRequest(BaseModel):
    email: EmailStr
    otp_code: str = Field(..., min_length=6, max_length=6, pattern=r'^\d{6}$')


class ResendOtpRequest(BaseModel):
    email: EmailStr


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    is_verified: bool
    created_at: Optional[datetime] = None


class LoginResponse(BaseModel):
    token: str
    user: UserResponse


class MessageResponse(BaseModel):
    message: str
