# flyer_api/schemas/auth.py

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, EmailStr, Field, field_validator

from .common import APIModel


class _CredentialsModel(APIModel):
    """
    Passwords are kept byte-for-byte; the other text fields are trimmed.
    """

    model_config = ConfigDict(str_strip_whitespace=False)

    @field_validator("email", "first_name", "last_name", mode="before", check_fields=False)
    @classmethod
    def _trim(cls, value):
        return value.strip() if isinstance(value, str) else value


class RegisterRequest(_CredentialsModel):
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)


class LoginRequest(_CredentialsModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class ProfileUpdate(APIModel):
    """
    Partial profile update; omitted fields keep their current value.
    """

    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)


class UserRead(APIModel):
    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    last_login_at: Optional[datetime] = None
    created_at: datetime


class AuthResponse(APIModel):
    message: str
    token: str
    user: UserRead


class ProfileUpdateResponse(APIModel):
    message: str
    user: UserRead


__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "ProfileUpdate",
    "UserRead",
    "AuthResponse",
    "ProfileUpdateResponse",
]
