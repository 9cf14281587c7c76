"""Pydantic request/response schemas for uni_gateway.

All responses are wrapped in ApiResponse at the router layer.
"""

import re

from pydantic import BaseModel, EmailStr, Field, field_validator

from config.settings import settings
from src.uni_gateway.user.db_models import UserModel


def normalize_email(value: str) -> str:
    return value.strip().lower()


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)

    @field_validator("email", mode="before")
    @classmethod
    def clean_email(cls, v: str) -> str:
        return normalize_email(v) if isinstance(v, str) else v

    @field_validator("password")
    @classmethod
    def password_complexity(cls, v: str) -> str:
        """Enforce: at least one letter and one digit."""
        if not re.search(r"[A-Za-z]", v):
            raise ValueError("Password must contain at least one letter")
        if not re.search(r"\d", v):
            raise ValueError("Password must contain at least one digit")
        return v


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def clean_email(cls, v: str) -> str:
        return normalize_email(v)


class RefreshRequest(BaseModel):
    refresh_token: str


class UserInfo(BaseModel):
    user_id: str
    email: str
    nickname: str | None
    is_admin: bool

    @classmethod
    def from_model(cls, user: UserModel) -> "UserInfo":
        return cls(
            user_id=str(user.id),
            email=user.email,
            nickname=user.nickname,
            is_admin=user.is_admin,
        )


class RegisterResponse(BaseModel):
    user_id: str
    email: str
    created_at: str
    # A fresh account always has to pick a nickname next
    is_new_user: bool = True

    @classmethod
    def from_model(cls, user: UserModel) -> "RegisterResponse":
        return cls(
            user_id=str(user.id),
            email=user.email,
            created_at=user.created_at.isoformat(),
        )


class LoginResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "Bearer"
    expires_in: int
    is_new_user: bool
    user: UserInfo

    @classmethod
    def issue(cls, user: UserModel, access_token: str, refresh_token: str) -> "LoginResponse":
        return cls(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=access_token_ttl_seconds(),
            is_new_user=user.nickname is None,
            user=UserInfo.from_model(user),
        )


class RefreshResponse(BaseModel):
    access_token: str
    expires_in: int

    @classmethod
    def issue(cls, access_token: str) -> "RefreshResponse":
        return cls(access_token=access_token, expires_in=access_token_ttl_seconds())


def access_token_ttl_seconds() -> int:
    return settings.JWT_EXPIRE_MINUTES * 60
