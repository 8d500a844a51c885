"""Authentication payloads."""
from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field

from .common import ApiModel, UserSummary


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=30)
    email: EmailStr
    password: str = Field(..., min_length=6)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class AuthResponse(ApiModel):
    token: str
    user: UserSummary


__all__ = ["AuthResponse", "LoginRequest", "RegisterRequest"]
