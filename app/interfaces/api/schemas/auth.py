"""Authentication related schemas."""

from pydantic import EmailStr, Field

from .base import CamelModel
from .user import UserRead


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class AuthResponse(CamelModel):
    """Token issued after registration or login with the matching profile."""

    token: str
    user: UserRead


class Token(CamelModel):
    access_token: str
    token_type: str = "bearer"


__all__ = ["RegisterRequest", "LoginRequest", "AuthResponse", "Token"]
