"""Pydantic models describing users."""

from .base import CamelModel


class UserRead(CamelModel):
    """Public profile of a user."""

    id: str
    name: str
    email: str
    avatar: str = ""


__all__ = ["UserRead"]
