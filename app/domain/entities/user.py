"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Core attributes describing an application user."""

    id: str | None
    name: str
    email: str
    password: str
    avatar: str = ""
    created_at: datetime | None = None
