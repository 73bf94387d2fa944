"""Domain entity representing a task comment."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Comment:
    """Free-text remark left by a user on a task."""

    id: str | None
    task_id: str
    user_id: str
    content: str
    author_name: str | None = None
    created_at: datetime | None = None


__all__ = ["Comment"]
