"""Pydantic models describing task comments."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .base import CamelModel


class CommentCreate(CamelModel):
    content: str = Field(..., min_length=1)


class CommentRead(CamelModel):
    id: str
    task_id: str
    user_id: str
    content: str
    author_name: str | None = None
    created_at: datetime | None = None


__all__ = ["CommentCreate", "CommentRead"]
