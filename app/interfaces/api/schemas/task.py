"""Pydantic models describing tasks."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .base import CamelModel


class TaskCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    priority: str | None = None
    assignee_id: str | None = None
    due_date: datetime | None = None


class TaskUpdate(CamelModel):
    """Partial update; only the keys sent by the client are applied."""

    title: str | None = Field(default=None, max_length=200)
    description: str | None = None
    status: str | None = None
    priority: str | None = None
    assignee_id: str | None = None
    due_date: datetime | None = None


class TaskRead(CamelModel):
    id: str
    project_id: str
    title: str
    description: str = ""
    status: str
    priority: str
    assignee_id: str | None = None
    assignee_name: str | None = None
    created_by: str
    created_at: datetime | None = None
    due_date: datetime | None = None


__all__ = ["TaskCreate", "TaskUpdate", "TaskRead"]
