"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from app.domain.entities import Notification

from .base import CamelModel


class NotificationRead(CamelModel):
    """Representation of a notification delivered to the client."""

    id: str
    user_id: str
    kind: str = Field(alias="type")
    content: str
    project_id: str | None = None
    task_id: str | None = None
    read: bool = False
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, notification: Notification) -> "NotificationRead":
        return cls(
            id=notification.id,
            user_id=notification.recipient_id,
            kind=notification.kind,
            content=notification.content,
            project_id=notification.project_id,
            task_id=notification.task_id,
            read=notification.read,
            created_at=notification.created_at,
        )


__all__ = ["NotificationRead"]
