"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

NOTIFICATION_PROJECT_CREATED = "project_created"
NOTIFICATION_ADDED_TO_PROJECT = "added_to_project"
NOTIFICATION_TASK_CREATED = "task_created"

NOTIFICATION_KINDS = frozenset(
    {
        NOTIFICATION_PROJECT_CREATED,
        NOTIFICATION_ADDED_TO_PROJECT,
        NOTIFICATION_TASK_CREATED,
    }
)


@dataclass
class Notification:
    """Information message delivered to a specific user.

    Only ``read`` and ``read_at`` ever change after creation, and ``read`` only
    moves from ``False`` to ``True``.
    """

    id: str | None
    recipient_id: str
    kind: str
    content: str
    project_id: str | None = None
    task_id: str | None = None
    read: bool = False
    created_at: datetime | None = None
    read_at: datetime | None = None


__all__ = [
    "NOTIFICATION_PROJECT_CREATED",
    "NOTIFICATION_ADDED_TO_PROJECT",
    "NOTIFICATION_TASK_CREATED",
    "NOTIFICATION_KINDS",
    "Notification",
]
