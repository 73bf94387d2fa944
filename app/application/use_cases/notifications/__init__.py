"""Public helpers for emitting and reading user notifications."""

from .events import (
    notify_added_to_project,
    notify_project_created,
    notify_task_created,
)
from .inbox import list_notifications, mark_notification_read

__all__ = [
    "notify_added_to_project",
    "notify_project_created",
    "notify_task_created",
    "list_notifications",
    "mark_notification_read",
]
