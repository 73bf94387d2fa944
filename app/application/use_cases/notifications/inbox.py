"""Use cases for reading and acknowledging stored notifications."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.application.use_cases.errors import NotFoundError
from app.domain.entities import Notification
from app.infrastructure.repositories import NotificationRepository


def list_notifications(
    session: Session, *, user_id: str, limit: int | None = 20
) -> Sequence[Notification]:
    """Return the latest notifications of ``user_id``, newest first."""

    return NotificationRepository(session).list_for_user(user_id, limit=limit)


def mark_notification_read(
    session: Session, *, notification_id: str, user_id: str
) -> Notification:
    """Flag a notification as read. Repeating the call changes nothing."""

    notification = NotificationRepository(session).mark_as_read(
        notification_id, user_id=user_id
    )
    if notification is None:
        raise NotFoundError("Notification not found")
    return notification


__all__ = ["list_notifications", "mark_notification_read"]
