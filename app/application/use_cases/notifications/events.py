"""Utility helpers to generate and dispatch domain notifications."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.entities import (
    NOTIFICATION_ADDED_TO_PROJECT,
    NOTIFICATION_PROJECT_CREATED,
    NOTIFICATION_TASK_CREATED,
    Notification,
    Project,
    Task,
)
from app.infrastructure.realtime import EventDispatcher

logger = logging.getLogger(__name__)


def _persist_notification(
    session: Session,
    dispatcher: EventDispatcher,
    *,
    user_id: str,
    kind: str,
    content: str,
    project_id: str | None = None,
    task_id: str | None = None,
) -> Notification | None:
    """Store and push one notification.

    The mutation that triggered the notification is already committed, so a
    storage failure is logged and reported as ``None`` instead of failing the
    request.
    """

    try:
        return dispatcher.dispatch_notification(
            session,
            recipient_id=user_id,
            kind=kind,
            content=content,
            project_id=project_id,
            task_id=task_id,
        )
    except SQLAlchemyError:
        logger.exception("Could not store %s notification for user %s", kind, user_id)
        return None


def notify_project_created(
    session: Session, dispatcher: EventDispatcher, *, project: Project
) -> Notification | None:
    """Confirm to the creator that the project exists."""

    return _persist_notification(
        session,
        dispatcher,
        user_id=project.owner_id,
        kind=NOTIFICATION_PROJECT_CREATED,
        content=f'You created project "{project.name}"',
        project_id=project.id,
    )


def notify_added_to_project(
    session: Session, dispatcher: EventDispatcher, *, project: Project, user_id: str
) -> Notification | None:
    """Tell ``user_id`` they joined ``project``."""

    return _persist_notification(
        session,
        dispatcher,
        user_id=user_id,
        kind=NOTIFICATION_ADDED_TO_PROJECT,
        content=f'Added to project "{project.name}"',
        project_id=project.id,
    )


def notify_task_created(
    session: Session,
    dispatcher: EventDispatcher,
    *,
    task: Task,
    recipients: Iterable[str],
) -> list[Notification]:
    """Notify every member of the task's project about the new task."""

    created: list[Notification] = []
    for user_id in sorted(set(recipients)):
        notification = _persist_notification(
            session,
            dispatcher,
            user_id=user_id,
            kind=NOTIFICATION_TASK_CREATED,
            content=f'New task: "{task.title}"',
            project_id=task.project_id,
            task_id=task.id,
        )
        if notification is not None:
            created.append(notification)
    return created


__all__ = [
    "notify_project_created",
    "notify_added_to_project",
    "notify_task_created",
]
