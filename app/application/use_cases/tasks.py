"""Use cases for tasks inside a project."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from datetime import datetime

from sqlalchemy.orm import Session

from app.application.use_cases.errors import NotFoundError, PermissionDeniedError
from app.application.use_cases.notifications import notify_task_created
from app.application.use_cases.projects import get_project_for_member
from app.domain.entities import (
    TASK_PRIORITY_MEDIUM,
    TASK_STATUS_TODO,
    Task,
    TaskCreated,
    TaskDeleted,
    TaskUpdated,
)
from app.infrastructure.realtime import AudienceResolver, EventDispatcher
from app.infrastructure.repositories import ProjectRepository, TaskRepository
from app.utils import now_in_app_timezone


def create_task(
    session: Session,
    dispatcher: EventDispatcher,
    *,
    project_id: str,
    user_id: str,
    title: str,
    description: str | None = None,
    priority: str | None = None,
    assignee_id: str | None = None,
    due_date: datetime | None = None,
) -> Task:
    """Create a task, notify every member and broadcast it live."""

    get_project_for_member(session, project_id=project_id, user_id=user_id)
    title = (title or "").strip()
    if not title:
        raise ValueError("Task title is required")

    task = TaskRepository(session).create(
        Task(
            id=None,
            project_id=project_id,
            title=title,
            created_by=user_id,
            description=description or "",
            status=TASK_STATUS_TODO,
            priority=priority or TASK_PRIORITY_MEDIUM,
            assignee_id=assignee_id,
            created_at=now_in_app_timezone(),
            due_date=due_date,
        )
    )

    members = AudienceResolver(session).members_of(project_id)
    notify_task_created(session, dispatcher, task=task, recipients=members)
    dispatcher.dispatch_event(session, TaskCreated(project_id=project_id, task=task))
    return task


def list_tasks(session: Session, *, project_id: str, user_id: str) -> Sequence[Task]:
    """Return the tasks of a project, newest first."""

    get_project_for_member(session, project_id=project_id, user_id=user_id)
    return TaskRepository(session).list_for_project(project_id)


def get_task(session: Session, *, task_id: str, user_id: str) -> Task:
    """Return a task of a project the caller belongs to."""

    task = TaskRepository(session).get(task_id)
    if task is None:
        raise NotFoundError("Task not found")
    if not ProjectRepository(session).is_member(task.project_id, user_id):
        raise PermissionDeniedError("Not a member")
    return task


def update_task(
    session: Session,
    dispatcher: EventDispatcher,
    *,
    task_id: str,
    user_id: str,
    changes: dict[str, object],
) -> Task:
    """Apply the provided ``changes`` and broadcast the new snapshot.

    Keys missing from ``changes`` keep their current value. ``title``,
    ``status`` and ``priority`` ignore empty values.
    """

    current = get_task(session, task_id=task_id, user_id=user_id)

    updates: dict[str, object] = {}
    for field_name in ("title", "status", "priority"):
        value = changes.get(field_name)
        if value:
            updates[field_name] = value
    for field_name in ("description", "assignee_id", "due_date"):
        if field_name in changes:
            updates[field_name] = changes[field_name]

    updated = TaskRepository(session).update(replace(current, **updates))
    dispatcher.dispatch_event(
        session, TaskUpdated(project_id=updated.project_id, task=updated)
    )
    return updated


def delete_task(
    session: Session, dispatcher: EventDispatcher, *, task_id: str, user_id: str
) -> None:
    """Remove a task with its comments and broadcast the removal."""

    task = get_task(session, task_id=task_id, user_id=user_id)
    TaskRepository(session).delete(task_id)
    dispatcher.dispatch_event(session, TaskDeleted(project_id=task.project_id, task_id=task_id))


__all__ = ["create_task", "list_tasks", "get_task", "update_task", "delete_task"]
