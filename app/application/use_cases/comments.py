"""Use cases for task comments."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.application.use_cases.tasks import get_task
from app.domain.entities import Comment, CommentAdded
from app.infrastructure.realtime import EventDispatcher
from app.infrastructure.repositories import CommentRepository
from app.utils import now_in_app_timezone


def add_comment(
    session: Session,
    dispatcher: EventDispatcher,
    *,
    task_id: str,
    user_id: str,
    content: str,
) -> Comment:
    """Store a comment on a task and broadcast it to the project."""

    task = get_task(session, task_id=task_id, user_id=user_id)
    content = (content or "").strip()
    if not content:
        raise ValueError("Comment content is required")

    comment = CommentRepository(session).create(
        Comment(
            id=None,
            task_id=task_id,
            user_id=user_id,
            content=content,
            created_at=now_in_app_timezone(),
        )
    )
    dispatcher.dispatch_event(
        session,
        CommentAdded(project_id=task.project_id, task_id=task_id, comment=comment),
    )
    return comment


def list_comments(session: Session, *, task_id: str, user_id: str) -> Sequence[Comment]:
    """Return the comments of a task, oldest first."""

    get_task(session, task_id=task_id, user_id=user_id)
    return CommentRepository(session).list_for_task(task_id)


__all__ = ["add_comment", "list_comments"]
