"""Domain events broadcast to project members when tasks or comments change."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .comment import Comment
from .task import Task


@dataclass(frozen=True)
class TaskCreated:
    """A task was added to ``project_id``."""

    project_id: str
    task: Task


@dataclass(frozen=True)
class TaskUpdated:
    """A task of ``project_id`` changed."""

    project_id: str
    task: Task


@dataclass(frozen=True)
class TaskDeleted:
    """A task was removed from ``project_id``."""

    project_id: str
    task_id: str


@dataclass(frozen=True)
class CommentAdded:
    """A comment was left on ``task_id``."""

    project_id: str
    task_id: str
    comment: Comment


DomainEvent = Union[TaskCreated, TaskUpdated, TaskDeleted, CommentAdded]


__all__ = [
    "TaskCreated",
    "TaskUpdated",
    "TaskDeleted",
    "CommentAdded",
    "DomainEvent",
]
