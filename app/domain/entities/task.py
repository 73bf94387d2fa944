"""Domain entity representing a project task."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

TASK_STATUS_TODO = "todo"
TASK_PRIORITY_MEDIUM = "medium"


@dataclass
class Task:
    """Unit of work tracked inside a project."""

    id: str | None
    project_id: str
    title: str
    created_by: str
    description: str = ""
    status: str = TASK_STATUS_TODO
    priority: str = TASK_PRIORITY_MEDIUM
    assignee_id: str | None = None
    assignee_name: str | None = None
    created_at: datetime | None = None
    due_date: datetime | None = None


__all__ = ["TASK_STATUS_TODO", "TASK_PRIORITY_MEDIUM", "Task"]
