"""Persistence helpers for task entities."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Task
from app.infrastructure.models import TaskModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone, now_in_app_timezone


class TaskRepository:
    """Provide CRUD operations for :class:`Task` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, task_id: str) -> Task | None:
        model = self.session.get(TaskModel, task_id)
        return self._to_entity(model) if model else None

    def list_for_project(self, project_id: str) -> Sequence[Task]:
        query = (
            self.session.query(TaskModel)
            .filter(TaskModel.project_id == project_id)
            .order_by(TaskModel.created_at.desc(), TaskModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, task: Task) -> Task:
        model = TaskModel(project_id=task.project_id, created_by=task.created_by)
        self._apply_entity_to_model(model, task)
        model.created_at = ensure_app_naive_datetime(
            task.created_at or now_in_app_timezone()
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, task: Task) -> Task:
        if task.id is None:
            raise ValueError("Task id is required for updates")
        model = self.session.get(TaskModel, task.id)
        if model is None:
            raise ValueError(f"Task with id {task.id} not found")
        self._apply_entity_to_model(model, task)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, task_id: str) -> bool:
        model = self.session.get(TaskModel, task_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    @staticmethod
    def _apply_entity_to_model(model: TaskModel, task: Task) -> None:
        model.title = task.title
        model.description = task.description or ""
        model.status = task.status
        model.priority = task.priority
        model.assignee_id = task.assignee_id
        model.due_date = ensure_app_naive_datetime(task.due_date)

    @staticmethod
    def _to_entity(model: TaskModel) -> Task:
        return Task(
            id=model.id,
            project_id=model.project_id,
            title=model.title,
            created_by=model.created_by,
            description=model.description or "",
            status=model.status,
            priority=model.priority,
            assignee_id=model.assignee_id,
            assignee_name=model.assignee.name if model.assignee else None,
            created_at=ensure_app_timezone(model.created_at),
            due_date=ensure_app_timezone(model.due_date),
        )


__all__ = ["TaskRepository"]
