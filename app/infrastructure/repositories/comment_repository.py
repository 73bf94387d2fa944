"""Persistence helpers for task comments."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Comment
from app.infrastructure.models import CommentModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone, now_in_app_timezone


class CommentRepository:
    """Provide creation and listing of :class:`Comment` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_task(self, task_id: str) -> Sequence[Comment]:
        query = (
            self.session.query(CommentModel)
            .filter(CommentModel.task_id == task_id)
            .order_by(CommentModel.created_at.asc(), CommentModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, comment: Comment) -> Comment:
        model = CommentModel(
            task_id=comment.task_id,
            user_id=comment.user_id,
            content=comment.content,
            created_at=ensure_app_naive_datetime(
                comment.created_at or now_in_app_timezone()
            ),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: CommentModel) -> Comment:
        return Comment(
            id=model.id,
            task_id=model.task_id,
            user_id=model.user_id,
            content=model.content,
            author_name=model.author.name if model.author else None,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["CommentRepository"]
