"""SQLAlchemy model for project tasks."""

from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime

from ._ids import new_id


class TaskModel(Base):
    """Database representation of a task."""

    __tablename__ = "task"

    id = Column(String(36), primary_key=True, default=new_id)
    project_id = Column(String(36), ForeignKey("project.id"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    status = Column(String(30), nullable=False, default="todo")
    priority = Column(String(30), nullable=False, default="medium")
    assignee_id = Column(String(36), ForeignKey("user.id"), nullable=True)
    created_by = Column(String(36), ForeignKey("user.id"), nullable=False)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    due_date = Column(DateTime(), nullable=True)

    assignee = relationship("UserModel", foreign_keys=[assignee_id], lazy="joined")
    comments = relationship(
        "CommentModel",
        back_populates="task",
        cascade="all, delete-orphan",
    )


__all__ = ["TaskModel"]
