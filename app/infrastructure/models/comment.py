"""SQLAlchemy model for task comments."""

from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime

from ._ids import new_id


class CommentModel(Base):
    """Database representation of a comment left on a task."""

    __tablename__ = "comment"

    id = Column(String(36), primary_key=True, default=new_id)
    task_id = Column(
        String(36),
        ForeignKey("task.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(String(36), ForeignKey("user.id"), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)

    task = relationship("TaskModel", back_populates="comments")
    author = relationship("UserModel", lazy="joined")


__all__ = ["CommentModel"]
