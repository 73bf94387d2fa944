"""Repository implementations for infrastructure layer."""

from .comment_repository import CommentRepository
from .notification_repository import NotificationRepository
from .project_repository import ProjectRepository
from .task_repository import TaskRepository
from .user_repository import UserRepository

__all__ = [
    "CommentRepository",
    "NotificationRepository",
    "ProjectRepository",
    "TaskRepository",
    "UserRepository",
]
