"""ORM models used by the application infrastructure."""

from .comment import CommentModel
from .notification import NotificationModel
from .project import ProjectMemberModel, ProjectModel
from .task import TaskModel
from .user import UserModel

__all__ = [
    "CommentModel",
    "NotificationModel",
    "ProjectMemberModel",
    "ProjectModel",
    "TaskModel",
    "UserModel",
]
