"""Domain entities exposed by the application."""

from .comment import Comment
from .domain_event import (
    CommentAdded,
    DomainEvent,
    TaskCreated,
    TaskDeleted,
    TaskUpdated,
)
from .notification import (
    NOTIFICATION_ADDED_TO_PROJECT,
    NOTIFICATION_KINDS,
    NOTIFICATION_PROJECT_CREATED,
    NOTIFICATION_TASK_CREATED,
    Notification,
)
from .project import (
    PROJECT_ROLE_MEMBER,
    PROJECT_ROLE_OWNER,
    Project,
    ProjectMember,
    ProjectMemberProfile,
)
from .task import TASK_PRIORITY_MEDIUM, TASK_STATUS_TODO, Task
from .user import User

__all__ = [
    "Comment",
    "CommentAdded",
    "DomainEvent",
    "TaskCreated",
    "TaskDeleted",
    "TaskUpdated",
    "NOTIFICATION_ADDED_TO_PROJECT",
    "NOTIFICATION_KINDS",
    "NOTIFICATION_PROJECT_CREATED",
    "NOTIFICATION_TASK_CREATED",
    "Notification",
    "PROJECT_ROLE_MEMBER",
    "PROJECT_ROLE_OWNER",
    "Project",
    "ProjectMember",
    "ProjectMemberProfile",
    "TASK_PRIORITY_MEDIUM",
    "TASK_STATUS_TODO",
    "Task",
    "User",
]
