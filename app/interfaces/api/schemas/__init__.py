from .auth import AuthResponse, LoginRequest, RegisterRequest, Token
from .base import CamelModel, SuccessResponse
from .comment import CommentCreate, CommentRead
from .notification import NotificationRead
from .project import (
    MemberAddRequest,
    MembershipRead,
    ProjectCreate,
    ProjectMemberRead,
    ProjectRead,
)
from .task import TaskCreate, TaskRead, TaskUpdate
from .user import UserRead

__all__ = [
    "AuthResponse",
    "LoginRequest",
    "RegisterRequest",
    "Token",
    "CamelModel",
    "SuccessResponse",
    "CommentCreate",
    "CommentRead",
    "NotificationRead",
    "MemberAddRequest",
    "MembershipRead",
    "ProjectCreate",
    "ProjectMemberRead",
    "ProjectRead",
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
    "UserRead",
]
