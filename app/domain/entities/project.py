"""Domain entities describing projects and their membership."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

PROJECT_ROLE_OWNER = "owner"
PROJECT_ROLE_MEMBER = "member"


@dataclass
class Project:
    """A workspace grouping tasks and the users collaborating on them."""

    id: str | None
    name: str
    owner_id: str
    description: str = ""
    created_at: datetime | None = None

    def is_owned_by(self, user_id: str) -> bool:
        return self.owner_id == user_id


@dataclass
class ProjectMember:
    """Membership of a user in a project."""

    id: str | None
    project_id: str
    user_id: str
    role: str = PROJECT_ROLE_MEMBER
    joined_at: datetime | None = None


@dataclass
class ProjectMemberProfile:
    """Membership joined with the public profile of the member."""

    user_id: str
    name: str
    email: str
    avatar: str
    role: str
    joined_at: datetime | None


__all__ = [
    "PROJECT_ROLE_OWNER",
    "PROJECT_ROLE_MEMBER",
    "Project",
    "ProjectMember",
    "ProjectMemberProfile",
]
