"""Pydantic models describing projects and membership."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .base import CamelModel


class ProjectCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=120)
    description: str | None = None


class ProjectRead(CamelModel):
    id: str
    name: str
    description: str = ""
    owner_id: str
    created_at: datetime | None = None


class MemberAddRequest(CamelModel):
    user_id: str = Field(..., min_length=1, description="Identity of the user to add")


class MembershipRead(CamelModel):
    id: str
    project_id: str
    user_id: str
    role: str


class ProjectMemberRead(CamelModel):
    """Member profile with the role held in the project."""

    id: str
    name: str
    email: str
    avatar: str = ""
    role: str
    joined_at: datetime | None = None


__all__ = [
    "ProjectCreate",
    "ProjectRead",
    "MemberAddRequest",
    "MembershipRead",
    "ProjectMemberRead",
]
