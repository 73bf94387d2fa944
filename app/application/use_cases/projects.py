"""Use cases for projects and their membership."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.application.use_cases.errors import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
)
from app.application.use_cases.notifications import (
    notify_added_to_project,
    notify_project_created,
)
from app.domain.entities import Project, ProjectMember, ProjectMemberProfile
from app.infrastructure.realtime import EventDispatcher
from app.infrastructure.repositories import ProjectRepository, UserRepository
from app.utils import now_in_app_timezone


def create_project(
    session: Session,
    dispatcher: EventDispatcher,
    *,
    owner_id: str,
    name: str,
    description: str | None = None,
) -> Project:
    """Create a project owned by ``owner_id`` and notify the creator."""

    name = (name or "").strip()
    if not name:
        raise ValueError("Project name is required")

    project = ProjectRepository(session).create_with_owner(
        Project(
            id=None,
            name=name,
            owner_id=owner_id,
            description=description or "",
            created_at=now_in_app_timezone(),
        )
    )
    notify_project_created(session, dispatcher, project=project)
    return project


def list_projects_for_user(session: Session, *, user_id: str) -> Sequence[Project]:
    """Return the projects ``user_id`` belongs to, newest first."""

    return ProjectRepository(session).list_for_member(user_id)


def get_project_for_member(session: Session, *, project_id: str, user_id: str) -> Project:
    """Return the project when ``user_id`` is one of its members."""

    repository = ProjectRepository(session)
    project = repository.get(project_id)
    if project is None:
        raise NotFoundError("Project not found")
    if not repository.is_member(project_id, user_id):
        raise PermissionDeniedError("Not a member")
    return project


def add_project_member(
    session: Session,
    dispatcher: EventDispatcher,
    *,
    project_id: str,
    acting_user_id: str,
    user_id: str,
) -> ProjectMember:
    """Add ``user_id`` to the project. Only the owner may invite."""

    repository = ProjectRepository(session)
    project = repository.get(project_id)
    if project is None:
        raise NotFoundError("Project not found")
    if not project.is_owned_by(acting_user_id):
        raise PermissionDeniedError("Only owner can add members")
    if not UserRepository(session).exists(user_id):
        raise NotFoundError("User not found")
    if repository.is_member(project_id, user_id):
        raise ConflictError("User is already a member")

    try:
        membership = repository.add_member(project_id, user_id)
    except IntegrityError as exc:
        session.rollback()
        raise ConflictError("User is already a member") from exc

    notify_added_to_project(session, dispatcher, project=project, user_id=user_id)
    return membership


def list_project_members(
    session: Session, *, project_id: str, user_id: str
) -> Sequence[ProjectMemberProfile]:
    """Return the members of a project the caller belongs to."""

    get_project_for_member(session, project_id=project_id, user_id=user_id)
    return ProjectRepository(session).list_members(project_id)


__all__ = [
    "create_project",
    "list_projects_for_user",
    "get_project_for_member",
    "add_project_member",
    "list_project_members",
]
