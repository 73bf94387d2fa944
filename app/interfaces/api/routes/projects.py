"""Endpoints for projects and their members."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.application.use_cases.projects import (
    add_project_member,
    create_project,
    get_project_for_member,
    list_project_members,
    list_projects_for_user,
)
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.infrastructure.realtime import EventDispatcher
from app.interfaces.api.dependencies import get_current_user, get_event_dispatcher
from app.interfaces.api.routes_helpers import http_error_from
from app.interfaces.api.schemas import (
    MemberAddRequest,
    MembershipRead,
    ProjectCreate,
    ProjectMemberRead,
    ProjectRead,
)

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.post("", response_model=ProjectRead)
def create_project_endpoint(
    payload: ProjectCreate,
    db: Session = Depends(get_db),
    dispatcher: EventDispatcher = Depends(get_event_dispatcher),
    current_user: User = Depends(get_current_user),
) -> ProjectRead:
    try:
        project = create_project(
            db,
            dispatcher,
            owner_id=current_user.id,
            name=payload.name,
            description=payload.description,
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return ProjectRead.model_validate(project)


@router.get("", response_model=list[ProjectRead])
def list_projects(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[ProjectRead]:
    projects = list_projects_for_user(db, user_id=current_user.id)
    return [ProjectRead.model_validate(project) for project in projects]


@router.get("/{project_id}", response_model=ProjectRead)
def get_project(
    project_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ProjectRead:
    try:
        project = get_project_for_member(db, project_id=project_id, user_id=current_user.id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return ProjectRead.model_validate(project)


@router.post("/{project_id}/members", response_model=MembershipRead)
def add_member(
    project_id: str,
    payload: MemberAddRequest,
    db: Session = Depends(get_db),
    dispatcher: EventDispatcher = Depends(get_event_dispatcher),
    current_user: User = Depends(get_current_user),
) -> MembershipRead:
    """Invite an existing user into the project (owner only)."""

    try:
        membership = add_project_member(
            db,
            dispatcher,
            project_id=project_id,
            acting_user_id=current_user.id,
            user_id=payload.user_id,
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return MembershipRead.model_validate(membership)


@router.get("/{project_id}/members", response_model=list[ProjectMemberRead])
def list_members(
    project_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[ProjectMemberRead]:
    try:
        members = list_project_members(db, project_id=project_id, user_id=current_user.id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return [
        ProjectMemberRead(
            id=member.user_id,
            name=member.name,
            email=member.email,
            avatar=member.avatar,
            role=member.role,
            joined_at=member.joined_at,
        )
        for member in members
    ]
