"""Persistence helpers for projects and their membership."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import (
    PROJECT_ROLE_MEMBER,
    PROJECT_ROLE_OWNER,
    Project,
    ProjectMember,
    ProjectMemberProfile,
)
from app.infrastructure.models import ProjectMemberModel, ProjectModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone, now_in_app_timezone


class ProjectRepository:
    """Provide CRUD operations for :class:`Project` and its members."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, project_id: str) -> Project | None:
        model = self.session.get(ProjectModel, project_id)
        return self._to_entity(model) if model else None

    def list_for_member(self, user_id: str) -> Sequence[Project]:
        query = (
            self.session.query(ProjectModel)
            .join(ProjectMemberModel, ProjectMemberModel.project_id == ProjectModel.id)
            .filter(ProjectMemberModel.user_id == user_id)
            .order_by(ProjectModel.created_at.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def create_with_owner(self, project: Project) -> Project:
        """Insert ``project`` and register its owner as a member in one commit."""

        now = ensure_app_naive_datetime(project.created_at or now_in_app_timezone())
        model = ProjectModel(
            name=project.name,
            description=project.description or "",
            owner_id=project.owner_id,
            created_at=now,
        )
        model.members.append(
            ProjectMemberModel(
                user_id=project.owner_id,
                role=PROJECT_ROLE_OWNER,
                joined_at=now,
            )
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def add_member(
        self, project_id: str, user_id: str, *, role: str = PROJECT_ROLE_MEMBER
    ) -> ProjectMember:
        model = ProjectMemberModel(
            project_id=project_id,
            user_id=user_id,
            role=role,
            joined_at=ensure_app_naive_datetime(now_in_app_timezone()),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return ProjectMember(
            id=model.id,
            project_id=model.project_id,
            user_id=model.user_id,
            role=model.role,
            joined_at=ensure_app_timezone(model.joined_at),
        )

    def is_member(self, project_id: str, user_id: str) -> bool:
        return (
            self.session.query(ProjectMemberModel.id)
            .filter(
                ProjectMemberModel.project_id == project_id,
                ProjectMemberModel.user_id == user_id,
            )
            .first()
            is not None
        )

    def member_ids(self, project_id: str) -> set[str]:
        """Return the identities of every member of ``project_id``."""

        rows = (
            self.session.query(ProjectMemberModel.user_id)
            .filter(ProjectMemberModel.project_id == project_id)
            .all()
        )
        return {user_id for (user_id,) in rows}

    def list_members(self, project_id: str) -> Sequence[ProjectMemberProfile]:
        query = (
            self.session.query(ProjectMemberModel)
            .filter(ProjectMemberModel.project_id == project_id)
            .order_by(ProjectMemberModel.joined_at.asc())
        )
        return [
            ProjectMemberProfile(
                user_id=model.user_id,
                name=model.user.name,
                email=model.user.email,
                avatar=model.user.avatar or "",
                role=model.role,
                joined_at=ensure_app_timezone(model.joined_at),
            )
            for model in query.all()
        ]

    @staticmethod
    def _to_entity(model: ProjectModel) -> Project:
        return Project(
            id=model.id,
            name=model.name,
            owner_id=model.owner_id,
            description=model.description or "",
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["ProjectRepository"]
