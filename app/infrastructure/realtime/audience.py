"""Resolution of the users eligible to receive project events."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.infrastructure.repositories import ProjectRepository


class AudienceResolver:
    """Read project membership straight from the database.

    Nothing is cached: a membership change is visible to the very next
    dispatch. Unknown projects simply have no members.
    """

    def __init__(self, session: Session) -> None:
        self._projects = ProjectRepository(session)

    def members_of(self, project_id: str) -> set[str]:
        return self._projects.member_ids(project_id)


__all__ = ["AudienceResolver"]
