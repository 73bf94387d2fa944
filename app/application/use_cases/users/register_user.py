"""Use case for registering users."""

from sqlalchemy.orm import Session

from app.application.use_cases.errors import ConflictError
from app.domain.entities import User
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import get_password_hash
from app.utils import now_in_app_timezone


def register_user(session: Session, *, name: str, email: str, password: str) -> User:
    """Create a new user ensuring unique email addresses."""

    name = name.strip()
    if not name or not email or not password:
        raise ValueError("Missing fields")

    repository = UserRepository(session)
    if repository.get_by_email(email):
        raise ConflictError("Email already registered")

    user = User(
        id=None,
        name=name,
        email=email,
        password=get_password_hash(password),
        created_at=now_in_app_timezone(),
    )
    return repository.create(user)
