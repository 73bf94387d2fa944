"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.database import SessionLocal, get_db
from app.infrastructure.realtime import EventDispatcher
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import identity_from_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/auth/token")


def _credentials_exception(detail: str = "Invalid token") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token."""

    try:
        identity = identity_from_token(token)
    except ValueError as exc:
        raise _credentials_exception() from exc

    user = UserRepository(db).get(identity)
    if user is None:
        raise _credentials_exception("User not found")
    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token, db)


def verify_channel_token(token: str) -> str:
    """Return the identity a websocket ``auth`` token belongs to.

    Blocking; the handshake runs it in a worker thread. Raises ``ValueError``
    for invalid tokens and unknown users.
    """

    identity = identity_from_token(token)
    with SessionLocal() as session:
        if not UserRepository(session).exists(identity):
            raise ValueError("Unknown user")
    return identity


def get_event_dispatcher(request: Request) -> EventDispatcher:
    """Return the dispatcher bound to the running application."""

    return request.app.state.event_dispatcher
