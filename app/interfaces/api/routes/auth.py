"""Endpoints for registration, login and the current user."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from app.application.use_cases.users import (
    AuthenticationStatus,
    authenticate_user,
    register_user,
)
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.infrastructure.security import create_access_token
from app.interfaces.api.dependencies import get_current_user
from app.interfaces.api.routes_helpers import http_error_from
from app.interfaces.api.schemas import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    Token,
    UserRead,
)

router = APIRouter(prefix="/api", tags=["auth"])
logger = logging.getLogger(__name__)


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        token=create_access_token(user.id),
        user=UserRead.model_validate(user),
    )


def _login(db: Session, email: str, password: str) -> User:
    user, auth_status = authenticate_user(db, email, password)
    if auth_status is not AuthenticationStatus.SUCCESS or user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


@router.post("/auth/register", response_model=AuthResponse)
def register(payload: RegisterRequest, db: Session = Depends(get_db)) -> AuthResponse:
    """Create an account and return a session token."""

    try:
        user = register_user(
            db, name=payload.name, email=payload.email, password=payload.password
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    logger.info("Registered user %s", user.id)
    return _auth_response(user)


@router.post("/auth/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> AuthResponse:
    """Authenticate by email and password."""

    return _auth_response(_login(db, payload.email, payload.password))


# Form variant used by the OpenAPI "Authorize" dialog.
@router.post("/auth/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
) -> Token:
    user = _login(db, form_data.username, form_data.password)
    return Token(access_token=create_access_token(user.id))


@router.get("/me", response_model=UserRead)
def read_me(current_user: User = Depends(get_current_user)) -> UserRead:
    return UserRead.model_validate(current_user)
