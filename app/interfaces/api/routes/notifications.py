"""Endpoints for stored notifications."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    list_notifications,
    mark_notification_read,
)
from app.config import get_settings
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_current_user
from app.interfaces.api.routes_helpers import http_error_from
from app.interfaces.api.schemas import NotificationRead, SuccessResponse

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationRead])
def list_notifications_endpoint(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[NotificationRead]:
    """Return the most recent notifications for the authenticated user."""

    notifications = list_notifications(
        db,
        user_id=current_user.id,
        limit=get_settings().notification_list_limit,
    )
    return [NotificationRead.from_entity(notification) for notification in notifications]


@router.put("/{notification_id}/read", response_model=SuccessResponse)
def mark_read_endpoint(
    notification_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> SuccessResponse:
    try:
        mark_notification_read(db, notification_id=notification_id, user_id=current_user.id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return SuccessResponse()
