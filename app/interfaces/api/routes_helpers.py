"""Helpers shared by the API route modules."""

from fastapi import HTTPException, status

from app.application.use_cases.errors import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
)


def http_error_from(exc: ValueError) -> HTTPException:
    """Translate a use-case error into the matching HTTP error."""

    if isinstance(exc, NotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, PermissionDeniedError):
        code = status.HTTP_403_FORBIDDEN
    elif isinstance(exc, ConflictError):
        code = status.HTTP_409_CONFLICT
    else:
        code = status.HTTP_400_BAD_REQUEST
    return HTTPException(status_code=code, detail=str(exc))
