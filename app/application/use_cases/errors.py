"""Errors raised by use cases and translated to HTTP responses by the API."""


class NotFoundError(ValueError):
    """The requested resource does not exist."""


class PermissionDeniedError(ValueError):
    """The acting user may not perform the operation."""


class ConflictError(ValueError):
    """The operation clashes with the current state of a resource."""


__all__ = ["NotFoundError", "PermissionDeniedError", "ConflictError"]
