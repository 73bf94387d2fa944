"""Identifier helpers shared by the ORM models."""

from uuid import uuid4


def new_id() -> str:
    """Return a fresh opaque identifier."""

    return str(uuid4())
