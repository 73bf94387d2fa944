"""Shared fixtures: environment, a throwaway SQLite database and factories."""

from __future__ import annotations

import json
import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "taskrealm_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["PASSWORD_HASH_ROUNDS"] = "1000"
os.environ["APP_TIMEZONE"] = "UTC"

from app.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from app.domain.entities import Project, User  # noqa: E402
from app.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from app.infrastructure.realtime import Channel, ChannelClosedError  # noqa: E402
from app.infrastructure.repositories import (  # noqa: E402
    ProjectRepository,
    UserRepository,
)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def database():
    """Ensure every test starts from empty tables."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(database):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db_session):
    """Insert a user straight through the repository."""

    def _make_user(name: str) -> User:
        return UserRepository(db_session).create(
            User(
                id=None,
                name=name,
                email=f"{name.lower()}@example.com",
                password="not-a-real-hash",
            )
        )

    return _make_user


@pytest.fixture
def make_project(db_session):
    """Create a project owned by ``owner`` with ``members`` added to it."""

    def _make_project(owner: User, *members: User, name: str = "Apollo") -> Project:
        repository = ProjectRepository(db_session)
        project = repository.create_with_owner(
            Project(id=None, name=name, owner_id=owner.id)
        )
        for member in members:
            repository.add_member(project.id, member.id)
        return project

    return _make_project


class FakeChannel(Channel):
    """Channel recording every frame written to it.

    ``drops_on_send`` simulates a transport that still looks open but fails
    when written to, as happens when a client vanishes mid fan-out.
    """

    def __init__(self, *, open: bool = True, drops_on_send: bool = False) -> None:
        super().__init__()
        self.open = open
        self.drops_on_send = drops_on_send
        self.sent: list[str] = []

    @property
    def is_open(self) -> bool:
        return self.open

    async def _transmit(self, text: str) -> None:
        if self.drops_on_send:
            self.open = False
            raise ChannelClosedError("gone")
        self.sent.append(text)

    def messages(self) -> list[dict]:
        return [json.loads(frame) for frame in self.sent]

    def types(self) -> list[str]:
        return [message["type"] for message in self.messages()]


@pytest.fixture
def make_channel():
    def _make_channel(**kwargs) -> FakeChannel:
        return FakeChannel(**kwargs)

    return _make_channel


@pytest.fixture
def client(database):
    """Application client; its portal thread hosts the dispatcher loop."""

    from fastapi.testclient import TestClient

    from main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client
