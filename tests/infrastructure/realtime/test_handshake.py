"""Tests for the channel handshake state machine."""

from __future__ import annotations

import pytest

from app.infrastructure.realtime import ChannelSession, ChannelState, ConnectionRegistry

pytestmark = pytest.mark.anyio

_TOKENS = {"token-alice": "alice", "token-alice-2": "alice", "token-bob": "bob"}


def _verify(token: str) -> str:
    try:
        return _TOKENS[token]
    except KeyError:
        raise ValueError("Could not validate credentials") from None


@pytest.fixture
def registry() -> ConnectionRegistry:
    return ConnectionRegistry()


@pytest.fixture
def channel(make_channel):
    return make_channel()


@pytest.fixture
def session(channel, registry) -> ChannelSession:
    return ChannelSession(channel, registry, _verify)


async def test_ping_is_answered_before_authentication(session, channel) -> None:
    await session.handle_frame('{"type": "ping"}')

    assert channel.types() == ["pong"]
    assert session.state is ChannelState.UNAUTHENTICATED


async def test_valid_token_registers_the_channel(session, channel, registry) -> None:
    await session.handle_frame('{"type": "auth", "token": "token-alice"}')

    assert channel.types() == ["auth_success"]
    assert session.state is ChannelState.AUTHENTICATED
    assert session.identity == "alice"
    assert registry.channels_for("alice") == {channel}


async def test_invalid_token_keeps_channel_usable(session, channel, registry) -> None:
    await session.handle_frame('{"type": "auth", "token": "forged"}')

    assert channel.sent == []
    assert session.state is ChannelState.UNAUTHENTICATED
    assert len(registry) == 0

    await session.handle_frame('{"type": "ping"}')
    await session.handle_frame('{"type": "auth", "token": "token-alice"}')

    assert channel.types() == ["pong", "auth_success"]
    assert registry.channels_for("alice") == {channel}


@pytest.mark.parametrize(
    "frame",
    [
        "not json",
        "[]",
        '"auth"',
        '{"type": "subscribe"}',
        '{"type": "auth"}',
        '{"type": "auth", "token": ""}',
        b"\xff\xfe",
    ],
)
async def test_malformed_frames_are_ignored(session, channel, registry, frame) -> None:
    await session.handle_frame(frame)

    assert channel.sent == []
    assert session.state is ChannelState.UNAUTHENTICATED
    assert len(registry) == 0


async def test_close_unregisters_and_is_terminal(session, channel, registry) -> None:
    await session.handle_frame('{"type": "auth", "token": "token-alice"}')

    session.close()
    session.close()

    assert session.state is ChannelState.CLOSED
    assert len(registry) == 0

    await session.handle_frame('{"type": "ping"}')
    await session.handle_frame('{"type": "auth", "token": "token-alice"}')
    assert channel.types() == ["auth_success"]
    assert len(registry) == 0


async def test_close_before_authentication_is_safe(session, registry) -> None:
    session.close()

    assert session.state is ChannelState.CLOSED
    assert len(registry) == 0


async def test_reauthentication_cannot_switch_identity(session, channel, registry) -> None:
    await session.handle_frame('{"type": "auth", "token": "token-alice"}')
    await session.handle_frame('{"type": "auth", "token": "token-bob"}')
    await session.handle_frame('{"type": "auth", "token": "token-alice-2"}')

    assert channel.types() == ["auth_success", "auth_success"]
    assert session.identity == "alice"
    assert registry.channels_for("bob") == set()
    assert registry.channels_for("alice") == {channel}


async def test_inbound_frames_refresh_activity(session, channel) -> None:
    channel.last_activity -= 60

    await session.handle_frame("garbage")

    assert channel.idle_for() < 60


async def test_verifier_database_error_keeps_channel_usable(channel, registry) -> None:
    from sqlalchemy.exc import OperationalError

    attempts = []

    def flaky_verify(token: str) -> str:
        attempts.append(token)
        if len(attempts) == 1:
            raise OperationalError("SELECT users", {}, Exception("database is locked"))
        return _verify(token)

    session = ChannelSession(channel, registry, flaky_verify)

    await session.handle_frame('{"type": "auth", "token": "token-alice"}')

    assert channel.sent == []
    assert session.state is ChannelState.UNAUTHENTICATED
    assert len(registry) == 0

    await session.handle_frame('{"type": "ping"}')
    await session.handle_frame('{"type": "auth", "token": "token-alice"}')

    assert channel.types() == ["pong", "auth_success"]
    assert registry.channels_for("alice") == {channel}
