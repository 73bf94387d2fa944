"""Tests for the connection registry bookkeeping."""

from __future__ import annotations

from app.infrastructure.realtime import ConnectionRegistry


def test_register_then_unregister_last_channel_drops_identity(make_channel) -> None:
    registry = ConnectionRegistry()
    channel = make_channel()

    registry.register("alice", channel)
    assert registry.channels_for("alice") == {channel}
    assert registry.identity_of(channel) == "alice"

    registry.unregister(channel)
    assert registry.channels_for("alice") == set()
    assert "alice" not in registry.connected_identities()
    assert channel not in registry
    assert len(registry) == 0


def test_register_is_idempotent(make_channel) -> None:
    registry = ConnectionRegistry()
    channel = make_channel()

    registry.register("alice", channel)
    registry.register("alice", channel)

    assert len(registry) == 1
    assert registry.channels_for("alice") == {channel}


def test_identity_keeps_every_session(make_channel) -> None:
    registry = ConnectionRegistry()
    first, second = make_channel(), make_channel()

    registry.register("alice", first)
    registry.register("alice", second)
    registry.unregister(first)

    assert registry.channels_for("alice") == {second}
    assert registry.connected_identities() == {"alice"}


def test_unregister_unknown_channel_is_a_noop(make_channel) -> None:
    registry = ConnectionRegistry()
    registry.register("alice", make_channel())

    registry.unregister(make_channel())

    assert len(registry) == 1


def test_channel_belongs_to_a_single_identity(make_channel) -> None:
    registry = ConnectionRegistry()
    channel = make_channel()

    registry.register("alice", channel)
    registry.register("bob", channel)

    assert registry.channels_for("alice") == set()
    assert registry.channels_for("bob") == {channel}
    assert registry.connected_identities() == {"bob"}


def test_channels_for_skips_closed_transports(make_channel) -> None:
    registry = ConnectionRegistry()
    live, dead = make_channel(), make_channel(open=False)
    registry.register("alice", live)
    registry.register("alice", dead)

    assert registry.channels_for("alice") == {live}
    assert registry.channels_for("nobody") == set()


def test_channels_for_returns_a_snapshot(make_channel) -> None:
    registry = ConnectionRegistry()
    channel = make_channel()
    registry.register("alice", channel)

    snapshot = registry.channels_for("alice")
    snapshot.clear()

    assert registry.channels_for("alice") == {channel}
