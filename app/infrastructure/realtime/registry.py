"""Connection bookkeeping for authenticated push channels."""

from __future__ import annotations

import logging
from typing import Dict, Set

from .channel import Channel

logger = logging.getLogger(__name__)


class ConnectionRegistry:
    """Track the live channels of every connected user.

    One identity may own several channels (one per browser tab); a channel is
    owned by at most one identity. Identities without channels are dropped
    from the table.

    The registry is not thread-safe. It must only be touched from the event
    loop that serves the websockets; code running in worker threads goes
    through :class:`~app.infrastructure.realtime.dispatcher.EventDispatcher`,
    which hands its work to that loop.
    """

    def __init__(self) -> None:
        self._channels: Dict[str, Set[Channel]] = {}
        self._owners: Dict[Channel, str] = {}

    def register(self, identity: str, channel: Channel) -> None:
        """Attach ``channel`` to ``identity``. Registering twice is a no-op."""

        current = self._owners.get(channel)
        if current == identity:
            return
        if current is not None:
            self.unregister(channel)
        self._channels.setdefault(identity, set()).add(channel)
        self._owners[channel] = identity
        logger.debug(
            "Registered %r for user %s (%d live)",
            channel,
            identity,
            len(self._channels[identity]),
        )

    def unregister(self, channel: Channel) -> None:
        """Detach ``channel`` from its identity. Unknown channels are ignored."""

        identity = self._owners.pop(channel, None)
        if identity is None:
            return
        channels = self._channels.get(identity)
        if channels is None:
            return
        channels.discard(channel)
        if not channels:
            self._channels.pop(identity, None)
        logger.debug("Unregistered %r for user %s", channel, identity)

    def channels_for(self, identity: str) -> Set[Channel]:
        """Return a snapshot of the open channels registered for ``identity``."""

        return {
            channel
            for channel in self._channels.get(identity, ())
            if channel.is_open
        }

    def identity_of(self, channel: Channel) -> str | None:
        return self._owners.get(channel)

    def connected_identities(self) -> Set[str]:
        return set(self._channels)

    def __contains__(self, channel: object) -> bool:
        return channel in self._owners

    def __len__(self) -> int:
        return len(self._owners)


__all__ = ["ConnectionRegistry"]
