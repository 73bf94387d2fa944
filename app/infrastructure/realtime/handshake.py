"""Per-connection handshake gating access to push traffic."""

from __future__ import annotations

import enum
import logging
from typing import Callable

from anyio import to_thread
from sqlalchemy.exc import SQLAlchemyError

from .channel import Channel, ChannelClosedError
from .messages import (
    AuthFrame,
    AuthSuccessMessage,
    PingFrame,
    PongMessage,
    encode_message,
    parse_inbound_frame,
)
from .registry import ConnectionRegistry

logger = logging.getLogger(__name__)

TokenVerifier = Callable[[str], str]
"""Blocking callable returning the identity for a token or raising ``ValueError``."""


class ChannelState(str, enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"
    CLOSED = "closed"


class ChannelSession:
    """Drive one channel through ``unauthenticated -> authenticated -> closed``.

    Only authenticated channels are registered and therefore reachable by
    dispatches. A rejected ``auth`` frame leaves the channel unauthenticated
    and open so the client can retry with another token.
    """

    def __init__(
        self,
        channel: Channel,
        registry: ConnectionRegistry,
        verify_token: TokenVerifier,
    ) -> None:
        self.channel = channel
        self._registry = registry
        self._verify_token = verify_token
        self.state = ChannelState.UNAUTHENTICATED
        self.identity: str | None = None

    @property
    def is_closed(self) -> bool:
        return self.state is ChannelState.CLOSED

    async def handle_frame(self, raw: str | bytes) -> None:
        """Process one inbound frame. Malformed frames are ignored."""

        if self.is_closed:
            return
        self.channel.touch()

        frame = parse_inbound_frame(raw)
        if frame is None:
            logger.debug("Ignoring malformed frame on %r", self.channel)
            return
        if isinstance(frame, PingFrame):
            await self._reply(encode_message(PongMessage()))
        elif isinstance(frame, AuthFrame):
            await self._authenticate(frame.token)

    async def _authenticate(self, token: str) -> None:
        try:
            identity = await to_thread.run_sync(self._verify_token, token)
        except ValueError:
            logger.info("Rejected credentials on %r", self.channel)
            return
        except SQLAlchemyError:
            logger.exception("Could not verify credentials on %r", self.channel)
            return

        if self.is_closed:
            # The transport went away while the token was being verified.
            return
        if self.state is ChannelState.AUTHENTICATED and identity != self.identity:
            logger.warning(
                "Ignoring re-authentication of %r as a different user", self.channel
            )
            return

        self.identity = identity
        self.state = ChannelState.AUTHENTICATED
        self._registry.register(identity, self.channel)
        logger.info("Authenticated %r as user %s", self.channel, identity)
        await self._reply(encode_message(AuthSuccessMessage()))

    async def _reply(self, text: str) -> None:
        try:
            await self.channel.send_text(text)
        except ChannelClosedError:
            logger.debug("Could not reply on closed %r", self.channel)

    def close(self) -> None:
        """Handle transport closure. Safe to call more than once."""

        if self.is_closed:
            return
        self._registry.unregister(self.channel)
        self.state = ChannelState.CLOSED
        logger.info("Closed %r (user %s)", self.channel, self.identity or "-")


__all__ = ["ChannelSession", "ChannelState", "TokenVerifier"]
