"""Duplex channels carrying push traffic to connected clients."""

from __future__ import annotations

import time
from itertools import count

from fastapi import WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

_channel_ids = count(1)


class ChannelClosedError(Exception):
    """Raised when a frame is sent over a channel whose transport is gone."""


class Channel:
    """A single live connection from one client session.

    Subclasses provide the transport: :attr:`is_open` reports whether frames
    can still be written and :meth:`_transmit` writes one text frame.
    """

    def __init__(self) -> None:
        self.channel_id = next(_channel_ids)
        self.last_activity = time.monotonic()

    @property
    def is_open(self) -> bool:
        raise NotImplementedError

    def touch(self) -> None:
        """Record inbound activity on the channel."""

        self.last_activity = time.monotonic()

    def idle_for(self) -> float:
        """Seconds elapsed since the last inbound frame."""

        return time.monotonic() - self.last_activity

    async def send_text(self, text: str) -> None:
        """Write ``text`` as one frame or raise :class:`ChannelClosedError`."""

        if not self.is_open:
            raise ChannelClosedError(f"Channel {self.channel_id} is closed")
        await self._transmit(text)

    async def _transmit(self, text: str) -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.channel_id}>"


class WebSocketChannel(Channel):
    """Channel backed by a Starlette/FastAPI :class:`WebSocket`."""

    def __init__(self, websocket: WebSocket) -> None:
        super().__init__()
        self.websocket = websocket

    @property
    def is_open(self) -> bool:
        return (
            self.websocket.client_state == WebSocketState.CONNECTED
            and self.websocket.application_state == WebSocketState.CONNECTED
        )

    async def _transmit(self, text: str) -> None:
        try:
            await self.websocket.send_text(text)
        except (WebSocketDisconnect, RuntimeError, OSError) as exc:
            raise ChannelClosedError(f"Channel {self.channel_id} is closed") from exc


__all__ = ["Channel", "ChannelClosedError", "WebSocketChannel"]
