"""Websocket endpoint streaming live updates to authenticated clients."""

from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from app.config import get_settings
from app.infrastructure.realtime import ChannelSession, WebSocketChannel
from app.interfaces.api.dependencies import verify_channel_token

router = APIRouter(tags=["realtime"])
logger = logging.getLogger(__name__)


@router.websocket("/ws")
async def realtime_websocket(websocket: WebSocket) -> None:
    """Accept a channel and run its handshake until the client disconnects.

    The client authenticates by sending ``{"type": "auth", "token": ...}``;
    until then it only receives ``pong`` replies to its pings.
    """

    stale_after = 2 * get_settings().keepalive_interval_seconds
    await websocket.accept()
    logger.debug("Accepted websocket from %s", websocket.client)
    session = ChannelSession(
        WebSocketChannel(websocket),
        websocket.app.state.connection_registry,
        verify_channel_token,
    )
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            raw = message.get("text")
            if raw is None:
                raw = message.get("bytes")
            if raw is None:
                continue
            idle = session.channel.idle_for()
            if idle > stale_after:
                logger.info("%r resumed after %.0fs without pings", session.channel, idle)
            await session.handle_frame(raw)
    except WebSocketDisconnect:
        pass
    finally:
        session.close()
