"""Realtime push delivery for connected clients."""

from .audience import AudienceResolver
from .channel import Channel, ChannelClosedError, WebSocketChannel
from .dispatcher import DeliveryReport, EventDispatcher
from .handshake import ChannelSession, ChannelState, TokenVerifier
from .messages import decode_push_message, encode_message
from .registry import ConnectionRegistry

__all__ = [
    "AudienceResolver",
    "Channel",
    "ChannelClosedError",
    "WebSocketChannel",
    "DeliveryReport",
    "EventDispatcher",
    "ChannelSession",
    "ChannelState",
    "TokenVerifier",
    "decode_push_message",
    "encode_message",
    "ConnectionRegistry",
]
