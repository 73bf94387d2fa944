"""Wire messages exchanged over push channels.

Every frame is one JSON object with a ``type`` discriminator. Inbound frames
are parsed into :data:`InboundFrame` variants; outbound frames are built as
:data:`PushMessage` variants and encoded once per dispatch.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from app.domain.entities import (
    Comment,
    CommentAdded,
    DomainEvent,
    Notification,
    Task,
    TaskCreated,
    TaskDeleted,
    TaskUpdated,
)


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        frozen=True,
    )


# ---- client -> server ----


class AuthFrame(_WireModel):
    type: Literal["auth"]
    token: str = Field(min_length=1)


class PingFrame(_WireModel):
    type: Literal["ping"]


InboundFrame = Annotated[Union[AuthFrame, PingFrame], Field(discriminator="type")]

_inbound_adapter: TypeAdapter[InboundFrame] = TypeAdapter(InboundFrame)


def parse_inbound_frame(raw: str | bytes) -> AuthFrame | PingFrame | None:
    """Return the frame encoded in ``raw`` or ``None`` when it is malformed."""

    try:
        return _inbound_adapter.validate_json(raw)
    except ValidationError:
        return None


# ---- server -> client payloads ----


class TaskSnapshot(_WireModel):
    id: str
    project_id: str
    title: str
    description: str = ""
    status: str
    priority: str
    assignee_id: str | None = None
    assignee_name: str | None = None
    created_by: str
    created_at: datetime | None = None
    due_date: datetime | None = None


class CommentSnapshot(_WireModel):
    id: str
    task_id: str
    user_id: str
    content: str
    author_name: str | None = None
    created_at: datetime | None = None


class NotificationRecord(_WireModel):
    id: str
    user_id: str
    kind: str = Field(alias="type")
    content: str
    project_id: str | None = None
    task_id: str | None = None
    read: bool = False
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, notification: Notification) -> "NotificationRecord":
        return cls(
            id=notification.id,
            user_id=notification.recipient_id,
            kind=notification.kind,
            content=notification.content,
            project_id=notification.project_id,
            task_id=notification.task_id,
            read=notification.read,
            created_at=notification.created_at,
        )


class TaskEventData(_WireModel):
    project_id: str
    task: TaskSnapshot


class TaskDeletedData(_WireModel):
    project_id: str
    task_id: str


class CommentAddedData(_WireModel):
    project_id: str
    task_id: str
    comment: CommentSnapshot


# ---- server -> client messages ----


class AuthSuccessMessage(_WireModel):
    type: Literal["auth_success"] = "auth_success"


class PongMessage(_WireModel):
    type: Literal["pong"] = "pong"


class TaskCreatedMessage(_WireModel):
    type: Literal["task_created"] = "task_created"
    data: TaskEventData


class TaskUpdatedMessage(_WireModel):
    type: Literal["task_updated"] = "task_updated"
    data: TaskEventData


class TaskDeletedMessage(_WireModel):
    type: Literal["task_deleted"] = "task_deleted"
    data: TaskDeletedData


class CommentAddedMessage(_WireModel):
    type: Literal["comment_added"] = "comment_added"
    data: CommentAddedData


class NotificationMessage(_WireModel):
    type: Literal["notification"] = "notification"
    data: NotificationRecord


PushMessage = Annotated[
    Union[
        AuthSuccessMessage,
        PongMessage,
        TaskCreatedMessage,
        TaskUpdatedMessage,
        TaskDeletedMessage,
        CommentAddedMessage,
        NotificationMessage,
    ],
    Field(discriminator="type"),
]

_push_adapter: TypeAdapter[PushMessage] = TypeAdapter(PushMessage)


def encode_message(message: BaseModel) -> str:
    """Serialize an outbound message into its JSON text frame."""

    return message.model_dump_json(by_alias=True)


def decode_push_message(raw: str | bytes) -> PushMessage:
    """Parse a server frame back into its message variant.

    Raises :class:`pydantic.ValidationError` for unknown or malformed frames.
    """

    return _push_adapter.validate_json(raw)


def _task_snapshot(task: Task) -> TaskSnapshot:
    return TaskSnapshot.model_validate(task)


def _comment_snapshot(comment: Comment) -> CommentSnapshot:
    return CommentSnapshot.model_validate(comment)


def event_message(event: DomainEvent) -> PushMessage:
    """Return the push message announcing ``event``."""

    if isinstance(event, TaskCreated):
        return TaskCreatedMessage(
            data=TaskEventData(project_id=event.project_id, task=_task_snapshot(event.task))
        )
    if isinstance(event, TaskUpdated):
        return TaskUpdatedMessage(
            data=TaskEventData(project_id=event.project_id, task=_task_snapshot(event.task))
        )
    if isinstance(event, TaskDeleted):
        return TaskDeletedMessage(
            data=TaskDeletedData(project_id=event.project_id, task_id=event.task_id)
        )
    if isinstance(event, CommentAdded):
        return CommentAddedMessage(
            data=CommentAddedData(
                project_id=event.project_id,
                task_id=event.task_id,
                comment=_comment_snapshot(event.comment),
            )
        )
    raise TypeError(f"Unsupported domain event {type(event).__name__}")


def notification_message(notification: Notification) -> NotificationMessage:
    """Return the push message carrying the persisted ``notification``."""

    return NotificationMessage(data=NotificationRecord.from_entity(notification))


__all__ = [
    "AuthFrame",
    "PingFrame",
    "InboundFrame",
    "parse_inbound_frame",
    "TaskSnapshot",
    "CommentSnapshot",
    "NotificationRecord",
    "AuthSuccessMessage",
    "PongMessage",
    "TaskCreatedMessage",
    "TaskUpdatedMessage",
    "TaskDeletedMessage",
    "CommentAddedMessage",
    "NotificationMessage",
    "PushMessage",
    "encode_message",
    "decode_push_message",
    "event_message",
    "notification_message",
]
