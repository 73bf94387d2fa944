"""Fan-out of domain events and notifications to live channels."""

from __future__ import annotations

import asyncio
import functools
import logging
from contextlib import suppress
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable

from anyio import from_thread
from sqlalchemy.orm import Session

from app.domain.entities import DomainEvent, NOTIFICATION_KINDS, Notification
from app.infrastructure.repositories import NotificationRepository
from app.utils import now_in_app_timezone

from .audience import AudienceResolver
from .channel import ChannelClosedError
from .messages import encode_message, event_message, notification_message
from .registry import ConnectionRegistry

logger = logging.getLogger(__name__)

_Job = Callable[[], Awaitable["DeliveryReport"]]


@dataclass(frozen=True)
class DeliveryReport:
    """Outcome of one best-effort fan-out."""

    message_type: str
    recipients: int
    attempted: int
    delivered: int

    @property
    def failed(self) -> int:
        return self.attempted - self.delivered

    def __str__(self) -> str:
        return (
            f"{self.message_type}: delivered to {self.delivered} of "
            f"{self.attempted} live channels ({self.recipients} recipients)"
        )


class EventDispatcher:
    """Resolve audiences, persist notifications and push to live channels.

    The synchronous entry points (:meth:`dispatch_event` and
    :meth:`dispatch_notification`) are called by use cases with their database
    session, usually from a worker thread. They do the database work in the
    caller and hand the push itself to a single worker task on the event loop
    that owns the :class:`ConnectionRegistry`. Jobs run one at a time in
    submission order, so consecutive dispatches reach a channel in order.
    """

    def __init__(
        self,
        registry: ConnectionRegistry,
        *,
        audience_factory: Callable[[Session], AudienceResolver] = AudienceResolver,
        store_factory: Callable[[Session], NotificationRepository] = NotificationRepository,
    ) -> None:
        self._registry = registry
        self._audience_factory = audience_factory
        self._store_factory = store_factory
        self._queue: asyncio.Queue[_Job] | None = None
        self._worker: asyncio.Task[None] | None = None

    @property
    def registry(self) -> ConnectionRegistry:
        return self._registry

    def dispatch_event(self, session: Session, event: DomainEvent) -> None:
        """Announce ``event`` to every live channel of the project members."""

        audience = self._audience_factory(session).members_of(event.project_id)
        if not audience:
            logger.debug("No audience for project %s; nothing to push", event.project_id)
            return
        message = event_message(event)
        self._submit(self.broadcast, audience, message)

    def dispatch_notification(
        self,
        session: Session,
        *,
        recipient_id: str,
        kind: str,
        content: str,
        project_id: str | None = None,
        task_id: str | None = None,
    ) -> Notification:
        """Store a notification for ``recipient_id`` and push it if connected.

        The row is written whether or not the recipient is online; storage
        errors propagate to the caller. Live delivery is best effort.
        """

        if kind not in NOTIFICATION_KINDS:
            raise ValueError(f"Unknown notification kind '{kind}'")

        notification = Notification(
            id=None,
            recipient_id=recipient_id,
            kind=kind,
            content=content,
            project_id=project_id,
            task_id=task_id,
            read=False,
            created_at=now_in_app_timezone(),
        )
        saved = self._store_factory(session).create(notification)
        self._submit(self.send_to_identity, saved.recipient_id, notification_message(saved))
        return saved

    async def broadcast(self, identities: Iterable[str], message: Any) -> DeliveryReport:
        """Send ``message`` once to every open channel of ``identities``.

        Must run on the loop owning the registry. Channels found closed are
        skipped and dropped from the registry.
        """

        frame = encode_message(message)
        recipients = set(identities)
        channels = [
            channel
            for identity in recipients
            for channel in self._registry.channels_for(identity)
        ]

        delivered = 0
        for channel in channels:
            try:
                await channel.send_text(frame)
            except ChannelClosedError:
                logger.debug("Dropping stale %r during %s fan-out", channel, message.type)
                self._registry.unregister(channel)
            else:
                delivered += 1

        return DeliveryReport(
            message_type=message.type,
            recipients=len(recipients),
            attempted=len(channels),
            delivered=delivered,
        )

    async def send_to_identity(self, identity: str, message: Any) -> DeliveryReport:
        """Send ``message`` to every open channel of a single user."""

        return await self.broadcast([identity], message)

    async def drain(self) -> None:
        """Wait until every submitted push job has run."""

        if self._queue is None or not self._owned_by_running_loop():
            return
        await self._queue.join()

    async def aclose(self) -> None:
        """Stop the push worker. Pending jobs are discarded."""

        worker, self._worker, self._queue = self._worker, None, None
        if worker is None or worker.done():
            return
        worker.cancel()
        with suppress(asyncio.CancelledError):
            await worker

    def _submit(self, func: Callable[..., Awaitable[DeliveryReport]], *args: Any) -> None:
        job = functools.partial(func, *args)
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            try:
                from_thread.run_sync(self._enqueue, job)
            except RuntimeError:
                logger.warning("No event loop available; live push skipped")
        else:
            self._enqueue(job)

    def _enqueue(self, job: _Job) -> None:
        if self._queue is None or not self._owned_by_running_loop():
            loop = asyncio.get_running_loop()
            self._queue = asyncio.Queue()
            self._worker = loop.create_task(self._run_worker(self._queue))
        self._queue.put_nowait(job)

    def _owned_by_running_loop(self) -> bool:
        worker = self._worker
        return (
            worker is not None
            and not worker.done()
            and worker.get_loop() is asyncio.get_running_loop()
        )

    @staticmethod
    async def _run_worker(queue: asyncio.Queue[_Job]) -> None:
        while True:
            job = await queue.get()
            try:
                report = await job()
            except Exception:
                logger.exception("Live push failed")
            else:
                logger.debug("%s", report)
            finally:
                queue.task_done()


__all__ = ["DeliveryReport", "EventDispatcher"]
