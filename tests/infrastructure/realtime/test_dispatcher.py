"""Tests for event fan-out and notification delivery."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import OperationalError

from app.domain.entities import (
    Comment,
    CommentAdded,
    Task,
    TaskCreated,
    TaskDeleted,
    TaskUpdated,
)
from app.infrastructure.realtime import ConnectionRegistry, EventDispatcher
from app.infrastructure.realtime.messages import PongMessage
from app.infrastructure.repositories import NotificationRepository, TaskRepository

pytestmark = pytest.mark.anyio


@pytest.fixture
async def dispatcher():
    dispatcher = EventDispatcher(ConnectionRegistry())
    yield dispatcher
    await dispatcher.aclose()


@pytest.fixture
def team(make_user, make_project):
    owner, member, outsider = make_user("Owner"), make_user("Member"), make_user("Outsider")
    project = make_project(owner, member)
    return owner, member, outsider, project


def _task(db_session, project, author) -> Task:
    return TaskRepository(db_session).create(
        Task(id=None, project_id=project.id, title="Write docs", created_by=author.id)
    )


async def test_task_created_reaches_every_member_channel_only(
    dispatcher, db_session, team, make_channel
) -> None:
    owner, member, outsider, project = team
    owner_tab, member_tab_1, member_tab_2, outsider_tab = (
        make_channel(),
        make_channel(),
        make_channel(),
        make_channel(),
    )
    registry = dispatcher.registry
    registry.register(owner.id, owner_tab)
    registry.register(member.id, member_tab_1)
    registry.register(member.id, member_tab_2)
    registry.register(outsider.id, outsider_tab)

    task = _task(db_session, project, owner)
    dispatcher.dispatch_event(db_session, TaskCreated(project_id=project.id, task=task))
    await dispatcher.drain()

    for channel in (owner_tab, member_tab_1, member_tab_2):
        (message,) = channel.messages()
        assert message["type"] == "task_created"
        assert message["data"]["projectId"] == project.id
        assert message["data"]["task"]["id"] == task.id
        assert message["data"]["task"]["title"] == "Write docs"
    assert outsider_tab.sent == []


async def test_dispatch_without_connected_members_is_silent(
    dispatcher, db_session, team, make_channel
) -> None:
    owner, _, outsider, project = team
    outsider_tab = make_channel()
    dispatcher.registry.register(outsider.id, outsider_tab)

    dispatcher.dispatch_event(
        db_session, TaskDeleted(project_id=project.id, task_id="missing")
    )
    dispatcher.dispatch_event(
        db_session, TaskDeleted(project_id="unknown-project", task_id="missing")
    )
    await dispatcher.drain()

    assert outsider_tab.sent == []


async def test_event_payloads_follow_the_wire_format(
    dispatcher, db_session, team, make_channel
) -> None:
    owner, _, _, project = team
    tab = make_channel()
    dispatcher.registry.register(owner.id, tab)
    task = _task(db_session, project, owner)
    comment = Comment(
        id="c-1", task_id=task.id, user_id=owner.id, content="Done", author_name="Owner"
    )

    dispatcher.dispatch_event(db_session, TaskUpdated(project_id=project.id, task=task))
    dispatcher.dispatch_event(
        db_session, CommentAdded(project_id=project.id, task_id=task.id, comment=comment)
    )
    dispatcher.dispatch_event(db_session, TaskDeleted(project_id=project.id, task_id=task.id))
    await dispatcher.drain()

    updated, commented, deleted = tab.messages()
    assert updated["type"] == "task_updated"
    assert updated["data"]["task"]["createdBy"] == owner.id
    assert commented == {
        "type": "comment_added",
        "data": {
            "projectId": project.id,
            "taskId": task.id,
            "comment": {
                "id": "c-1",
                "taskId": task.id,
                "userId": owner.id,
                "content": "Done",
                "authorName": "Owner",
                "createdAt": None,
            },
        },
    }
    assert deleted == {
        "type": "task_deleted",
        "data": {"projectId": project.id, "taskId": task.id},
    }


async def test_consecutive_dispatches_arrive_in_order(
    dispatcher, db_session, team, make_channel
) -> None:
    owner, _, _, project = team
    tab = make_channel()
    dispatcher.registry.register(owner.id, tab)

    for index in range(5):
        dispatcher.dispatch_event(
            db_session, TaskDeleted(project_id=project.id, task_id=f"task-{index}")
        )
    await dispatcher.drain()

    assert [message["data"]["taskId"] for message in tab.messages()] == [
        f"task-{index}" for index in range(5)
    ]


async def test_broadcast_reports_and_drops_stale_channels(dispatcher, make_channel) -> None:
    registry = dispatcher.registry
    healthy, vanishing = make_channel(), make_channel(drops_on_send=True)
    registry.register("alice", healthy)
    registry.register("bob", vanishing)

    report = await dispatcher.broadcast({"alice", "bob", "carol"}, PongMessage())

    assert report.message_type == "pong"
    assert report.recipients == 3
    assert report.attempted == 2
    assert report.delivered == 1
    assert report.failed == 1
    assert str(report) == "pong: delivered to 1 of 2 live channels (3 recipients)"
    assert vanishing not in registry
    assert registry.channels_for("alice") == {healthy}


@pytest.mark.parametrize("channel_count", [0, 1, 2])
async def test_notification_is_stored_once_whatever_the_connectivity(
    dispatcher, db_session, team, make_channel, channel_count
) -> None:
    _, member, _, project = team
    tabs = [make_channel() for _ in range(channel_count)]
    for tab in tabs:
        dispatcher.registry.register(member.id, tab)

    saved = dispatcher.dispatch_notification(
        db_session,
        recipient_id=member.id,
        kind="added_to_project",
        content='Added to project "Apollo"',
        project_id=project.id,
    )
    await dispatcher.drain()

    assert NotificationRepository(db_session).count_for_user(member.id) == 1
    assert saved.id is not None
    assert saved.read is False
    for tab in tabs:
        (message,) = tab.messages()
        assert message["type"] == "notification"
        assert message["data"]["id"] == saved.id
        assert message["data"]["userId"] == member.id
        assert message["data"]["type"] == "added_to_project"
        assert message["data"]["projectId"] == project.id
        assert message["data"]["taskId"] is None
        assert message["data"]["read"] is False
        assert message["data"]["createdAt"]


async def test_notification_goes_only_to_its_recipient(
    dispatcher, db_session, team, make_channel
) -> None:
    owner, member, _, _ = team
    owner_tab, member_tab = make_channel(), make_channel()
    dispatcher.registry.register(owner.id, owner_tab)
    dispatcher.registry.register(member.id, member_tab)

    dispatcher.dispatch_notification(
        db_session, recipient_id=owner.id, kind="project_created", content="You created it"
    )
    await dispatcher.drain()

    assert owner_tab.types() == ["notification"]
    assert member_tab.sent == []


async def test_unknown_notification_kind_is_rejected(dispatcher, db_session, team) -> None:
    owner, *_ = team

    with pytest.raises(ValueError):
        dispatcher.dispatch_notification(
            db_session, recipient_id=owner.id, kind="task_updated", content="nope"
        )

    assert NotificationRepository(db_session).count_for_user(owner.id) == 0


async def test_storage_failure_propagates_without_push(make_channel, db_session) -> None:
    class BrokenStore:
        def __init__(self, session) -> None:
            pass

        def create(self, notification):
            raise OperationalError("INSERT", {}, Exception("disk full"))

    dispatcher = EventDispatcher(ConnectionRegistry(), store_factory=BrokenStore)
    tab = make_channel()
    dispatcher.registry.register("alice", tab)

    with pytest.raises(OperationalError):
        dispatcher.dispatch_notification(
            db_session, recipient_id="alice", kind="project_created", content="x"
        )
    await dispatcher.drain()

    assert tab.sent == []
    await dispatcher.aclose()


async def test_aclose_stops_the_worker(dispatcher, db_session, team, make_channel) -> None:
    owner, *_ = team
    tab = make_channel()
    dispatcher.registry.register(owner.id, tab)
    dispatcher.dispatch_notification(
        db_session, recipient_id=owner.id, kind="project_created", content="x"
    )
    await dispatcher.drain()

    await dispatcher.aclose()
    await dispatcher.drain()

    assert tab.types() == ["notification"]
