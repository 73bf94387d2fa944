"""End-to-end tests for the websocket handshake and live pushes."""

from __future__ import annotations

from fastapi.testclient import TestClient


def _register(client: TestClient, name: str) -> tuple[str, str]:
    response = client.post(
        "/api/auth/register",
        json={"name": name, "email": f"{name.lower()}@example.com", "password": "Secret123"},
    )
    assert response.status_code == 200
    body = response.json()
    return body["user"]["id"], body["token"]


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def _authenticate(websocket, token: str) -> None:
    websocket.send_json({"type": "auth", "token": token})
    assert websocket.receive_json() == {"type": "auth_success"}


def test_invalid_token_allows_retry(client: TestClient) -> None:
    _, token = _register(client, "Alice")

    with client.websocket_connect("/ws") as websocket:
        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}

        websocket.send_json({"type": "auth", "token": "forged"})
        websocket.send_text("{broken")
        websocket.send_json({"type": "ping"})
        # Nothing was sent for the rejected token or the garbage frame.
        assert websocket.receive_json() == {"type": "pong"}
        assert len(client.app.state.connection_registry) == 0

        _authenticate(websocket, token)
        assert len(client.app.state.connection_registry) == 1



def test_notification_reaches_every_session_of_the_user(client: TestClient) -> None:
    _, owner_token = _register(client, "Owner")
    member_id, member_token = _register(client, "Member")
    project = client.post(
        "/api/projects", json={"name": "Apollo"}, headers=_bearer(owner_token)
    ).json()

    with client.websocket_connect("/ws") as tab_1, client.websocket_connect("/ws") as tab_2:
        _authenticate(tab_1, member_token)
        _authenticate(tab_2, member_token)
        assert client.app.state.connection_registry.connected_identities() == {member_id}

        response = client.post(
            f"/api/projects/{project['id']}/members",
            json={"userId": member_id},
            headers=_bearer(owner_token),
        )
        assert response.status_code == 200

        for tab in (tab_1, tab_2):
            message = tab.receive_json()
            assert message["type"] == "notification"
            assert message["data"]["type"] == "added_to_project"
            assert message["data"]["userId"] == member_id
            assert message["data"]["projectId"] == project["id"]
            assert message["data"]["read"] is False


def test_offline_member_finds_notification_after_connecting(client: TestClient) -> None:
    _, owner_token = _register(client, "Owner")
    member_id, member_token = _register(client, "Member")
    project = client.post(
        "/api/projects", json={"name": "Apollo"}, headers=_bearer(owner_token)
    ).json()

    client.post(
        f"/api/projects/{project['id']}/members",
        json={"userId": member_id},
        headers=_bearer(owner_token),
    )

    with client.websocket_connect("/ws") as websocket:
        _authenticate(websocket, member_token)
        notifications = client.get("/api/notifications", headers=_bearer(member_token)).json()

    assert [(n["type"], n["read"]) for n in notifications] == [("added_to_project", False)]


def test_task_events_are_pushed_to_members_only(client: TestClient) -> None:
    _, owner_token = _register(client, "Owner")
    member_id, member_token = _register(client, "Member")
    _, stranger_token = _register(client, "Stranger")
    project = client.post(
        "/api/projects", json={"name": "Apollo"}, headers=_bearer(owner_token)
    ).json()
    client.post(
        f"/api/projects/{project['id']}/members",
        json={"userId": member_id},
        headers=_bearer(owner_token),
    )

    with client.websocket_connect("/ws") as member_ws, client.websocket_connect(
        "/ws"
    ) as stranger_ws:
        _authenticate(member_ws, member_token)
        _authenticate(stranger_ws, stranger_token)

        task = client.post(
            f"/api/projects/{project['id']}/tasks",
            json={"title": "Build rocket"},
            headers=_bearer(owner_token),
        ).json()

        notification = member_ws.receive_json()
        assert notification["type"] == "notification"
        assert notification["data"]["type"] == "task_created"
        assert notification["data"]["taskId"] == task["id"]

        created = member_ws.receive_json()
        assert created["type"] == "task_created"
        assert created["data"] == {"projectId": project["id"], "task": task}

        client.put(
            f"/api/tasks/{task['id']}", json={"status": "doing"}, headers=_bearer(owner_token)
        )
        updated = member_ws.receive_json()
        assert updated["type"] == "task_updated"
        assert updated["data"]["task"]["status"] == "doing"

        client.post(
            f"/api/tasks/{task['id']}/comments",
            json={"content": "On it"},
            headers=_bearer(member_token),
        )
        commented = member_ws.receive_json()
        assert commented["type"] == "comment_added"
        assert commented["data"]["taskId"] == task["id"]
        assert commented["data"]["comment"]["content"] == "On it"

        client.delete(f"/api/tasks/{task['id']}", headers=_bearer(owner_token))
        assert member_ws.receive_json() == {
            "type": "task_deleted",
            "data": {"projectId": project["id"], "taskId": task["id"]},
        }

        stranger_ws.send_json({"type": "ping"})
        assert stranger_ws.receive_json() == {"type": "pong"}
