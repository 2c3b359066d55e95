"""Integration tests for the in-app notification endpoints."""

from __future__ import annotations

import pytest
from factories import auth_headers, make_token, make_user

from app.domain.entities import InAppNotification
from app.infrastructure.repositories import InAppNotificationRepository, UserProfileRepository


@pytest.fixture
def seeded(session):
    UserProfileRepository(session).create(make_user("u1", email="ada@example.com"))
    UserProfileRepository(session).create(make_user("u2", email="bob@example.com"))
    repository = InAppNotificationRepository(session)
    created = [
        repository.create(
            InAppNotification(id=None, user_id="u1", type="system", title=f"Note {index}")
        )
        for index in range(3)
    ]
    repository.create(InAppNotification(id=None, user_id="u2", type="system", title="Other"))
    repository.mark_as_read(created[0].id, user_id="u1")
    return created


def test_health(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_requests_without_token_are_rejected(client) -> None:
    response = client.get("/notifications")

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_requests_with_invalid_token_are_rejected(client) -> None:
    response = client.get(
        "/notifications", headers={"Authorization": f"Bearer {make_token('u1', 'other')}"}
    )

    assert response.status_code == 401


def test_list_notifications_pages_and_counts(client, seeded) -> None:
    response = client.get("/notifications?limit=2", headers=auth_headers("u1"))

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 3
    assert body["unread_count"] == 2
    assert len(body["notifications"]) == 2
    assert {item["user_id"] for item in body["notifications"]} == {"u1"}


def test_list_only_unread(client, seeded) -> None:
    response = client.get("/notifications?unread_only=true", headers=auth_headers("u1"))

    body = response.json()
    assert body["total"] == 2
    assert all(item["is_read"] is False for item in body["notifications"])


def test_list_rejects_out_of_range_limit(client) -> None:
    response = client.get("/notifications?limit=0", headers=auth_headers("u1"))

    assert response.status_code == 422


def test_unread_count(client, seeded) -> None:
    response = client.get("/notifications/unread-count", headers=auth_headers("u1"))

    assert response.json() == {"count": 2}


def test_mark_as_read_only_affects_own_notifications(client, seeded) -> None:
    target = seeded[1].id

    foreign = client.post(f"/notifications/{target}/read", headers=auth_headers("u2"))
    own = client.post(f"/notifications/{target}/read", headers=auth_headers("u1"))

    assert foreign.json() == {"success": False}
    assert own.json() == {"success": True}
    count = client.get("/notifications/unread-count", headers=auth_headers("u1")).json()
    assert count == {"count": 1}


def test_mark_all_as_read(client, seeded) -> None:
    response = client.post("/notifications/read-all", headers=auth_headers("u1"))

    assert response.json() == {"success": True, "count": 2}
    other = client.get("/notifications/unread-count", headers=auth_headers("u2")).json()
    assert other == {"count": 1}


def test_marking_read_pushes_new_unread_count(client, seeded) -> None:
    token = make_token("u1")

    with client.websocket_connect(f"/notifications/ws?token={token}") as websocket:
        websocket.send_json({"type": "subscribe", "userId": "u1"})
        assert websocket.receive_json()["data"] == {"success": True}

        response = client.post(f"/notifications/{seeded[2].id}/read", headers=auth_headers("u1"))
        assert response.json() == {"success": True}

        assert websocket.receive_json() == {"type": "unreadCount", "data": {"count": 1}}


def test_digest_settings_defaults_and_update(client, seeded) -> None:
    headers = auth_headers("u1")

    assert client.get("/notifications/digest-settings", headers=headers).json() == {
        "enabled": True,
        "time": "07:00",
    }

    response = client.put(
        "/notifications/digest-settings",
        json={"enabled": False, "time": "08:30"},
        headers=headers,
    )

    assert response.status_code == 200
    assert response.json() == {"enabled": False, "time": "08:30"}
    assert client.get("/notifications/digest-settings", headers=headers).json() == {
        "enabled": False,
        "time": "08:30",
    }


def test_digest_settings_validation(client, seeded) -> None:
    response = client.put(
        "/notifications/digest-settings",
        json={"enabled": True, "time": "8am"},
        headers=auth_headers("u1"),
    )

    assert response.status_code == 422


def test_digest_settings_for_unknown_user(client) -> None:
    headers = auth_headers("ghost")

    assert client.get("/notifications/digest-settings", headers=headers).status_code == 404
    response = client.put(
        "/notifications/digest-settings", json={"enabled": True}, headers=headers
    )
    assert response.status_code == 404
