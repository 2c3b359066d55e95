"""Tests for the realtime notification gateway."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from factories import make_token
from fastapi import WebSocketDisconnect
from fastapi.testclient import TestClient

from app.config import get_settings
from app.container import build_notification_services
from app.domain.entities import InAppNotification
from app.infrastructure.notifications import (
    InMemoryConnectionRegistry,
    NotificationGateway,
    serialize_notification,
)


class RecordingConnection:
    def __init__(self) -> None:
        self.messages: list[dict] = []

    async def send_json(self, data) -> None:
        self.messages.append(data)


class StaticVerifier:
    def __init__(self, tokens: dict[str, str]) -> None:
        self.tokens = tokens

    async def verify_token(self, token: str) -> str:
        try:
            return self.tokens[token]
        except KeyError:
            raise ValueError("Could not validate credentials") from None


def _notification(user_id: str = "u1") -> InAppNotification:
    return InAppNotification(id="n1", user_id=user_id, type="system", title="Hello")


@pytest.fixture
def registry() -> InMemoryConnectionRegistry:
    return InMemoryConnectionRegistry()


@pytest.fixture
def gateway(registry) -> NotificationGateway:
    return NotificationGateway(registry, StaticVerifier({}), ["http://localhost:5173"])


def test_subscribe_requires_authentication(gateway) -> None:
    result = gateway.subscribe("c1", RecordingConnection(), None, "u1")

    assert result == {"success": False, "error": "Not authenticated"}
    assert not gateway.is_user_connected("u1")


def test_subscribe_to_other_user_is_refused(gateway) -> None:
    result = gateway.subscribe("c1", RecordingConnection(), "u2", "u1")

    assert result == {"success": False, "error": "Cannot subscribe to other users"}
    assert not gateway.is_user_connected("u1")
    assert not gateway.is_user_connected("u2")


@pytest.mark.anyio
async def test_refused_subscription_never_receives_pushes(gateway) -> None:
    intruder = RecordingConnection()
    gateway.subscribe("c1", intruder, "u2", "u1")

    await gateway.send_to_user("u1", _notification())

    assert intruder.messages == []


@pytest.mark.anyio
async def test_subscribed_connection_receives_events(gateway) -> None:
    connection = RecordingConnection()
    assert gateway.subscribe("c1", connection, "u1", "u1") == {"success": True}

    notification = _notification()
    await gateway.send_to_user("u1", notification)
    await gateway.send_unread_count("u1", 4)

    assert connection.messages == [
        {"type": "notification", "data": serialize_notification(notification)},
        {"type": "unreadCount", "data": {"count": 4}},
    ]


@pytest.mark.anyio
async def test_pushes_to_offline_users_are_silent(gateway) -> None:
    await gateway.send_to_user("offline", _notification("offline"))
    await gateway.send_unread_count("offline", 1)

    assert not gateway.is_user_connected("offline")


def test_unsubscribe_is_idempotent(gateway) -> None:
    gateway.subscribe("c1", RecordingConnection(), "u1", "u1")

    assert gateway.unsubscribe("c1", "u1") == {"success": True}
    assert gateway.unsubscribe("c1", "u1") == {"success": True}
    assert not gateway.is_user_connected("u1")


def test_disconnect_removes_connection(gateway) -> None:
    gateway.subscribe("c1", RecordingConnection(), "u1", "u1")

    gateway.disconnect("c1")

    assert not gateway.is_user_connected("u1")


def test_ping_gets_pong(gateway) -> None:
    assert gateway.handle_message("c1", RecordingConnection(), "u1", {"type": "ping"}) == {
        "type": "pong"
    }


def test_origin_allow_list() -> None:
    gateway = NotificationGateway(
        InMemoryConnectionRegistry(), StaticVerifier({}), ["https://app.example.com"]
    )

    assert gateway.is_origin_allowed("https://app.example.com")
    assert gateway.is_origin_allowed(None)
    assert not gateway.is_origin_allowed("https://evil.example.com")
    open_gateway = NotificationGateway(InMemoryConnectionRegistry(), StaticVerifier({}))
    assert open_gateway.is_origin_allowed("https://anything.example.com")


@pytest.fixture
def ws_app(clean_database):
    from main import create_app

    return create_app()


def test_websocket_subscribe_and_receive_push(ws_app) -> None:
    gateway = ws_app.state.notifications.gateway
    token = make_token("u1")

    with TestClient(ws_app) as client:
        with client.websocket_connect(f"/notifications/ws?token={token}") as websocket:
            websocket.send_json({"type": "subscribe", "userId": "u1"})
            assert websocket.receive_json() == {"type": "subscribe", "data": {"success": True}}
            assert gateway.is_user_connected("u1")

            client.portal.call(gateway.send_unread_count, "u1", 5)
            assert websocket.receive_json() == {"type": "unreadCount", "data": {"count": 5}}

            websocket.send_json({"type": "ping"})
            assert websocket.receive_json() == {"type": "pong"}

        assert not gateway.is_user_connected("u1")


def test_websocket_accepts_bearer_header(ws_app) -> None:
    headers = {"Authorization": f"Bearer {make_token('u1')}"}

    with TestClient(ws_app) as client:
        with client.websocket_connect("/notifications/ws", headers=headers) as websocket:
            websocket.send_json({"type": "subscribe", "userId": "u2"})
            assert websocket.receive_json() == {
                "type": "subscribe",
                "data": {"success": False, "error": "Cannot subscribe to other users"},
            }


@pytest.mark.parametrize(
    "path",
    ["/notifications/ws", "/notifications/ws?token=not-a-jwt"],
)
def test_websocket_without_valid_token_is_closed(ws_app, path) -> None:
    with TestClient(ws_app) as client:
        with pytest.raises(WebSocketDisconnect) as exc_info:
            with client.websocket_connect(path):
                pass

    assert exc_info.value.code == 1008


def test_websocket_origin_is_checked_before_token(clean_database) -> None:
    from main import create_app

    verifier = AsyncMock()
    verifier.verify_token = AsyncMock(return_value="u1")
    services = build_notification_services(get_settings(), token_verifier=verifier)
    app = create_app(services=services)

    with TestClient(app) as client:
        with pytest.raises(WebSocketDisconnect) as exc_info:
            with client.websocket_connect(
                f"/notifications/ws?token={make_token('u1')}",
                headers={"Origin": "https://evil.example.com"},
            ):
                pass

    assert exc_info.value.code == 1008
    verifier.verify_token.assert_not_awaited()
