"""Websocket gateway that pushes in-app notifications to connected users."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any
from uuid import uuid4

from fastapi import WebSocket, WebSocketDisconnect, status

from app.domain.entities import InAppNotification
from app.infrastructure.security import TokenVerifier

from .registry import ConnectionRegistry, PushConnection

logger = logging.getLogger(__name__)

NOTIFICATION_EVENT = "notification"
UNREAD_COUNT_EVENT = "unreadCount"


def serialize_notification(notification: InAppNotification) -> dict[str, Any]:
    """Return the websocket payload representation for ``notification``."""

    return {
        "id": notification.id,
        "userId": notification.user_id,
        "type": notification.type,
        "title": notification.title,
        "message": notification.message,
        "linkUrl": notification.link_url,
        "taskId": notification.task_id,
        "projectId": notification.project_id,
        "metadata": notification.metadata or {},
        "isRead": notification.is_read,
        "createdAt": notification.created_at.isoformat()
        if notification.created_at
        else None,
    }


def extract_token(websocket: WebSocket) -> str | None:
    """Read the access token from ``?token=`` or an ``Authorization: Bearer`` header."""

    token = websocket.query_params.get("token")
    if token:
        return token
    authorization = websocket.headers.get("authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


class NotificationGateway:
    """Authenticate websocket clients and deliver notification events to them."""

    def __init__(
        self,
        registry: ConnectionRegistry,
        token_verifier: TokenVerifier,
        allowed_origins: Iterable[str] = (),
    ) -> None:
        self._registry = registry
        self._token_verifier = token_verifier
        self._allowed_origins = frozenset(allowed_origins)

    def is_origin_allowed(self, origin: str | None) -> bool:
        """Origins are only enforced when the handshake declares one."""

        if not self._allowed_origins or not origin:
            return True
        return origin in self._allowed_origins

    async def authenticate(self, websocket: WebSocket) -> str | None:
        """Run the handshake checks; close with 1008 and return ``None`` on rejection."""

        origin = websocket.headers.get("origin")
        if not self.is_origin_allowed(origin):
            logger.warning("Rejected websocket connection from origin %s", origin)
            await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
            return None

        token = extract_token(websocket)
        if not token:
            logger.warning("Rejected websocket connection without a token")
            await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
            return None

        try:
            user_id = await self._token_verifier.verify_token(token)
        except Exception as exc:
            logger.warning("Rejected websocket connection: %s", exc)
            await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
            return None
        return user_id

    async def serve(self, websocket: WebSocket) -> None:
        """Handle one websocket client from handshake to disconnect."""

        user_id = await self.authenticate(websocket)
        if user_id is None:
            return

        connection_id = uuid4().hex
        await websocket.accept()
        logger.info("Websocket %s connected for user %s", connection_id, user_id)
        try:
            while True:
                try:
                    message = await websocket.receive_json()
                except (KeyError, ValueError):
                    # Binary frames and malformed JSON are ignored.
                    continue

                if not isinstance(message, dict):
                    continue
                reply = self.handle_message(connection_id, websocket, user_id, message)
                if reply is not None:
                    await websocket.send_json(reply)
        except WebSocketDisconnect:
            pass
        finally:
            self.disconnect(connection_id)
            logger.info("Websocket %s disconnected", connection_id)

    def handle_message(
        self,
        connection_id: str,
        connection: PushConnection,
        user_id: str | None,
        message: dict[str, Any],
    ) -> dict[str, Any] | None:
        message_type = message.get("type")
        if message_type == "ping":
            return {"type": "pong"}
        if message_type == "subscribe":
            result = self.subscribe(connection_id, connection, user_id, message.get("userId"))
            return {"type": "subscribe", "data": result}
        if message_type == "unsubscribe":
            result = self.unsubscribe(connection_id, user_id)
            return {"type": "unsubscribe", "data": result}
        return None

    def subscribe(
        self,
        connection_id: str,
        connection: PushConnection,
        authenticated_user_id: str | None,
        claimed_user_id: Any,
    ) -> dict[str, Any]:
        """Join the authenticated user's delivery group when the claim matches."""

        if not authenticated_user_id:
            return {"success": False, "error": "Not authenticated"}
        if authenticated_user_id != claimed_user_id:
            logger.warning(
                "User %s tried to subscribe to notifications of %s",
                authenticated_user_id,
                claimed_user_id,
            )
            return {"success": False, "error": "Cannot subscribe to other users"}
        self._registry.join(authenticated_user_id, connection_id, connection)
        return {"success": True}

    def unsubscribe(self, connection_id: str, user_id: str | None) -> dict[str, Any]:
        if user_id:
            self._registry.leave(user_id, connection_id)
        return {"success": True}

    def disconnect(self, connection_id: str) -> None:
        self._registry.drop(connection_id)

    def is_user_connected(self, user_id: str) -> bool:
        return self._registry.is_connected(user_id)

    async def send_to_user(self, user_id: str, notification: InAppNotification) -> None:
        if not self._registry.is_connected(user_id):
            return
        await self._registry.broadcast(
            user_id,
            {"type": NOTIFICATION_EVENT, "data": serialize_notification(notification)},
        )

    async def send_unread_count(self, user_id: str, count: int) -> None:
        if not self._registry.is_connected(user_id):
            return
        await self._registry.broadcast(
            user_id, {"type": UNREAD_COUNT_EVENT, "data": {"count": count}}
        )


__all__ = [
    "NOTIFICATION_EVENT",
    "NotificationGateway",
    "UNREAD_COUNT_EVENT",
    "extract_token",
    "serialize_notification",
]
