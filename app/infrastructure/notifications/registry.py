"""Connection bookkeeping for notification websockets."""

from __future__ import annotations

import logging
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class PushConnection(Protocol):
    """Anything that can receive a JSON message; FastAPI's ``WebSocket`` qualifies."""

    async def send_json(self, data: Any) -> None: ...


class ConnectionRegistry(Protocol):
    """Mapping of users to their live connections.

    A multi-instance deployment swaps the in-memory implementation for one
    backed by a shared pub/sub broker.
    """

    def join(self, user_id: str, connection_id: str, connection: PushConnection) -> None: ...

    def leave(self, user_id: str, connection_id: str) -> None: ...

    def drop(self, connection_id: str) -> None: ...

    def is_connected(self, user_id: str) -> bool: ...

    async def broadcast(self, user_id: str, message: dict[str, Any]) -> int: ...


class InMemoryConnectionRegistry:
    """Manage active connections grouped by user within one process."""

    def __init__(self) -> None:
        self._connections: dict[str, dict[str, PushConnection]] = {}

    def join(self, user_id: str, connection_id: str, connection: PushConnection) -> None:
        """Register ``connection`` under ``user_id``; it leaves any previous user."""

        self.drop(connection_id)
        self._connections.setdefault(user_id, {})[connection_id] = connection

    def leave(self, user_id: str, connection_id: str) -> None:
        connections = self._connections.get(user_id)
        if connections is None:
            return
        connections.pop(connection_id, None)
        if not connections:
            self._connections.pop(user_id, None)

    def drop(self, connection_id: str) -> None:
        """Remove ``connection_id`` from every user entry."""

        for user_id in [
            user_id
            for user_id, connections in self._connections.items()
            if connection_id in connections
        ]:
            self.leave(user_id, connection_id)

    def is_connected(self, user_id: str) -> bool:
        return bool(self._connections.get(user_id))

    def connection_ids(self, user_id: str) -> set[str]:
        return set(self._connections.get(user_id, {}))

    async def broadcast(self, user_id: str, message: dict[str, Any]) -> int:
        """Send ``message`` to every connection of ``user_id``.

        Connections whose send fails are dropped. Returns the number of
        successful deliveries.
        """

        delivered = 0
        for connection_id, connection in list(self._connections.get(user_id, {}).items()):
            try:
                await connection.send_json(message)
            except Exception:
                logger.warning(
                    "Dropping connection %s of user %s after a failed send",
                    connection_id,
                    user_id,
                )
                self.leave(user_id, connection_id)
            else:
                delivered += 1
        return delivered


__all__ = ["ConnectionRegistry", "InMemoryConnectionRegistry", "PushConnection"]
