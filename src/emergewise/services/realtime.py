"""WebSocket fan-out for live dashboard updates."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from fastapi import WebSocket
from fastapi.encoders import jsonable_encoder

logger = logging.getLogger(__name__)


class Broadcaster(Protocol):
    async def emit(self, event: str, data: Any, room: str | None = None) -> None:
        ...


class ConnectionHub:
    """Tracks open sockets and the rooms (``role_admin``, ``location_delhi``...) they joined.

    One hub is created per application and handed to the routes and jobs
    that publish events.
    """

    def __init__(self) -> None:
        self._connections: set[WebSocket] = set()
        self._rooms: dict[str, set[WebSocket]] = {}

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self._connections.add(websocket)
        logger.info(f"Client connected ({self.connection_count} open)")

    def join(self, websocket: WebSocket, room: str) -> None:
        self._rooms.setdefault(room, set()).add(websocket)

    def leave(self, websocket: WebSocket, room: str) -> None:
        members = self._rooms.get(room)
        if members is not None:
            members.discard(websocket)
            if not members:
                del self._rooms[room]

    def disconnect(self, websocket: WebSocket) -> None:
        self._connections.discard(websocket)
        for room in list(self._rooms):
            self.leave(websocket, room)
        logger.info(f"Client disconnected ({self.connection_count} open)")

    async def emit(self, event: str, data: Any, room: str | None = None) -> None:
        targets = self._rooms.get(room, set()) if room else self._connections
        message = {"event": event, "data": jsonable_encoder(data)}
        for websocket in list(targets):
            try:
                await websocket.send_json(message)
            except Exception as exc:
                logger.warning(f"Dropping socket after failed '{event}' send: {exc}")
                self.disconnect(websocket)
