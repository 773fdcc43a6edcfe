"""WebSocket channel for live alerts and route updates."""

from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

router = APIRouter(tags=["realtime"])

logger = logging.getLogger(__name__)


async def _send_error(websocket: WebSocket, message: str) -> None:
    await websocket.send_json({"event": "error", "data": {"message": message}})


@router.websocket("/ws")
async def realtime(websocket: WebSocket) -> None:
    """Clients send ``{"action": "join" | "leave", "room": "..."}``; the server pushes events."""
    hub = websocket.app.state.hub
    await hub.connect(websocket)
    try:
        while True:
            try:
                message = await websocket.receive_json()
            except ValueError as exc:
                logger.debug(f"Ignoring non-JSON websocket frame: {exc}")
                await _send_error(websocket, "messages must be JSON objects")
                continue
            if not isinstance(message, dict):
                await _send_error(websocket, "messages must be JSON objects")
                continue
            action = message.get("action")
            room = message.get("room")
            if not room or not isinstance(room, str):
                await _send_error(websocket, "room is required")
                continue
            if action == "join":
                hub.join(websocket, room)
                await websocket.send_json({"event": "joined", "data": {"room": room}})
            elif action == "leave":
                hub.leave(websocket, room)
                await websocket.send_json({"event": "left", "data": {"room": room}})
            else:
                await _send_error(websocket, f"Unknown action '{action}'")
    except WebSocketDisconnect:
        pass
    finally:
        hub.disconnect(websocket)
