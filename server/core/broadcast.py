# server/core/broadcast.py

import logging
from typing import Any
from fastapi import WebSocket
from starlette.websockets import WebSocketState


logger = logging.getLogger(__name__)


class ConnectionManager:
    """
    Registry of open WebSocket connections.
    Every connection receives every event; delivery is best-effort, with no
    retry or acknowledgment.
    """

    def __init__(self):
        self._connections: set[WebSocket] = set()

    async def connect(self, websocket: WebSocket):
        # Registered before the handshake completes; broadcasts skip it until open.
        self._connections.add(websocket)
        await websocket.accept()
        logger.info("Live connection opened (%d open)", len(self._connections))

    def disconnect(self, websocket: WebSocket):
        if websocket in self._connections:
            self._connections.discard(websocket)
            logger.info("Live connection closed (%d open)", len(self._connections))

    def clear(self):
        self._connections.clear()

    def __len__(self) -> int:
        return len(self._connections)

    def __contains__(self, websocket) -> bool:
        return websocket in self._connections

    async def broadcast(self, event: str, data: Any) -> int:
        """
        Sends {"event", "data"} to every open connection and returns how many
        sends succeeded. Iterates a snapshot, so connections may come and go
        while a broadcast is in flight.
        """
        message = {"event": event, "data": data}
        delivered = 0

        for websocket in list(self._connections):
            if not _is_open(websocket):
                continue
            try:
                await websocket.send_json(message)
            except Exception as e:
                logger.warning("Dropping live connection after failed send: %s", e)
                self.disconnect(websocket)
                continue
            delivered += 1

        logger.debug("Broadcast %s to %d connection(s)", event, delivered)
        return delivered


def _is_open(websocket: WebSocket) -> bool:
    return (
        websocket.client_state == WebSocketState.CONNECTED
        and websocket.application_state == WebSocketState.CONNECTED
    )


manager = ConnectionManager()
