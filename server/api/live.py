# server/api/live.py

import logging
from typing import Any
from fastapi import APIRouter, BackgroundTasks, WebSocket
from core.broadcast import manager


logger = logging.getLogger(__name__)

router = APIRouter()

PRODUCT_EVENT = "product"
PRODUCT_DELETE_EVENT = "product-delete"
TRANSACTION_EVENT = "transaction"


def publish(background_tasks: BackgroundTasks, event: str, data: Any):
    """
    Schedules a broadcast to run once the response has been sent.
    Call only after the mutation is committed.
    """
    background_tasks.add_task(manager.broadcast, event, data)


@router.websocket("/ws")
async def live_updates(websocket: WebSocket):
    """
    Receive-only channel: the server pushes {event, data} envelopes and
    ignores anything the client sends.
    """
    try:
        await manager.connect(websocket)
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                logger.debug("Client disconnected from live updates")
                break
    finally:
        manager.disconnect(websocket)
