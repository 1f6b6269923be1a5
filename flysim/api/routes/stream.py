"""WS /ws — push the wire state to passive observers.

Every connection gets its own push task at ``broadcast_interval``,
independent of the engine's tick rate. Observers never send anything the
server acts on; incoming frames are read only to notice the close.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from flysim.api.dependencies import get_engine_manager
from flysim.api.engine_manager import EngineManager
from flysim.api.schemas import GameStateSchema

logger = logging.getLogger(__name__)

router = APIRouter()


async def _push_frames(websocket: WebSocket, manager: EngineManager, peer: str) -> None:
    last_tick = -1
    try:
        while True:
            snapshot = manager.get_snapshot()
            if snapshot is not None and snapshot.tick != last_tick:
                last_tick = snapshot.tick
                payload = GameStateSchema.from_snapshot(snapshot).model_dump(by_alias=True)
                await websocket.send_json(payload)
            await asyncio.sleep(manager.config.broadcast_interval)
    except (WebSocketDisconnect, RuntimeError, OSError) as exc:
        # Peer gone mid-send; the receive loop ends the session
        logger.info("Push to %s stopped: %s", peer, exc)


@router.websocket("/ws")
async def stream_state(
    websocket: WebSocket,
    manager: EngineManager = Depends(get_engine_manager),
) -> None:
    await websocket.accept()
    peer = f"{websocket.client.host}:{websocket.client.port}" if websocket.client else "unknown"
    logger.info("Observer connected (%s)", peer)

    pusher = asyncio.create_task(_push_frames(websocket, manager, peer))
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
    finally:
        pusher.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await pusher
    logger.info("Observer disconnected (%s)", peer)
