"""WebSocket routes for live page refresh."""

import logging
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from speciescatalog.notifications.refresh import RefreshBroadcaster
from speciescatalog.web.core.container import Container

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/refresh")
@inject
async def refresh_websocket_endpoint(
    websocket: WebSocket,
    broadcaster: Annotated[
        RefreshBroadcaster, Depends(Provide[Container.refresh_broadcaster])
    ],
) -> None:
    """Stream refresh events to a page that shows catalog data."""
    await websocket.accept()
    broadcaster.add_websocket(websocket)
    await websocket.send_json({"type": "connected"})
    try:
        while True:
            await websocket.receive_text()  # Keep connection alive
    except WebSocketDisconnect:
        logger.info("Refresh client disconnected")
    finally:
        broadcaster.remove_websocket(websocket)
