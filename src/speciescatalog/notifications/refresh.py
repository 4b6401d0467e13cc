"""Push refresh events to browsers when catalog data changes."""

import asyncio
import json
import logging

from fastapi import WebSocket

from speciescatalog.notifications.signals import comments_changed_signal

logger = logging.getLogger(__name__)


class RefreshBroadcaster:
    """Relays comment change signals to every connected websocket client.

    Pages showing a species listen on the websocket and reload their
    server-rendered content when they receive a refresh event for it.
    """

    def __init__(self, active_websockets: set[WebSocket]) -> None:
        self.active_websockets = active_websockets
        self._tasks: set[asyncio.Task] = set()

    def register_listeners(self) -> None:
        """Register Blinker signal listeners."""
        comments_changed_signal.connect(self._handle_comments_changed)
        logger.info("RefreshBroadcaster listeners registered.")

    def unregister_listeners(self) -> None:
        """Disconnect from the change signals."""
        comments_changed_signal.disconnect(self._handle_comments_changed)

    def add_websocket(self, websocket: WebSocket) -> None:
        """Add a WebSocket to the active connections set."""
        self.active_websockets.add(websocket)
        logger.info("WebSocket added to active connections. Total: %d", len(self.active_websockets))

    def remove_websocket(self, websocket: WebSocket) -> None:
        """Remove a WebSocket from the active connections set."""
        self.active_websockets.discard(websocket)
        logger.info(
            "WebSocket removed from active connections. Total: %d", len(self.active_websockets)
        )

    def _handle_comments_changed(self, sender: object, species_id: int) -> None:
        if not self.active_websockets:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No event loop running, skipping refresh broadcast")
            return
        task = loop.create_task(
            self.broadcast({"type": "refresh", "resource": "comments", "species_id": species_id})
        )
        # Keep a reference until the task finishes
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def broadcast(self, payload: dict) -> None:
        """Send a JSON payload to all connected clients, dropping dead connections."""
        message = json.dumps(payload)
        disconnected = set()
        for ws in self.active_websockets.copy():
            try:
                await ws.send_text(message)
            except Exception as e:
                logger.warning("Failed to send refresh event: %s", e)
                disconnected.add(ws)

        for ws in disconnected:
            self.active_websockets.discard(ws)
            logger.info("Removed disconnected WebSocket from active connections")
