import asyncio
import json

from fastapi import WebSocket

from logging_config import get_logger

logger = get_logger(__name__)


class WebSocketConnection:
    """Adapts a FastAPI WebSocket to the non-blocking ``Connection`` protocol.

    ``send`` only enqueues; ``pump`` runs as a background task and writes queued
    messages to the socket in order.
    """

    def __init__(self, websocket: WebSocket, label: str = ""):
        self.websocket = websocket
        self.label = label
        self._outbox: asyncio.Queue = asyncio.Queue()
        self._live = True

    @property
    def is_live(self) -> bool:
        return self._live

    def send(self, message: dict) -> None:
        if self._live:
            self._outbox.put_nowait(message)

    def close(self):
        self._live = False

    async def pump(self):
        try:
            while True:
                message = await self._outbox.get()
                await self.websocket.send_text(json.dumps(message))
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning(f"Error sending to connection {self.label}: {e}")
            self._live = False
