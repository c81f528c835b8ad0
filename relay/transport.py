"""Adapters between the synchronous coordinator and Starlette websockets.

The coordinator never awaits. It calls ``Peer.send`` which only enqueues;
a writer task per connection drains the queue onto the socket. A full
queue or a closed socket silently drops the message.
"""
from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional, Protocol

from starlette.websockets import WebSocket, WebSocketDisconnect, WebSocketState

from .config import SEND_QUEUE_SIZE
from .logging_config import get_logger

logger = get_logger(__name__)


class Peer(Protocol):
    """Anything the coordinator can push a JSON-ready payload to."""

    def send(self, payload: Dict[str, Any]) -> None: ...

    @property
    def is_open(self) -> bool: ...


class WebSocketPeer:
    """Best-effort, non-blocking sender wrapped around a Starlette ``WebSocket``."""

    def __init__(self, websocket: WebSocket, queue_size: int = SEND_QUEUE_SIZE):
        self._websocket = websocket
        self._queue: asyncio.Queue[Dict[str, Any]] = asyncio.Queue(maxsize=queue_size)
        self._closed = False
        self._writer: Optional[asyncio.Task] = None
        self.label = "?"

    @property
    def is_open(self) -> bool:
        return (
            not self._closed
            and self._websocket.application_state == WebSocketState.CONNECTED
        )

    def send(self, payload: Dict[str, Any]) -> None:
        if not self.is_open:
            return
        try:
            self._queue.put_nowait(payload)
        except asyncio.QueueFull:
            logger.debug(f"Outbound buffer full for {self.label}, dropping {payload.get('type')}")

    def start(self) -> None:
        if self._writer is None:
            self._writer = asyncio.create_task(self._drain())

    async def _drain(self) -> None:
        while True:
            payload = await self._queue.get()
            try:
                await self._websocket.send_json(payload)
            except (WebSocketDisconnect, RuntimeError, OSError) as e:
                logger.debug(f"Send to {self.label} failed, marking closed: {e!r}")
                self._closed = True
                return

    async def close(self) -> None:
        """Stop the writer. Anything still buffered is discarded."""
        self._closed = True
        if self._writer is not None and not self._writer.done():
            self._writer.cancel()
            try:
                await self._writer
            except asyncio.CancelledError:
                pass
        self._writer = None


__all__ = ["Peer", "WebSocketPeer"]
