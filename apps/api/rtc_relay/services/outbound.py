"""Per-connection outbound queue."""
from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from typing import Awaitable, Callable

from .registry import ConnectionId

SendCallable = Callable[[dict], Awaitable[None]]

logger = logging.getLogger(__name__)


class OutboundChannel:
    """Buffer frames for one client and write them from a dedicated task.

    ``deliver`` never awaits, so it is safe to call while holding the room lock;
    a slow or dead client only backs up its own queue.
    """

    def __init__(self, conn_id: ConnectionId, send: SendCallable, *, max_size: int = 256) -> None:
        self.conn_id = conn_id
        self._send = send
        self._queue: asyncio.Queue[dict] = asyncio.Queue(maxsize=max_size)
        self._writer: asyncio.Task[None] | None = None
        self._closed = False

    async def __aenter__(self) -> "OutboundChannel":
        self._writer = asyncio.create_task(self._write_loop())
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def deliver(self, message: dict) -> bool:
        """Queue a frame for sending; returns False when it was dropped."""

        if self._closed:
            return False
        try:
            self._queue.put_nowait(message)
        except asyncio.QueueFull:
            logger.warning("Outbound queue full for %s, dropping %s", self.conn_id, message.get("type"))
            return False
        return True

    async def flush(self) -> None:
        """Wait until every queued frame has been written or discarded."""

        await self._queue.join()

    async def close(self) -> None:
        self._closed = True
        if self._writer:
            self._writer.cancel()
            with suppress(asyncio.CancelledError):
                await self._writer
            self._writer = None
        self._discard_pending()

    async def _write_loop(self) -> None:
        while True:
            message = await self._queue.get()
            try:
                await self._send(message)
            except asyncio.CancelledError:
                raise
            except Exception as exc:  # noqa: BLE001 - a broken transport ends this writer only
                logger.debug("Send to %s failed, stopping writer: %s", self.conn_id, exc)
                self._closed = True
                self._discard_pending()
                return
            finally:
                self._queue.task_done()

    def _discard_pending(self) -> None:
        while True:
            try:
                self._queue.get_nowait()
            except asyncio.QueueEmpty:
                return
            self._queue.task_done()
