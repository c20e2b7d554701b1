"""Sequential dispatch queue.

Incoming messages can arrive faster than they are processed (each one may
wait on several downloads). The queue buffers them and runs a single drain
loop so that exactly one message is in flight at a time, in arrival order.
"""

import asyncio
import logging
from collections import deque

logger = logging.getLogger(__name__)


class MessageQueue:
    """Unbounded FIFO with one drain loop.

    `handler` is an async callable invoked with each item. The loop exits
    when the buffer empties and is restarted by the next enqueue.
    """

    def __init__(self, handler):
        self._handler = handler
        self._buffer = deque()
        self._draining = False
        self._task = None
        self._idle = asyncio.Event()
        self._idle.set()
        self.processed = 0
        self.failed = 0

    @property
    def pending(self) -> int:
        return len(self._buffer)

    @property
    def is_draining(self) -> bool:
        return self._draining

    def enqueue(self, item) -> None:
        self._buffer.append(item)
        logger.debug("[queue] enqueued (pending=%d)", len(self._buffer))
        if not self._draining:
            self._draining = True
            self._idle.clear()
            self._task = asyncio.create_task(self._drain())

    async def _drain(self) -> None:
        try:
            while self._buffer:
                item = self._buffer.popleft()
                try:
                    await self._handler(item)
                    self.processed += 1
                except Exception:
                    # Contain the failure to this message and keep draining.
                    self.failed += 1
                    logger.exception("[queue] message processing failed")
        finally:
            self._draining = False
            self._task = None
            self._idle.set()

    async def wait_idle(self) -> None:
        """Wait until every buffered message has been processed."""
        await self._idle.wait()

    def stats(self) -> dict:
        return {
            "pending": self.pending,
            "draining": self._draining,
            "processed": self.processed,
            "failed": self.failed,
        }
