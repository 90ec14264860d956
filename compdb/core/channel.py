import asyncio
from pathlib import Path
from typing import Optional

from compdb.core.config.settings import settings

# Marks the end of the stream once the last sender is released
_CLOSED = object()


class ChannelClosedError(RuntimeError):
    """Raised when a path is sent after the channel can no longer deliver it."""


class PathChannel:
    """
    Bounded multi-producer / single-consumer queue of discovered paths.

    Producers register with open_sender() before they start and call
    close_sender() when they are done. When the open sender count drops
    to zero, an end marker is queued behind every path already sent, so
    the consumer drains the queue completely before iteration stops.

    The bound is enforced with a semaphore rather than Queue(maxsize)
    so the end marker can always be enqueued without waiting.
    """

    def __init__(self, capacity: Optional[int] = None):
        capacity = capacity if capacity is not None else settings.QUEUE_CAPACITY
        if capacity < 1:
            raise ValueError(f"Channel capacity must be positive, got {capacity}.")

        self.capacity = capacity
        self._queue: asyncio.Queue = asyncio.Queue()
        self._slots = asyncio.Semaphore(capacity)
        self._open_senders = 0
        self._closed = False
        self._receiver_closed = False

    @property
    def open_senders(self) -> int:
        return self._open_senders

    @property
    def closed(self) -> bool:
        return self._closed

    def open_sender(self) -> None:
        if self._closed:
            raise ChannelClosedError("Cannot open a sender on a closed channel.")
        self._open_senders += 1

    def close_sender(self) -> None:
        if self._open_senders <= 0:
            raise ChannelClosedError("close_sender() called with no open senders.")
        self._open_senders -= 1
        if self._open_senders == 0:
            self._closed = True
            self._queue.put_nowait(_CLOSED)

    async def send(self, path: Path) -> None:
        """
        Publishes a path, suspending while the channel is at capacity.
        """
        if self._receiver_closed:
            raise ChannelClosedError(f"Receiver dropped, cannot deliver {path}")
        if self._closed:
            raise ChannelClosedError(f"Channel closed, cannot deliver {path}")

        await self._slots.acquire()
        self._queue.put_nowait(path)

    async def recv(self) -> Optional[Path]:
        """
        Returns the next path, or None once every sender is closed
        and the queue is empty.
        """
        item = await self._queue.get()
        if item is _CLOSED:
            # Keep the marker visible to repeated recv() calls
            self._queue.put_nowait(_CLOSED)
            return None
        self._slots.release()
        return item

    def close_receiver(self) -> None:
        self._receiver_closed = True

    def __aiter__(self):
        return self

    async def __anext__(self) -> Path:
        path = await self.recv()
        if path is None:
            raise StopAsyncIteration
        return path
