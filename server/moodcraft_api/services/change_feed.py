"""In-memory change feed for real-time history updates.

This module bridges the Entry Store's synchronous change signal to any
number of async subscribers, so connected views can be streamed an
"entries changed" event via SSE and re-read the history on receipt.
"""
import asyncio
import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import AsyncIterator, Callable, Optional

from mood_engine.store import EntryStore

log = logging.getLogger(__name__)

# Put on a dropped subscriber's queue so its stream ends
END_OF_STREAM = None


@dataclass
class EntriesChanged:
    """Payload-free change signal, stamped for the SSE stream."""

    event: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "event": self.event,
            "timestamp": self.timestamp.isoformat(),
        }


class ChangeFeed:
    """Fans store change signals out to async subscribers.

    Each subscriber gets its own bounded queue. A subscriber whose queue is
    full is dropped rather than blocking the writer.
    """

    def __init__(self, max_queue_size: int = 100):
        """Initialize the change feed.

        Args:
            max_queue_size: Capacity of each subscriber queue.
        """
        self.max_queue_size = max_queue_size
        self.event_name = "entries-changed"
        self._subscribers: list[asyncio.Queue] = []
        self._lock = threading.Lock()
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._stats = {
            "total_published": 0,
            "total_subscribers": 0,
            "dropped_subscribers": 0,
        }

    def attach(self, store: EntryStore) -> None:
        """Start publishing on every change signal from `store`."""
        self.detach()
        self.event_name = store.notifier.name.split(":")[-1]
        self._unsubscribe = store.subscribe(self.publish)

    def detach(self) -> None:
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None

    def publish(self) -> EntriesChanged:
        """Push a change event to all subscribers.

        Called synchronously from the store right after a successful write.

        Returns:
            The published event.
        """
        event = EntriesChanged(event=self.event_name)
        with self._lock:
            self._stats["total_published"] += 1

            dead_subscribers = []
            for queue in self._subscribers:
                try:
                    queue.put_nowait(event)
                except asyncio.QueueFull:
                    dead_subscribers.append(queue)

            for queue in dead_subscribers:
                self._subscribers.remove(queue)
                self._end_stream(queue)
                self._stats["dropped_subscribers"] += 1

        if dead_subscribers:
            log.warning(f"[FEED] Dropped {len(dead_subscribers)} slow subscriber(s)")
        return event

    @staticmethod
    def _end_stream(queue: asyncio.Queue) -> None:
        """Replace pending events with the end-of-stream marker."""
        while not queue.empty():
            queue.get_nowait()
        queue.put_nowait(END_OF_STREAM)

    def open_queue(self) -> asyncio.Queue:
        """Register a new subscriber queue."""
        queue: asyncio.Queue[Optional[EntriesChanged]] = asyncio.Queue(maxsize=self.max_queue_size)
        with self._lock:
            self._subscribers.append(queue)
            self._stats["total_subscribers"] += 1
        return queue

    def close_queue(self, queue: asyncio.Queue) -> None:
        with self._lock:
            if queue in self._subscribers:
                self._subscribers.remove(queue)

    async def subscribe(self) -> AsyncIterator[EntriesChanged]:
        """Subscribe to change events via async generator.

        Yields:
            EntriesChanged events as they arrive. The generator ends when
            the subscriber is dropped for falling behind.
        """
        queue = self.open_queue()
        try:
            while True:
                event = await queue.get()
                if event is END_OF_STREAM:
                    return
                yield event
        finally:
            self.close_queue(queue)

    def get_stats(self) -> dict:
        """Get feed statistics.

        Returns:
            Dictionary with feed statistics.
        """
        with self._lock:
            return {
                **self._stats,
                "current_subscribers": len(self._subscribers),
            }
