# ferrelog/core/notifier.py
import asyncio
import logging
import threading
import uuid
from typing import AsyncIterator

logger = logging.getLogger(__name__)


class OrderChangeNotifier:
    """
    In-process fan-out of pedido changes.

    Services publish after each commit (from FastAPI's worker threads);
    every open subscription receives a dict like:

        {"event": "UPDATE", "folio": "<uuid>", "estado": "En Tránsito"}

    Screens that list orders (pending shipments, in-transit deliveries)
    re-fetch when an event arrives. Events are not persisted: a client
    that connects later only sees later changes.
    """

    def __init__(self, max_queue: int = 100):
        self.max_queue = max_queue
        self._subscribers: set[tuple[asyncio.AbstractEventLoop, asyncio.Queue]] = set()
        self._lock = threading.Lock()

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def publish(self, event: str, folio: uuid.UUID, estado: str | None = None) -> None:
        """
        Queue a change for every current subscriber. Safe to call from
        any thread.
        """
        change = {"event": event, "folio": str(folio), "estado": estado}
        with self._lock:
            subscribers = list(self._subscribers)

        for entry in subscribers:
            loop, queue = entry
            try:
                loop.call_soon_threadsafe(self._offer, queue, change)
            except RuntimeError:
                # Event loop already closed; the subscriber is gone.
                with self._lock:
                    self._subscribers.discard(entry)

    @staticmethod
    def _offer(queue: asyncio.Queue, change: dict) -> None:
        try:
            queue.put_nowait(change)
        except asyncio.QueueFull:
            logger.warning("Dropping order change for slow subscriber: %s", change)

    async def subscribe(self) -> AsyncIterator[dict]:
        """
        Async iterator over changes published after the call.
        """
        entry = (asyncio.get_running_loop(), asyncio.Queue(maxsize=self.max_queue))
        with self._lock:
            self._subscribers.add(entry)
        try:
            while True:
                yield await entry[1].get()
        finally:
            with self._lock:
                self._subscribers.discard(entry)


order_changes = OrderChangeNotifier()
