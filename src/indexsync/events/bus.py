"""In-memory notification bus feeding the index subscriber."""
import asyncio
import uuid
from collections.abc import AsyncIterator

import structlog

from indexsync.events.types import Notification

logger = structlog.get_logger()


class EventBus:
    """Async notification bus with fan-out and blocking backpressure.

    Every subscriber receives every notification. When a subscriber queue
    is full, ``publish`` waits for room instead of discarding anything, so
    a slow index subscriber slows the hook endpoint down rather than losing
    writes.

    Attributes:
        queue_size: Maximum size of each subscriber queue.
        max_subscribers: Maximum number of concurrent subscribers.
    """

    def __init__(
        self,
        queue_size: int = 100,
        max_subscribers: int = 100,
    ) -> None:
        """Initialize event bus.

        Args:
            queue_size: Maximum items per subscriber queue.
            max_subscribers: Maximum concurrent subscribers allowed.
        """
        self._subscribers: dict[str, asyncio.Queue[Notification]] = {}
        self._queue_size = queue_size
        self._max_subscribers = max_subscribers
        self._lock = asyncio.Lock()

    @property
    def subscriber_count(self) -> int:
        """Number of active subscribers."""
        return len(self._subscribers)

    @property
    def pending(self) -> int:
        """Notifications queued but not yet consumed, across subscribers."""
        return sum(queue.qsize() for queue in self._subscribers.values())

    async def publish(self, notification: Notification) -> int:
        """Publish notification to every subscriber.

        Waits while a subscriber queue is full.

        Args:
            notification: Lifecycle notification to publish.

        Returns:
            Number of subscribers that received the notification.
        """
        delivered = 0

        for subscriber_id, queue in list(self._subscribers.items()):
            if queue.full():
                logger.warning(
                    "subscriber_queue_full",
                    subscriber_id=subscriber_id,
                    notification_id=notification.id,
                    queue_size=self._queue_size,
                )
            await queue.put(notification)
            delivered += 1

        return delivered

    async def subscribe(self) -> tuple[str, AsyncIterator[Notification]]:
        """Register a subscriber.

        Returns:
            Tuple of (subscriber_id, notification_iterator).

        Raises:
            ValueError: If maximum subscribers reached.
        """
        async with self._lock:
            if self.subscriber_count >= self._max_subscribers:
                raise ValueError("Maximum subscribers reached")

            subscriber_id = str(uuid.uuid4())
            queue: asyncio.Queue[Notification] = asyncio.Queue(
                maxsize=self._queue_size,
            )
            self._subscribers[subscriber_id] = queue

        async def notification_iterator() -> AsyncIterator[Notification]:
            try:
                while True:
                    notification = await queue.get()
                    yield notification
            finally:
                await self.unsubscribe(subscriber_id)

        return subscriber_id, notification_iterator()

    async def unsubscribe(self, subscriber_id: str) -> None:
        """Remove a subscriber from the bus.

        Args:
            subscriber_id: ID of the subscriber to remove.
        """
        async with self._lock:
            self._subscribers.pop(subscriber_id, None)
        logger.debug("subscriber_removed", subscriber_id=subscriber_id)
