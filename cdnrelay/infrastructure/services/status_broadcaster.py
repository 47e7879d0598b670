"""In-process fan-out of health snapshots to streaming subscribers."""

from __future__ import annotations

import asyncio
import json
from typing import Any, AsyncIterator, Dict, List, Set

from cdnrelay.domain.ports.status_publisher import IStatusChannel
from cdnrelay.shared import get_logger

logger = get_logger(__name__)


class SubscriptionClosed(Exception):
    """Raised when writing to a subscription that has been closed."""


class Subscription:
    """Bounded outbox of serialised snapshots for one observer."""

    def __init__(self, buffer_size: int) -> None:
        self._queue: asyncio.Queue[str] = asyncio.Queue(maxsize=buffer_size)
        self.closed = False

    def write(self, payload: str) -> None:
        if self.closed:
            raise SubscriptionClosed()
        self._queue.put_nowait(payload)

    def close(self) -> None:
        self.closed = True

    async def __aiter__(self) -> AsyncIterator[str]:
        while not self.closed:
            yield await self._queue.get()


class StatusBroadcaster(IStatusChannel):
    """
    Registry of subscribers with remove-on-write-failure semantics.

    Publishing never blocks and never raises: a subscriber that is closed
    or whose buffer is full is dropped. Nothing is replayed to late
    subscribers.
    """

    def __init__(self, buffer_size: int = 16) -> None:
        self._buffer_size = buffer_size
        self._subscribers: Set[Subscription] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self) -> Subscription:
        subscription = Subscription(self._buffer_size)
        self._subscribers.add(subscription)
        logger.debug("broadcast.subscribed", subscribers=len(self._subscribers))
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        subscription.close()
        self._subscribers.discard(subscription)
        logger.debug("broadcast.unsubscribed", subscribers=len(self._subscribers))

    def publish(self, state: Dict[str, Any]) -> None:
        payload = json.dumps(state)
        dropped: List[Subscription] = []
        for subscription in self._subscribers:
            try:
                subscription.write(payload)
            except (SubscriptionClosed, asyncio.QueueFull):
                dropped.append(subscription)

        for subscription in dropped:
            self.unsubscribe(subscription)
        if dropped:
            logger.info("broadcast.subscribers.dropped", count=len(dropped))
