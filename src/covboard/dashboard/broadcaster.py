"""Snapshot fan-out to live dashboard subscribers.

One writer (the run orchestrator) publishes snapshots; any number of
readers receive them in publish order. A subscriber that cannot accept a
delivery is dropped on the spot and never retried.
"""

from __future__ import annotations

import asyncio
import threading
from typing import Protocol

import structlog

from covboard.testing.models import DashboardSnapshot

logger = structlog.get_logger()


class SubscriberClosedError(Exception):
    """Delivery target is closed or too far behind to accept more snapshots."""

    pass


class Subscriber(Protocol):
    """Anything that can receive a snapshot without blocking."""

    def deliver(self, snapshot: DashboardSnapshot) -> None: ...


class Subscription:
    """Queue-backed subscriber consumed as an async iterator.

    Delivery never blocks the publisher: a full queue closes the
    subscription instead.
    """

    def __init__(self, maxsize: int = 0) -> None:
        self._queue: asyncio.Queue[DashboardSnapshot | None] = asyncio.Queue(maxsize)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def deliver(self, snapshot: DashboardSnapshot) -> None:
        if self._closed:
            raise SubscriberClosedError("subscription is closed")
        try:
            self._queue.put_nowait(snapshot)
        except asyncio.QueueFull:
            self.close()
            raise SubscriberClosedError("subscriber queue is full") from None

    def close(self) -> None:
        """Stop the iterator. Snapshots still queued are discarded."""
        if self._closed:
            return
        self._closed = True
        while not self._queue.empty():
            self._queue.get_nowait()
        self._queue.put_nowait(None)

    def __aiter__(self) -> Subscription:
        return self

    async def __anext__(self) -> DashboardSnapshot:
        snapshot = await self._queue.get()
        if snapshot is None:
            raise StopAsyncIteration
        return snapshot


class SnapshotBroadcaster:
    """Holds the current snapshot and the set of live subscribers.

    Subscribe, unsubscribe, reads of ``current`` and publish all take the
    same lock, so every subscriber observes one total order and nothing is
    delivered after unsubscribe returns.
    """

    def __init__(self, initial: DashboardSnapshot, *, queue_size: int = 0) -> None:
        self._current = initial
        self._queue_size = queue_size
        self._subscribers: list[Subscriber] = []
        self._lock = threading.Lock()

    @property
    def current(self) -> DashboardSnapshot:
        with self._lock:
            return self._current

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def subscribe(self, subscriber: Subscriber | None = None) -> Subscriber:
        """Register a subscriber and hand it the current snapshot first.

        With no argument a fresh ``Subscription`` is created and returned.
        A subscriber that rejects the initial snapshot is not registered.
        """
        if subscriber is None:
            subscriber = Subscription(self._queue_size)
        with self._lock:
            try:
                subscriber.deliver(self._current)
            except Exception as e:
                logger.warning("subscriber_rejected", error=str(e))
                return subscriber
            self._subscribers.append(subscriber)
            count = len(self._subscribers)
        logger.debug("subscriber_added", subscribers=count)
        return subscriber

    def open_subscription(self) -> Subscription:
        """Subscribe a new queue-backed ``Subscription`` and return it."""
        subscription = Subscription(self._queue_size)
        self.subscribe(subscription)
        return subscription

    def unsubscribe(self, subscriber: Subscriber) -> bool:
        """Deregister ``subscriber``. Returns False if it was not registered."""
        with self._lock:
            try:
                self._subscribers.remove(subscriber)
            except ValueError:
                return False
            count = len(self._subscribers)
        logger.debug("subscriber_removed", subscribers=count)
        return True

    def publish(self, snapshot: DashboardSnapshot) -> None:
        """Make ``snapshot`` current and deliver it to every subscriber."""
        with self._lock:
            self._current = snapshot
            dropped: list[Subscriber] = []
            for subscriber in self._subscribers:
                try:
                    subscriber.deliver(snapshot)
                except Exception as e:
                    logger.info("subscriber_dropped", error=str(e))
                    dropped.append(subscriber)
            for subscriber in dropped:
                self._subscribers.remove(subscriber)
