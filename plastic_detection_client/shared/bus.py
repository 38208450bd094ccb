"""In-process publish/subscribe used to fan out client state snapshots."""

from __future__ import annotations

import threading
from collections import defaultdict
from typing import Callable, DefaultDict, Generic, Hashable, TypeVar

Event = TypeVar("Event")
Subscriber = Callable[[Event], None]
Unsubscribe = Callable[[], None]


class EventBus(Generic[Event]):
    """Thread-safe publish/subscribe bus keyed by topic."""

    def __init__(self) -> None:
        self._topics: DefaultDict[Hashable, list[Subscriber]] = defaultdict(list)
        self._lock = threading.RLock()

    def subscribe(self, topic: Hashable, callback: Subscriber) -> Unsubscribe:
        """Register ``callback`` for ``topic`` and return a function undoing it."""

        with self._lock:
            self._topics[topic].append(callback)
        return lambda: self.unsubscribe(topic, callback)

    def unsubscribe(self, topic: Hashable, callback: Subscriber) -> None:
        with self._lock:
            callbacks = self._topics.get(topic)
            if not callbacks or callback not in callbacks:
                return
            callbacks.remove(callback)
            if not callbacks:
                del self._topics[topic]

    def listener_count(self, topic: Hashable) -> int:
        with self._lock:
            return len(self._topics.get(topic, ()))

    def publish(self, topic: Hashable, event: Event) -> None:
        # Snapshot under the lock so callbacks may (un)subscribe while running.
        with self._lock:
            callbacks = tuple(self._topics.get(topic, ()))
        for callback in callbacks:
            callback(event)
