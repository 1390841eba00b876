"""Concurrency test helpers for validating thread safety.

This module provides utilities for observing the shared queue while a
pipeline runs and for checking that no pipeline thread outlives its run.
"""

from __future__ import annotations

import threading
import time
from collections import Counter
from collections.abc import Callable, Iterable
from typing import Any

from boundedflow.core.pipeline.utils import BoundedQueue, SharedCoordinator

# Short enough that a missed broadcast only costs a few milliseconds
FAST_WAIT_TIMEOUT = 0.05


def make_items(count: int, prefix: str = "Item") -> list[str]:
    """Build ``{prefix}-1 .. {prefix}-count`` labels."""
    return [f"{prefix}-{i}" for i in range(1, count + 1)]


def multiset(items: Iterable[Any]) -> Counter:
    return Counter(items)


def is_subsequence(sub: list[Any], seq: list[Any]) -> bool:
    """True if ``sub`` appears in ``seq`` in order, not necessarily contiguously."""
    it = iter(seq)
    return all(any(candidate == wanted for candidate in it) for wanted in sub)


class QueueSizeObserver(threading.Thread):
    """Samples the queue size under the coordinator until stopped.

    Every sample is taken while holding the coordinator, so it sees the
    same consistent state producers and consumers see.
    """

    def __init__(
        self,
        queue: BoundedQueue,
        coordinator: SharedCoordinator,
        interval: float = 0.0005,
    ) -> None:
        super().__init__(name="QueueSizeObserver", daemon=True)
        self.queue = queue
        self.coordinator = coordinator
        self.interval = interval
        self.samples: list[int] = []
        self._stop_event = threading.Event()

    def run(self) -> None:
        while not self._stop_event.is_set():
            with self.coordinator:
                self.samples.append(self.queue.size())
            time.sleep(self.interval)

    def stop(self) -> None:
        self._stop_event.set()
        self.join(timeout=5)

    @property
    def max_observed(self) -> int:
        return max(self.samples, default=0)


def leaked_threads(baseline: set[threading.Thread], timeout: float = 2.0) -> list[threading.Thread]:
    """Return threads started since ``baseline`` that are still alive after ``timeout``."""
    deadline = time.monotonic() + timeout
    while True:
        leaked = [t for t in threading.enumerate() if t not in baseline and t.is_alive()]
        if not leaked or time.monotonic() >= deadline:
            return leaked
        time.sleep(0.01)


def wait_until(predicate: Callable[[], bool], timeout: float = 2.0, interval: float = 0.005) -> bool:
    """Poll ``predicate`` until it holds or ``timeout`` elapses."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


def drain(queue: BoundedQueue, coordinator: SharedCoordinator) -> list[Any]:
    """Dequeue everything currently queued, broadcasting after each item."""
    drained = []
    with coordinator:
        while True:
            taken, item = queue.try_dequeue()
            if not taken:
                return drained
            drained.append(item)
            coordinator.broadcast()
