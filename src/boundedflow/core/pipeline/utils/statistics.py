"""Statistics collectors for pipeline operations.

This module provides thread-safe statistics collectors for tracking
metrics across the pipeline:
- QueueStatistics: Shared queue metrics
- ProducerStatistics: Per-producer metrics
- ConsumerStatistics: Per-consumer metrics
"""

from __future__ import annotations

import threading


class QueueStatistics:
    """Statistics collector for queue operations.

    This class provides thread-safe counters for tracking queue metrics.
    """

    def __init__(self) -> None:
        """Initialize the queue statistics with zero counters."""
        self._lock = threading.Lock()
        self._items_put = 0
        self._items_got = 0
        self._rejected_puts = 0
        self._max_size = 0

    def increment_items_put(self) -> None:
        """Increment the items put counter."""
        with self._lock:
            self._items_put += 1

    def increment_items_got(self) -> None:
        """Increment the items got counter."""
        with self._lock:
            self._items_got += 1

    def increment_rejected_puts(self) -> None:
        """Increment the counter of enqueue attempts refused because the queue was full."""
        with self._lock:
            self._rejected_puts += 1

    def update_max_size(self, size: int) -> None:
        """Update the maximum size observed.

        Args:
            size: The current size of the queue.
        """
        with self._lock:
            self._max_size = max(size, self._max_size)

    @property
    def items_put(self) -> int:
        """Get the number of items put into the queue."""
        with self._lock:
            return self._items_put

    @property
    def items_got(self) -> int:
        """Get the number of items got from the queue."""
        with self._lock:
            return self._items_got

    @property
    def rejected_puts(self) -> int:
        """Get the number of enqueue attempts refused by a full queue."""
        with self._lock:
            return self._rejected_puts

    @property
    def max_size(self) -> int:
        """Get the maximum size observed."""
        with self._lock:
            return self._max_size


class ProducerStatistics:
    """Statistics collector for a producer."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items_produced = 0
        self._backpressure_waits = 0

    def increment_items_produced(self) -> None:
        with self._lock:
            self._items_produced += 1

    def increment_backpressure_waits(self) -> None:
        with self._lock:
            self._backpressure_waits += 1

    @property
    def items_produced(self) -> int:
        with self._lock:
            return self._items_produced

    @property
    def backpressure_waits(self) -> int:
        """Get the number of timed waits spent on a full queue."""
        with self._lock:
            return self._backpressure_waits


class ConsumerStatistics:
    """Statistics collector for a consumer."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items_consumed = 0
        self._starvation_waits = 0

    def increment_items_consumed(self) -> None:
        with self._lock:
            self._items_consumed += 1

    def increment_starvation_waits(self) -> None:
        with self._lock:
            self._starvation_waits += 1

    @property
    def items_consumed(self) -> int:
        with self._lock:
            return self._items_consumed

    @property
    def starvation_waits(self) -> int:
        """Get the number of timed waits spent on an empty queue."""
        with self._lock:
            return self._starvation_waits
