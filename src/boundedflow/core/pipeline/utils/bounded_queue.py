"""Bounded queue for pipeline backpressure control.

This module provides BoundedQueue, a fixed-capacity FIFO container with
non-blocking enqueue and dequeue. The queue holds no lock of its own:
every call is made while holding the SharedCoordinator that producers and
consumers share, which keeps the size invariant and the completion
handshake under a single lock.
"""

from __future__ import annotations

from collections import deque
from typing import Generic, TypeVar

from boundedflow.core.pipeline.utils.statistics import QueueStatistics
from boundedflow.shared.constants import Pipeline
from boundedflow.shared.errors import ErrorCode, create_config_error

T = TypeVar("T")


class BoundedQueue(Generic[T]):
    """Fixed-capacity FIFO queue with non-blocking operations.

    Args:
        capacity: Maximum number of items the queue can hold. Must be >= 1.
        stats: Optional QueueStatistics to record into.

    Raises:
        ConfigurationError: If capacity is not a positive integer.
    """

    def __init__(self, capacity: int, stats: QueueStatistics | None = None) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < Pipeline.MIN_CAPACITY:
            raise create_config_error(
                f"Queue capacity must be a positive integer, got {capacity!r}",
                code=ErrorCode.INVALID_CAPACITY,
                field="capacity",
                operation="create_bounded_queue",
            )

        self._capacity = capacity
        self._items: deque[T] = deque()
        self.stats = stats or QueueStatistics()

    def try_enqueue(self, item: T) -> bool:
        """Append an item if there is room.

        Args:
            item: The item to append.

        Returns:
            True if the item was appended, False if the queue is full.
            A refused call leaves the queue untouched.
        """
        if len(self._items) >= self._capacity:
            self.stats.increment_rejected_puts()
            return False

        self._items.append(item)
        self.stats.increment_items_put()
        self.stats.update_max_size(len(self._items))
        return True

    def try_dequeue(self) -> tuple[bool, T | None]:
        """Remove the oldest item if there is one.

        Returns:
            ``(True, item)`` when an item was removed, ``(False, None)`` when
            the queue is empty. The flag keeps ``None`` usable as an item.
        """
        if not self._items:
            return False, None

        item = self._items.popleft()
        self.stats.increment_items_got()
        return True, item

    def size(self) -> int:
        """Return the number of queued items."""
        return len(self._items)

    def is_empty(self) -> bool:
        """Return True if the queue holds no items."""
        return not self._items

    def is_full(self) -> bool:
        """Return True if the queue is at capacity."""
        return len(self._items) >= self._capacity

    def snapshot(self) -> list[T]:
        """Return a copy of the queued items, oldest first."""
        return list(self._items)

    @property
    def capacity(self) -> int:
        """Get the maximum number of items the queue can hold."""
        return self._capacity

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"BoundedQueue(capacity={self._capacity}, size={len(self._items)})"
