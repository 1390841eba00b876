"""Thread synchronization for pipeline components.

This module provides SharedCoordinator, the monitor that serializes every
access to the shared queue and the completion signals.
"""

from __future__ import annotations

import threading
from types import TracebackType

from boundedflow.shared.constants import Pipeline
from boundedflow.shared.errors import ErrorCode, create_config_error


class SharedCoordinator:
    """Mutual-exclusion lock paired with a broadcast condition.

    Producers and consumers hold the coordinator for every read or write of
    queue state and completion flags. A waiter whose precondition does not
    hold calls :meth:`wait`, which releases the lock, blocks for at most
    ``wait_timeout`` seconds and re-acquires it; the caller then re-checks
    its predicate in a loop. Every state change calls :meth:`broadcast` so
    that parked producers and consumers all get a chance to re-check.

    Args:
        wait_timeout: Upper bound, in seconds, of a single wait.

    Raises:
        ConfigurationError: If wait_timeout is not a positive number.

    Example:
        >>> coordinator = SharedCoordinator(wait_timeout=0.5)
        >>> with coordinator:
        ...     while queue.is_empty():
        ...         coordinator.wait()
    """

    def __init__(self, wait_timeout: float = Pipeline.DEFAULT_WAIT_TIMEOUT) -> None:
        if isinstance(wait_timeout, bool) or not isinstance(wait_timeout, (int, float)) or wait_timeout <= 0:
            raise create_config_error(
                f"Coordinator wait timeout must be a positive number of seconds, got {wait_timeout!r}",
                code=ErrorCode.INVALID_TIMEOUT,
                field="wait_timeout",
                operation="create_coordinator",
            )

        self._wait_timeout = float(wait_timeout)
        self._lock = threading.Lock()
        self._condition = threading.Condition(self._lock)

    def __enter__(self) -> SharedCoordinator:
        self._lock.acquire()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._lock.release()

    def wait(self, timeout: float | None = None) -> bool:
        """Release the lock, block until woken or timed out, re-acquire.

        Must be called while holding the coordinator.

        Args:
            timeout: Seconds to wait; defaults to ``wait_timeout``.

        Returns:
            False if the wait timed out, True if it was woken by a broadcast.
        """
        return self._condition.wait(self._wait_timeout if timeout is None else timeout)

    def broadcast(self) -> None:
        """Wake every waiter. Must be called while holding the coordinator."""
        self._condition.notify_all()

    def notify_all(self) -> None:
        """Acquire the coordinator and wake every waiter."""
        with self._lock:
            self._condition.notify_all()

    def locked(self) -> bool:
        """Return True if some thread currently holds the coordinator."""
        return self._lock.locked()

    @property
    def wait_timeout(self) -> float:
        """Get the upper bound of a single wait, in seconds."""
        return self._wait_timeout
