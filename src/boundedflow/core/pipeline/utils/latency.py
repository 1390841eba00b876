"""Delay strategies for simulated per-item processing latency.

A delay strategy is a zero-argument callable returning the number of
seconds an actor pauses, outside the coordinator, after handling an item.
Tests use :func:`no_delay`; demonstrations use :func:`uniform_delay`.
"""

from __future__ import annotations

import random
from typing import Callable

from boundedflow.shared.errors import ErrorCode, create_config_error

DelayStrategy = Callable[[], float]


def no_delay() -> float:
    """Never pause."""
    return 0.0


def fixed_delay(seconds: float) -> DelayStrategy:
    """Return a strategy that always pauses ``seconds``."""
    if seconds < 0:
        raise create_config_error(
            f"Delay must not be negative, got {seconds!r}",
            code=ErrorCode.INVALID_DELAY_STRATEGY,
            field="seconds",
            operation="fixed_delay",
        )

    def _delay() -> float:
        return seconds

    return _delay


def uniform_delay(min_seconds: float, max_seconds: float, seed: int | None = None) -> DelayStrategy:
    """Return a strategy pausing a random duration in ``[min_seconds, max_seconds]``.

    Args:
        min_seconds: Lower bound, >= 0.
        max_seconds: Upper bound, >= min_seconds.
        seed: Optional seed for a private random generator.

    Raises:
        ConfigurationError: If the bounds are negative or inverted.
    """
    if min_seconds < 0 or max_seconds < min_seconds:
        raise create_config_error(
            f"Invalid delay range [{min_seconds!r}, {max_seconds!r}]",
            code=ErrorCode.INVALID_DELAY_STRATEGY,
            field="delay_range",
            operation="uniform_delay",
        )

    rng = random.Random(seed)  # noqa: S311 - latency simulation only

    def _delay() -> float:
        return rng.uniform(min_seconds, max_seconds)

    return _delay


def validate_delay_strategy(delay: object, operation: str) -> DelayStrategy:
    """Fail fast on a delay strategy that cannot be called."""
    if not callable(delay):
        raise create_config_error(
            f"Delay strategy must be callable, got {type(delay).__name__}",
            code=ErrorCode.INVALID_DELAY_STRATEGY,
            field="delay",
            operation=operation,
        )
    return delay
