"""Completion signals for production streams.

A CompletionSignal is owned by one producer and set exactly once when that
producer has enqueued its last item. Consumers read a CompletionGate, which
is either a single CompletionSignal or an AggregateCompletionSignal derived
from several of them.

Both classes are read and written only while holding the SharedCoordinator.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from boundedflow.shared.errors import create_missing_reference_error


@runtime_checkable
class CompletionGate(Protocol):
    """Anything a consumer can ask whether production is finished."""

    def is_set(self) -> bool: ...


class CompletionSignal:
    """Monotonic boolean flag: false until set, then true forever."""

    def __init__(self) -> None:
        self._flag = False

    def set(self) -> None:
        """Mark the production stream as complete."""
        self._flag = True

    def is_set(self) -> bool:
        return self._flag

    def __repr__(self) -> str:
        return f"CompletionSignal(set={self._flag})"


class AggregateCompletionSignal:
    """Completion of a whole group of producers.

    Set iff every constituent signal is set. It is derived on every read
    rather than stored, so no orchestrator step can raise it early. An
    aggregate over zero signals is set.

    Args:
        signals: The constituent signals, one per producer.
    """

    def __init__(self, signals: Iterable[CompletionGate]) -> None:
        self._signals: tuple[CompletionGate, ...] = tuple(signals)
        for signal in self._signals:
            if signal is None:
                raise create_missing_reference_error("signals[]", operation="create_aggregate_signal")

    def is_set(self) -> bool:
        return all(signal.is_set() for signal in self._signals)

    def pending(self) -> int:
        """Return how many constituent signals are still unset."""
        return sum(1 for signal in self._signals if not signal.is_set())

    @property
    def signals(self) -> tuple[CompletionGate, ...]:
        return self._signals

    def __len__(self) -> int:
        return len(self._signals)

    def __repr__(self) -> str:
        return f"AggregateCompletionSignal(total={len(self._signals)}, pending={self.pending()})"
