"""Pipeline utilities package.

This package provides the shared-state building blocks of the pipeline:
- BoundedQueue: Fixed-capacity FIFO with non-blocking operations
- SharedCoordinator: Lock + broadcast condition serializing shared state
- CompletionSignal / AggregateCompletionSignal: Production-finished flags
- Delay strategies: Injectable simulated latency
- Statistics classes: For collecting pipeline metrics
"""

from __future__ import annotations

from boundedflow.core.pipeline.utils.bounded_queue import BoundedQueue
from boundedflow.core.pipeline.utils.completion import (
    AggregateCompletionSignal,
    CompletionGate,
    CompletionSignal,
)
from boundedflow.core.pipeline.utils.latency import (
    DelayStrategy,
    fixed_delay,
    no_delay,
    uniform_delay,
)
from boundedflow.core.pipeline.utils.statistics import (
    ConsumerStatistics,
    ProducerStatistics,
    QueueStatistics,
)
from boundedflow.core.pipeline.utils.synchronization import SharedCoordinator

__all__ = [
    "AggregateCompletionSignal",
    "BoundedQueue",
    "CompletionGate",
    "CompletionSignal",
    "ConsumerStatistics",
    "DelayStrategy",
    "ProducerStatistics",
    "QueueStatistics",
    "SharedCoordinator",
    "fixed_delay",
    "no_delay",
    "uniform_delay",
]
