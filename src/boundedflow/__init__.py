"""
boundedflow - bounded-buffer producer/consumer coordination.

Producers move items from finite sources through one capacity-limited
queue to consumers, with timed re-check waits for backpressure and
starvation and a completion handshake across any number of actors.
"""

__version__ = "1.0.0"

from boundedflow.core.pipeline import PipelineResult, run_pipeline, transfer
from boundedflow.core.pipeline.components import Consumer, Producer
from boundedflow.core.pipeline.utils import (
    AggregateCompletionSignal,
    BoundedQueue,
    CompletionSignal,
    SharedCoordinator,
    fixed_delay,
    no_delay,
    uniform_delay,
)
from boundedflow.shared.errors import (
    BoundedFlowError,
    ConfigurationError,
    InterruptedExecution,
    PipelineExecutionError,
)

__all__ = [
    "AggregateCompletionSignal",
    "BoundedFlowError",
    "BoundedQueue",
    "CompletionSignal",
    "ConfigurationError",
    "Consumer",
    "InterruptedExecution",
    "PipelineExecutionError",
    "PipelineResult",
    "Producer",
    "SharedCoordinator",
    "fixed_delay",
    "no_delay",
    "run_pipeline",
    "transfer",
    "uniform_delay",
]
