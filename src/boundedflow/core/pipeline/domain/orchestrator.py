"""Pipeline orchestration and component factory.

This module provides factory classes and orchestration functions for the pipeline:
- PipelineFactory: Creates and wires up queue, coordinator, signals and actors
- run_pipeline: Runs N producers and M consumers over one shared queue
- transfer: One producer, one consumer convenience wrapper
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Callable

from boundedflow.config import PipelineSettings, Settings, get_config
from boundedflow.core.pipeline.components import Consumer, Producer
from boundedflow.core.pipeline.domain.lifecycle import (
    force_shutdown_if_needed,
    interrupt_pipeline,
    start_pipeline_components,
    wait_for_consumer_completion,
    wait_for_producer_completion,
)
from boundedflow.core.pipeline.domain.statistics import (
    StatisticsAggregator,
    format_statistics,
)
from boundedflow.core.pipeline.utils import (
    AggregateCompletionSignal,
    BoundedQueue,
    CompletionSignal,
    ConsumerStatistics,
    DelayStrategy,
    ProducerStatistics,
    QueueStatistics,
    SharedCoordinator,
    no_delay,
    uniform_delay,
)
from boundedflow.shared.constants import ActorNames
from boundedflow.shared.errors import (
    BoundedFlowError,
    ErrorCode,
    ErrorContext,
    PipelineExecutionError,
    create_config_error,
    create_missing_reference_error,
)
from boundedflow.shared.logging import (
    log_operation_error,
    log_operation_start,
    log_operation_success,
)

logger = logging.getLogger(__name__)

DelayFactory = Callable[[], DelayStrategy]


@dataclass
class PipelineComponents:
    """Everything one pipeline run shares and owns."""

    queue: BoundedQueue
    coordinator: SharedCoordinator
    signals: list[CompletionSignal]
    completion: AggregateCompletionSignal
    producers: list[Producer]
    consumers: list[Consumer]
    destinations: list[list[Any]]


@dataclass
class PipelineResult:
    """Outcome of a pipeline run, read after every actor has been joined."""

    destinations: list[list[Any]]
    queue: BoundedQueue
    producer_stats: dict[str, ProducerStatistics]
    consumer_stats: dict[str, ConsumerStatistics]
    duration: float
    errors: list[BoundedFlowError] = field(default_factory=list)

    def collected(self) -> list[Any]:
        """Return every consumed item, destination by destination."""
        return [item for destination in self.destinations for item in destination]

    @property
    def destination(self) -> list[Any]:
        """The destination of a single-consumer run.

        Raises:
            ValueError: If the run had more than one consumer.
        """
        if len(self.destinations) != 1:
            msg = f"Run had {len(self.destinations)} consumers; use destinations or collected()"
            raise ValueError(msg)
        return self.destinations[0]

    @property
    def queue_stats(self) -> QueueStatistics:
        return self.queue.stats

    @property
    def succeeded(self) -> bool:
        """True if no actor was interrupted or failed and the queue drained."""
        return not self.errors and self.queue.is_empty()

    def report(self) -> str:
        return format_statistics(
            queue_stats=self.queue.stats,
            producer_stats=self.producer_stats,
            consumer_stats=self.consumer_stats,
            total_duration=self.duration,
            capacity=self.queue.capacity,
        )

    def to_dict(self) -> dict[str, Any]:
        return StatisticsAggregator(
            queue_stats=self.queue.stats,
            producer_stats=self.producer_stats,
            consumer_stats=self.consumer_stats,
            total_duration=self.duration,
        ).aggregate()


def _as_factory(delay: DelayStrategy | None, default: DelayFactory) -> DelayFactory:
    if delay is None:
        return default
    return lambda: delay


def settings_delay_factories(settings: PipelineSettings) -> tuple[DelayFactory, DelayFactory]:
    """Build producer and consumer delay factories from pipeline settings.

    Each actor gets its own strategy (and its own random generator) when
    latency simulation is enabled, otherwise :func:`no_delay`.
    """
    if not settings.simulate_latency:
        return (lambda: no_delay), (lambda: no_delay)

    def producer_factory() -> DelayStrategy:
        return uniform_delay(settings.producer_delay_min, settings.producer_delay_max)

    def consumer_factory() -> DelayStrategy:
        return uniform_delay(settings.consumer_delay_min, settings.consumer_delay_max)

    return producer_factory, consumer_factory


class PipelineFactory:
    """Factory for creating and wiring pipeline components.

    All validation happens here, before any thread exists.
    """

    @staticmethod
    def create_components(  # pylint: disable=too-many-arguments
        sources: Sequence[Iterable[Any]],
        num_consumers: int,
        capacity: int,
        wait_timeout: float,
        producer_delay: DelayFactory,
        consumer_delay: DelayFactory,
    ) -> PipelineComponents:
        """Create the queue, coordinator, signals and actors of one run.

        Args:
            sources: One finite source per producer.
            num_consumers: Number of consumer threads, >= 1.
            capacity: Shared queue capacity, >= 1.
            wait_timeout: Coordinator wait bound in seconds, > 0.
            producer_delay: Called once per producer to get its delay strategy.
            consumer_delay: Called once per consumer to get its delay strategy.

        Returns:
            The wired, not yet started, components.

        Raises:
            ConfigurationError: If any argument is invalid.
        """
        if sources is None:
            raise create_missing_reference_error("sources", operation="create_pipeline_components")
        if isinstance(sources, (str, bytes)) or not isinstance(sources, Sequence):
            raise create_config_error(
                "sources must be a sequence with one source per producer",
                field="sources",
                operation="create_pipeline_components",
            )
        if isinstance(num_consumers, bool) or not isinstance(num_consumers, int) or num_consumers < 1:
            raise create_config_error(
                f"num_consumers must be a positive integer, got {num_consumers!r}",
                field="num_consumers",
                operation="create_pipeline_components",
            )

        queue: BoundedQueue = BoundedQueue(capacity)
        coordinator = SharedCoordinator(wait_timeout)

        signals = [CompletionSignal() for _ in sources]
        completion = AggregateCompletionSignal(signals)

        producers = [
            Producer(
                source,
                queue,
                coordinator,
                signal,
                delay=producer_delay(),
                producer_id=f"{ActorNames.PRODUCER}-{index}",
            )
            for index, (source, signal) in enumerate(zip(sources, signals), start=1)
        ]

        destinations: list[list[Any]] = [[] for _ in range(num_consumers)]
        consumers = [
            Consumer(
                queue,
                coordinator,
                destination,
                completion,
                delay=consumer_delay(),
                consumer_id=f"{ActorNames.CONSUMER}-{index}",
            )
            for index, destination in enumerate(destinations, start=1)
        ]

        log_operation_success(
            logger=logger,
            operation="create_pipeline_components",
            duration_ms=0.0,
            context={
                "producers": len(producers),
                "consumers": len(consumers),
                "capacity": capacity,
            },
        )

        return PipelineComponents(
            queue=queue,
            coordinator=coordinator,
            signals=signals,
            completion=completion,
            producers=producers,
            consumers=consumers,
            destinations=destinations,
        )


def run_pipeline(  # pylint: disable=too-many-arguments
    sources: Sequence[Iterable[Any]],
    *,
    num_consumers: int | None = None,
    capacity: int | None = None,
    wait_timeout: float | None = None,
    producer_delay: DelayStrategy | None = None,
    consumer_delay: DelayStrategy | None = None,
    settings: Settings | None = None,
) -> PipelineResult:
    """Run one producer per source and ``num_consumers`` consumers.

    Producers and consumers share one bounded queue and one coordinator.
    Consumers stop once every producer has signalled completion and the
    queue is empty. Producers are joined before consumers.

    Args:
        sources: One finite source per producer (N:1, 1:M and N:M topologies).
        num_consumers: Consumer threads; defaults to the configured value.
        capacity: Queue capacity; defaults to the configured value.
        wait_timeout: Coordinator wait bound; defaults to the configured value.
        producer_delay: Delay strategy shared by all producers; defaults to
            the configured latency simulation.
        consumer_delay: Delay strategy shared by all consumers; likewise.
        settings: Settings to read defaults from; defaults to get_config().

    Returns:
        PipelineResult with every destination and the run statistics.

    Raises:
        ConfigurationError: If the configuration is invalid (before any thread starts).
        PipelineExecutionError: If the run fails for another reason.
    """
    pipeline_settings = (settings or get_config()).pipeline
    default_producer_delay, default_consumer_delay = settings_delay_factories(pipeline_settings)

    num_consumers = pipeline_settings.num_consumers if num_consumers is None else num_consumers
    capacity = pipeline_settings.queue_capacity if capacity is None else capacity
    wait_timeout = pipeline_settings.wait_timeout if wait_timeout is None else wait_timeout

    components = PipelineFactory.create_components(
        sources=sources,
        num_consumers=num_consumers,
        capacity=capacity,
        wait_timeout=wait_timeout,
        producer_delay=_as_factory(producer_delay, default_producer_delay),
        consumer_delay=_as_factory(consumer_delay, default_consumer_delay),
    )
    producers, consumers = components.producers, components.consumers
    context = ErrorContext(
        operation="run_pipeline",
        additional_data={
            "producers": len(producers),
            "consumers": len(consumers),
            "capacity": components.queue.capacity,
        },
    )

    log_operation_start(logger, "run_pipeline", context=context.safe_dict())
    logger.info(
        "Starting pipeline: producers=%s, consumers=%s, capacity=%s",
        len(producers),
        len(consumers),
        components.queue.capacity,
    )

    start_time = time.monotonic()
    try:
        start_pipeline_components(producers, consumers)
        wait_for_producer_completion(producers)
        wait_for_consumer_completion(consumers)

    except KeyboardInterrupt:
        interrupt_pipeline(producers, consumers)
        raise

    except Exception as e:
        interrupt_pipeline(producers, consumers)
        execution_error = PipelineExecutionError(
            ErrorCode.PIPELINE_EXECUTION_ERROR,
            f"Pipeline execution failed: {e}",
            context,
            original_error=e,
        )
        log_operation_error(logger=logger, error=execution_error)
        raise execution_error from e

    finally:
        force_shutdown_if_needed(producers, consumers)

    total_duration = time.monotonic() - start_time
    result = PipelineResult(
        destinations=components.destinations,
        queue=components.queue,
        producer_stats={p.actor_id: p.stats for p in producers},
        consumer_stats={c.actor_id: c.stats for c in consumers},
        duration=total_duration,
        errors=[actor.error for actor in [*producers, *consumers] if actor.error is not None],
    )

    logger.info("Pipeline completed in %.2fs", total_duration)
    logger.debug(result.report())
    log_operation_success(
        logger=logger,
        operation="run_pipeline",
        duration_ms=total_duration * 1000,
        result_info={"items_consumed": len(result.collected())},
        context=context,
    )

    return result


def transfer(
    source: Iterable[Any],
    capacity: int | None = None,
    **kwargs: Any,
) -> list[Any]:
    """Move ``source`` through one producer and one consumer.

    Args:
        source: Finite source of items.
        capacity: Queue capacity; defaults to the configured value.
        **kwargs: Passed through to :func:`run_pipeline`.

    Returns:
        The consumer's destination list, in source order.
    """
    result = run_pipeline([source], num_consumers=1, capacity=capacity, **kwargs)
    return result.destination


__all__ = [
    "PipelineComponents",
    "PipelineFactory",
    "PipelineResult",
    "run_pipeline",
    "settings_delay_factories",
    "transfer",
]
