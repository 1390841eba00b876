"""Pipeline component lifecycle management.

This module provides functions for managing the lifecycle of pipeline actors:
- Starting producers and consumers
- Waiting for completion
- Interrupting and forced shutdown procedures
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence

from boundedflow.core.pipeline.components import Consumer, PipelineActor, Producer
from boundedflow.shared.errors import ErrorCode, ErrorContext, InfrastructureError
from boundedflow.shared.logging import log_operation_error, log_operation_success

logger = logging.getLogger(__name__)


def start_pipeline_components(
    producers: Sequence[Producer],
    consumers: Sequence[Consumer],
) -> None:
    """Start every producer and consumer thread.

    Args:
        producers: Producer actors.
        consumers: Consumer actors.

    Raises:
        InfrastructureError: If a thread cannot be started.
    """
    context = ErrorContext(
        operation="start_pipeline_components",
        additional_data={"producers": len(producers), "consumers": len(consumers)},
    )

    try:
        logger.info("Starting %s producer(s)...", len(producers))
        for producer in producers:
            producer.start()

        logger.info("Starting %s consumer(s)...", len(consumers))
        for consumer in consumers:
            consumer.start()

        log_operation_success(
            logger=logger,
            operation="start_pipeline_components",
            duration_ms=0.0,
            context=context,
        )

    except RuntimeError as e:
        infrastructure_error = InfrastructureError(
            ErrorCode.PIPELINE_EXECUTION_ERROR,
            f"Failed to start pipeline components: {e}",
            context,
            original_error=e,
        )
        log_operation_error(logger=logger, error=infrastructure_error)
        raise infrastructure_error from e


def _join_all(actors: Sequence[PipelineActor], timeout: float | None) -> list[PipelineActor]:
    """Join actors, sharing one overall timeout; return those still alive."""
    deadline = None if timeout is None else time.monotonic() + timeout
    for actor in actors:
        remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
        actor.join(timeout=remaining)
    return [actor for actor in actors if actor.is_alive()]


def wait_for_producer_completion(
    producers: Sequence[Producer],
    timeout: float | None = None,
) -> int:
    """Join every producer.

    Consumers in a multi-producer topology read an aggregate signal that is
    set only once every producer has set its own, so joining here is what
    makes the run's end observable to the caller, not what releases consumers.

    Args:
        producers: Producer actors.
        timeout: Optional overall bound in seconds; None waits indefinitely.

    Returns:
        Total number of items produced.
    """
    logger.info("Waiting for producers to complete...")
    start = time.monotonic()
    still_alive = _join_all(producers, timeout)
    if still_alive:
        logger.warning(
            "%s producer(s) still running after %.2fs: %s",
            len(still_alive),
            time.monotonic() - start,
            ", ".join(p.actor_id for p in still_alive),
        )

    produced = sum(producer.items_produced for producer in producers)
    logger.info("Producers completed. Produced %s items.", produced)
    log_operation_success(
        logger=logger,
        operation="wait_for_producer_completion",
        duration_ms=(time.monotonic() - start) * 1000,
        result_info={"items_produced": produced},
    )
    return produced


def wait_for_consumer_completion(
    consumers: Sequence[Consumer],
    timeout: float | None = None,
) -> int:
    """Join every consumer.

    Args:
        consumers: Consumer actors.
        timeout: Optional overall bound in seconds; None waits indefinitely.

    Returns:
        Total number of items consumed.
    """
    logger.info("Waiting for consumers to complete...")
    start = time.monotonic()
    still_alive = _join_all(consumers, timeout)
    if still_alive:
        logger.warning(
            "%s consumer(s) still running after %.2fs: %s",
            len(still_alive),
            time.monotonic() - start,
            ", ".join(c.actor_id for c in still_alive),
        )

    consumed = sum(consumer.items_consumed for consumer in consumers)
    logger.info("Consumers completed. Consumed %s items.", consumed)
    log_operation_success(
        logger=logger,
        operation="wait_for_consumer_completion",
        duration_ms=(time.monotonic() - start) * 1000,
        result_info={"items_consumed": consumed},
    )
    return consumed


def interrupt_pipeline(
    producers: Sequence[Producer],
    consumers: Sequence[Consumer],
) -> None:
    """Ask every actor to stop at its next wait point."""
    logger.info("Interrupting pipeline actors...")
    for actor in [*producers, *consumers]:
        actor.interrupt()


def force_shutdown_if_needed(
    producers: Sequence[Producer],
    consumers: Sequence[Consumer],
    grace_period: float = 1.0,
) -> None:
    """Interrupt actors that are still alive and give them a moment to unwind.

    Args:
        producers: Producer actors.
        consumers: Consumer actors.
        grace_period: Seconds to wait for interrupted actors to exit.
    """
    alive = [actor for actor in [*producers, *consumers] if actor.is_alive()]
    if not alive:
        return

    for actor in alive:
        logger.warning("%s still alive, forcing stop...", actor.actor_id)
        actor.interrupt()

    still_alive = _join_all(alive, grace_period)
    if still_alive:
        shutdown_error = InfrastructureError(
            ErrorCode.PIPELINE_SHUTDOWN_ERROR,
            "Actors did not stop after interruption",
            ErrorContext(
                operation="force_shutdown_if_needed",
                additional_data={"actors": ", ".join(a.actor_id for a in still_alive)},
            ),
        )
        log_operation_error(logger=logger, error=shutdown_error)
