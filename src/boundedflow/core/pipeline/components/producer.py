"""Producer actor for the boundedflow pipeline.

This module provides the Producer class (a threading.Thread subclass) that
moves items from a private finite source into the shared BoundedQueue.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum
from typing import Any

from boundedflow.core.pipeline.components.actor import PipelineActor
from boundedflow.core.pipeline.utils import (
    BoundedQueue,
    CompletionSignal,
    DelayStrategy,
    ProducerStatistics,
    SharedCoordinator,
    no_delay,
)
from boundedflow.shared.constants import ActorNames
from boundedflow.shared.errors import (
    ErrorCode,
    create_config_error,
    create_missing_reference_error,
)

logger = logging.getLogger(__name__)


class ProducerState(str, Enum):
    """Producer state machine."""

    CREATED = "created"
    PRODUCING = "producing"
    BACKPRESSURE_WAIT = "backpressure_wait"
    DONE = "done"
    INTERRUPTED = "interrupted"
    FAILED = "failed"


class Producer(PipelineActor):
    """Thread that enqueues every item of its source, in order.

    Each attempt happens under the coordinator. A full queue is not an
    error: the producer keeps its cursor on the same item, waits on the
    coordinator for at most ``wait_timeout`` seconds and retries, so no item
    is ever skipped. Once the source is exhausted the producer sets its own
    completion signal under the coordinator and broadcasts.

    Args:
        source: Finite sequence of items; copied into a tuple.
        queue: Shared BoundedQueue.
        coordinator: SharedCoordinator guarding the queue and signals.
        completion: The CompletionSignal this producer owns.
        delay: Delay strategy applied after each enqueued item.
        producer_id: Optional identifier, also the thread name.
        stats: Optional ProducerStatistics to record into.

    Raises:
        ConfigurationError: If a reference is missing or source is not iterable.
    """

    State = ProducerState

    def __init__(  # pylint: disable=too-many-arguments
        self,
        source: Iterable[Any],
        queue: BoundedQueue,
        coordinator: SharedCoordinator,
        completion: CompletionSignal,
        *,
        delay: DelayStrategy = no_delay,
        producer_id: str | None = None,
        stats: ProducerStatistics | None = None,
    ) -> None:
        if source is None:
            raise create_missing_reference_error("source", operation="create_producer")
        try:
            items = tuple(source)
        except TypeError as e:
            raise create_config_error(
                f"Producer source must be iterable, got {type(source).__name__}",
                code=ErrorCode.CONFIGURATION_ERROR,
                field="source",
                operation="create_producer",
                original_error=e,
            ) from e
        if completion is not None and not callable(getattr(completion, "set", None)):
            raise create_config_error(
                f"Producer completion must be a settable signal, got {type(completion).__name__}",
                field="completion",
                operation="create_producer",
            )

        super().__init__(
            queue=queue,
            coordinator=coordinator,
            completion=completion,
            delay=delay,
            actor_id=producer_id or f"{ActorNames.PRODUCER}-{id(self):x}",
            failure_code=ErrorCode.PRODUCER_ERROR,
        )
        self.source = items
        self.stats = stats or ProducerStatistics()
        self._cursor = 0

    def _execute(self) -> None:
        while self._cursor < len(self.source):
            with self.coordinator:
                self._raise_if_interrupted("produce", cursor=self._cursor)
                item = self.source[self._cursor]

                if not self.queue.try_enqueue(item):
                    # Cursor stays put: the same item is retried after the wait
                    self._state = ProducerState.BACKPRESSURE_WAIT
                    self.stats.increment_backpressure_waits()
                    logger.debug("%s queue is full, waiting...", self.actor_id)
                    self.coordinator.wait()
                    continue

                self._cursor += 1
                self._state = ProducerState.PRODUCING
                self.stats.increment_items_produced()
                logger.debug(
                    "%s added %r to queue. Queue size: %d",
                    self.actor_id,
                    item,
                    self.queue.size(),
                )
                self.coordinator.broadcast()

            if self._cursor < len(self.source):
                self._pause(cursor=self._cursor)

        with self.coordinator:
            self.completion.set()
            self._state = ProducerState.DONE
            self.coordinator.broadcast()

        logger.info(
            "%s production complete: %d items",
            self.actor_id,
            self.stats.items_produced,
        )

    @property
    def cursor(self) -> int:
        """Index of the next source item to enqueue."""
        return self._cursor

    @property
    def items_produced(self) -> int:
        return self.stats.items_produced
