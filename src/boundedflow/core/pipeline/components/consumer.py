"""Consumer actor for the boundedflow pipeline.

This module provides the Consumer class (a threading.Thread subclass) that
drains the shared BoundedQueue into a destination list it owns.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Any

from boundedflow.core.pipeline.components.actor import PipelineActor
from boundedflow.core.pipeline.utils import (
    BoundedQueue,
    CompletionGate,
    ConsumerStatistics,
    DelayStrategy,
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


class ConsumerState(str, Enum):
    """Consumer state machine."""

    CREATED = "created"
    WAITING = "waiting"
    CONSUMING = "consuming"
    DONE = "done"
    INTERRUPTED = "interrupted"
    FAILED = "failed"


class Consumer(PipelineActor):
    """Thread that moves items from the shared queue into its destination.

    The consumer exits only when, within a single hold of the coordinator,
    its completion gate reports production finished and the queue is empty.
    There is no give-up timeout: if production never completes, the
    consumer keeps waiting.

    Args:
        queue: Shared BoundedQueue.
        coordinator: SharedCoordinator guarding the queue and signals.
        destination: List the consumer appends to.
        completion: CompletionSignal or AggregateCompletionSignal to read.
        delay: Delay strategy applied after each consumed item.
        consumer_id: Optional identifier, also the thread name.
        destination_lock: Lock to hold while appending when several
            consumers share one destination list.
        stats: Optional ConsumerStatistics to record into.

    Raises:
        ConfigurationError: If a reference is missing or destination
            cannot be appended to.
    """

    State = ConsumerState

    def __init__(  # pylint: disable=too-many-arguments
        self,
        queue: BoundedQueue,
        coordinator: SharedCoordinator,
        destination: list[Any],
        completion: CompletionGate,
        *,
        delay: DelayStrategy = no_delay,
        consumer_id: str | None = None,
        destination_lock: threading.Lock | None = None,
        stats: ConsumerStatistics | None = None,
    ) -> None:
        if destination is None:
            raise create_missing_reference_error("destination", operation="create_consumer")
        if not callable(getattr(destination, "append", None)):
            raise create_config_error(
                f"Consumer destination must support append, got {type(destination).__name__}",
                field="destination",
                operation="create_consumer",
            )
        if completion is not None and not callable(getattr(completion, "is_set", None)):
            raise create_config_error(
                f"Consumer completion must provide is_set(), got {type(completion).__name__}",
                field="completion",
                operation="create_consumer",
            )

        super().__init__(
            queue=queue,
            coordinator=coordinator,
            completion=completion,
            delay=delay,
            actor_id=consumer_id or f"{ActorNames.CONSUMER}-{id(self):x}",
            failure_code=ErrorCode.CONSUMER_ERROR,
        )
        self.destination = destination
        self.stats = stats or ConsumerStatistics()
        self._destination_lock = destination_lock

    def _execute(self) -> None:
        while True:
            with self.coordinator:
                # Both halves of the exit predicate are read under one lock hold
                if self.completion.is_set() and self.queue.is_empty():
                    self._state = ConsumerState.DONE
                    break

                self._raise_if_interrupted("consume")
                taken, item = self.queue.try_dequeue()

                if not taken:
                    self._state = ConsumerState.WAITING
                    self.stats.increment_starvation_waits()
                    logger.debug("%s queue is empty, waiting for items...", self.actor_id)
                    self.coordinator.wait()
                    continue

                self._state = ConsumerState.CONSUMING
                # wake producers parked on a full queue
                self.coordinator.broadcast()

            self._deliver(item)
            self._pause(items_consumed=self.stats.items_consumed)

        logger.info(
            "%s no more items to consume: %d items",
            self.actor_id,
            self.stats.items_consumed,
        )

    def _deliver(self, item: Any) -> None:
        if self._destination_lock is not None:
            with self._destination_lock:
                self.destination.append(item)
        else:
            self.destination.append(item)

        self.stats.increment_items_consumed()
        logger.debug(
            "%s consumed %r. Total items: %d",
            self.actor_id,
            item,
            self.stats.items_consumed,
        )

    @property
    def items_consumed(self) -> int:
        return self.stats.items_consumed
