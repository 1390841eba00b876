"""Common thread behaviour of producers and consumers.

PipelineActor is a threading.Thread subclass that carries the pieces both
actors share: an interrupt request, an interruptible latency pause, and
recording of the error that ended the thread.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Any

from boundedflow.core.pipeline.utils import (
    BoundedQueue,
    CompletionGate,
    DelayStrategy,
    SharedCoordinator,
)
from boundedflow.core.pipeline.utils.latency import validate_delay_strategy
from boundedflow.shared.errors import (
    BoundedFlowError,
    ErrorCode,
    ErrorContext,
    InfrastructureError,
    InterruptedExecution,
    create_interrupted_error,
    create_missing_reference_error,
)
from boundedflow.shared.logging import log_operation_error

logger = logging.getLogger(__name__)


class PipelineActor(threading.Thread):
    """Base thread for producers and consumers.

    Subclasses set :attr:`State` to an Enum that has ``CREATED``,
    ``INTERRUPTED`` and ``FAILED`` members and implement :meth:`_execute`.
    Interruption is honoured at wait points only: the coordinator wait and
    the latency pause. An interrupted actor records an
    :class:`InterruptedExecution` in :attr:`error`, logs it and returns from
    ``run()`` normally.

    Args:
        queue: Shared BoundedQueue.
        coordinator: SharedCoordinator guarding the queue and signals.
        completion: Completion flag or gate this actor writes or reads.
        delay: Delay strategy applied after every item, outside the lock.
        actor_id: Identifier, also used as the thread name.
        failure_code: ErrorCode recorded for unexpected failures.
    """

    State: Any

    def __init__(  # pylint: disable=too-many-arguments
        self,
        queue: BoundedQueue,
        coordinator: SharedCoordinator,
        completion: CompletionGate,
        delay: DelayStrategy,
        actor_id: str,
        failure_code: ErrorCode,
    ) -> None:
        operation = f"create_{type(self).__name__.lower()}"
        for name, reference in (("queue", queue), ("coordinator", coordinator), ("completion", completion)):
            if reference is None:
                raise create_missing_reference_error(name, operation=operation)

        super().__init__(name=actor_id, daemon=True)
        self.queue = queue
        self.coordinator = coordinator
        self.completion = completion
        self.delay = validate_delay_strategy(delay, operation)
        self.actor_id = actor_id
        self.error: BoundedFlowError | None = None
        self._state = self.State.CREATED
        self._failure_code = failure_code
        self._interrupt_event = threading.Event()

    def run(self) -> None:
        """Thread body: run the actor loop and record how it ended."""
        logger.info("%s starting", self.actor_id)
        try:
            self._execute()
        except InterruptedExecution as e:
            self._state = self.State.INTERRUPTED
            self.error = e
            log_operation_error(logger, e)
        # pylint: disable-next=broad-exception-caught
        except Exception as e:  # noqa: BLE001
            self._state = self.State.FAILED
            self.error = InfrastructureError(
                self._failure_code,
                f"{self.actor_id} failed unexpectedly: {e}",
                ErrorContext(operation="run", actor_id=self.actor_id),
                original_error=e,
            )
            log_operation_error(logger, self.error)
        else:
            logger.info("%s finished", self.actor_id)

    def interrupt(self) -> None:
        """Ask the actor to stop at its next wait point.

        Must not be called while holding the coordinator.
        """
        self._interrupt_event.set()
        # wake the actor if it is parked on the coordinator
        self.coordinator.notify_all()

    @property
    def state(self) -> Enum:
        return self._state

    @property
    def interrupt_requested(self) -> bool:
        return self._interrupt_event.is_set()

    @property
    def interrupted(self) -> bool:
        """True if the actor exited because it was interrupted."""
        return isinstance(self.error, InterruptedExecution)

    def _execute(self) -> None:
        raise NotImplementedError

    def _raise_if_interrupted(self, operation: str, **details: str | int) -> None:
        if self._interrupt_event.is_set():
            raise create_interrupted_error(self.actor_id, operation, **details)

    def _pause(self, **details: str | int) -> None:
        """Sleep the simulated latency outside the coordinator."""
        seconds = self.delay()
        if seconds > 0 and self._interrupt_event.wait(seconds):
            raise create_interrupted_error(self.actor_id, "latency_pause", **details)
