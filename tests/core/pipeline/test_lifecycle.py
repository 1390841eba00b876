"""Tests for pipeline lifecycle helpers."""

from __future__ import annotations

import pytest

from boundedflow.core.pipeline.components import Consumer, ConsumerState, Producer
from boundedflow.core.pipeline.domain.lifecycle import (
    force_shutdown_if_needed,
    interrupt_pipeline,
    start_pipeline_components,
    wait_for_consumer_completion,
    wait_for_producer_completion,
)
from boundedflow.core.pipeline.utils import (
    AggregateCompletionSignal,
    BoundedQueue,
    CompletionSignal,
    SharedCoordinator,
)
from boundedflow.shared.errors import ErrorCode, InfrastructureError
from tests.core.pipeline.concurrency_helpers import FAST_WAIT_TIMEOUT, make_items, wait_until


@pytest.fixture
def wiring() -> tuple[BoundedQueue, SharedCoordinator, CompletionSignal]:
    return BoundedQueue(2), SharedCoordinator(FAST_WAIT_TIMEOUT), CompletionSignal()


def test_start_and_wait(wiring) -> None:
    queue, coordinator, signal = wiring
    destination: list[str] = []
    producer = Producer(make_items(6), queue, coordinator, signal)
    consumer = Consumer(queue, coordinator, destination, AggregateCompletionSignal([signal]))

    start_pipeline_components([producer], [consumer])

    assert wait_for_producer_completion([producer]) == 6
    assert wait_for_consumer_completion([consumer]) == 6
    assert destination == make_items(6)


def test_start_twice_is_an_infrastructure_error(wiring) -> None:
    queue, coordinator, signal = wiring
    signal.set()
    consumer = Consumer(queue, coordinator, [], signal)
    start_pipeline_components([], [consumer])
    consumer.join(timeout=2)

    with pytest.raises(InfrastructureError) as exc_info:
        start_pipeline_components([], [consumer])

    assert exc_info.value.code == ErrorCode.PIPELINE_EXECUTION_ERROR
    assert isinstance(exc_info.value.original_error, RuntimeError)


def test_wait_with_timeout_reports_live_actors(wiring, caplog) -> None:
    queue, coordinator, signal = wiring
    consumer = Consumer(queue, coordinator, [], signal, consumer_id="Consumer-stuck")
    start_pipeline_components([], [consumer])

    with caplog.at_level("WARNING", logger="boundedflow"):
        consumed = wait_for_consumer_completion([consumer], timeout=0.1)

    assert consumed == 0
    assert consumer.is_alive()
    assert "Consumer-stuck" in caplog.text

    interrupt_pipeline([], [consumer])
    consumer.join(timeout=2)
    assert consumer.state == ConsumerState.INTERRUPTED


def test_force_shutdown_interrupts_live_actors(wiring) -> None:
    queue, coordinator, signal = wiring
    producer = Producer(make_items(5), queue, coordinator, signal)
    start_pipeline_components([producer], [])
    assert wait_until(lambda: queue.is_full())

    force_shutdown_if_needed([producer], [], grace_period=2.0)

    assert not producer.is_alive()
    assert producer.interrupted


def test_force_shutdown_is_a_no_op_when_all_finished(wiring, mocker) -> None:
    queue, coordinator, signal = wiring
    producer = Producer([], queue, coordinator, signal)
    start_pipeline_components([producer], [])
    producer.join(timeout=2)
    interrupt = mocker.spy(producer, "interrupt")

    force_shutdown_if_needed([producer], [])

    interrupt.assert_not_called()
