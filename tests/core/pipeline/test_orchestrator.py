"""Tests for pipeline orchestration: run_pipeline, transfer and PipelineFactory."""

from __future__ import annotations

import threading

import pytest

from boundedflow.config import PipelineSettings, Settings
from boundedflow.core.pipeline import PipelineResult, run_pipeline, transfer
from boundedflow.core.pipeline.domain.lifecycle import (
    start_pipeline_components,
    wait_for_consumer_completion,
    wait_for_producer_completion,
)
from boundedflow.core.pipeline.domain.orchestrator import (
    PipelineFactory,
    settings_delay_factories,
)
from boundedflow.core.pipeline.utils import no_delay
from boundedflow.shared.errors import (
    ConfigurationError,
    ErrorCode,
    PipelineExecutionError,
)
from tests.core.pipeline.concurrency_helpers import (
    FAST_WAIT_TIMEOUT,
    QueueSizeObserver,
    is_subsequence,
    make_items,
    multiset,
)


def _run(sources, *, num_consumers=1, capacity=5, **kwargs) -> PipelineResult:
    return run_pipeline(
        sources,
        num_consumers=num_consumers,
        capacity=capacity,
        wait_timeout=FAST_WAIT_TIMEOUT,
        producer_delay=no_delay,
        consumer_delay=no_delay,
        **kwargs,
    )


class TestScenarios:
    """Reference topologies."""

    def test_single_producer_single_consumer(self, labeled_items: list[str]) -> None:
        result = _run([labeled_items], capacity=5)

        assert result.destination == labeled_items
        assert result.queue.is_empty()
        assert result.succeeded

    def test_empty_source(self) -> None:
        result = _run([[]], capacity=3)

        assert result.destination == []
        assert result.queue.is_empty()
        assert result.queue_stats.items_put == 0

    def test_capacity_one_never_drops_the_pending_item(self) -> None:
        items = make_items(20)

        result = _run([items], capacity=1)

        assert result.destination == items
        assert result.queue_stats.max_size == 1

    def test_three_producers_one_consumer(self) -> None:
        sources = [make_items(20, prefix=f"P{p}-Item") for p in (1, 2, 3)]

        result = _run(sources, capacity=10)

        destination = result.destination
        assert len(destination) == 60
        assert len(set(destination)) == 60
        assert multiset(destination) == multiset(item for source in sources for item in source)
        for source in sources:
            assert is_subsequence(source, destination)
        assert result.queue.is_empty()

    def test_one_producer_three_consumers(self) -> None:
        items = make_items(60)

        result = _run([items], num_consumers=3, capacity=10)

        collected = result.collected()
        assert len(collected) == 60
        assert multiset(collected) == multiset(items)
        for destination in result.destinations:
            # each consumer sees its share in production order
            assert is_subsequence(destination, items)
        assert result.queue.is_empty()

    def test_two_producers_two_consumers(self) -> None:
        sources = [make_items(30, prefix=f"P{p}-Item") for p in (1, 2)]

        result = _run(sources, num_consumers=2, capacity=5)

        assert multiset(result.collected()) == multiset(sources[0] + sources[1])
        assert sum(stats.items_consumed for stats in result.consumer_stats.values()) == 60


class TestItemEdgeCases:
    def test_single_item(self) -> None:
        assert transfer(["only"], wait_timeout=FAST_WAIT_TIMEOUT) == ["only"]

    def test_special_characters_and_empty_strings(self) -> None:
        items = ["", "Item with spaces", "Item\nwith\nnewlines", "항목-유니코드", "Item!@#$%^&*()", ""]

        assert transfer(items, capacity=2, wait_timeout=FAST_WAIT_TIMEOUT) == items

    def test_duplicates_and_none_are_preserved(self) -> None:
        items = ["a", None, "a", None]

        assert transfer(items, capacity=1, wait_timeout=FAST_WAIT_TIMEOUT) == items

    def test_generator_source(self) -> None:
        result = _run([(f"G-{i}" for i in range(4))])

        assert result.destination == ["G-0", "G-1", "G-2", "G-3"]


class TestRunBehaviour:
    def test_consecutive_runs_are_independent(self, labeled_items: list[str]) -> None:
        results = [_run([labeled_items]) for _ in range(5)]

        assert all(result.destination == labeled_items for result in results)
        assert len({id(result.queue) for result in results}) == 5

    def test_capacity_bound_is_never_exceeded(self) -> None:
        sources = [make_items(50, prefix=f"P{p}-Item") for p in (1, 2)]
        components = PipelineFactory.create_components(
            sources=sources,
            num_consumers=2,
            capacity=3,
            wait_timeout=FAST_WAIT_TIMEOUT,
            producer_delay=lambda: no_delay,
            consumer_delay=lambda: no_delay,
        )
        observer = QueueSizeObserver(components.queue, components.coordinator)

        observer.start()
        start_pipeline_components(components.producers, components.consumers)
        produced = wait_for_producer_completion(components.producers, timeout=10)
        consumed = wait_for_consumer_completion(components.consumers, timeout=10)
        observer.stop()

        assert produced == consumed == 100
        assert observer.samples
        assert observer.max_observed <= 3
        assert components.queue.stats.max_size <= 3
        assert components.completion.is_set()

    def test_settings_supply_defaults(self, fast_settings: Settings, labeled_items: list[str]) -> None:
        settings = fast_settings.model_copy(
            update={"pipeline": fast_settings.pipeline.model_copy(update={"queue_capacity": 2, "num_consumers": 2})}
        )

        result = run_pipeline([labeled_items], settings=settings)

        assert result.queue.capacity == 2
        assert len(result.destinations) == 2
        assert multiset(result.collected()) == multiset(labeled_items)

    def test_destination_requires_single_consumer(self, labeled_items: list[str]) -> None:
        result = _run([labeled_items], num_consumers=2)

        with pytest.raises(ValueError):
            _ = result.destination

    def test_result_export(self, labeled_items: list[str]) -> None:
        result = _run([labeled_items])

        exported = result.to_dict()
        assert exported["totals"] == {"items_produced": 10, "items_consumed": 10}
        assert set(exported["producers"]) == {"Producer-1"}
        assert set(exported["consumers"]) == {"Consumer-1"}
        assert "PIPELINE STATISTICS" in result.report()


class TestConfigurationErrors:
    """Invalid arguments fail before any thread starts."""

    @pytest.mark.parametrize(
        ("kwargs", "code"),
        [
            ({"capacity": 0}, ErrorCode.INVALID_CAPACITY),
            ({"capacity": -3}, ErrorCode.INVALID_CAPACITY),
            ({"wait_timeout": 0}, ErrorCode.INVALID_TIMEOUT),
            ({"num_consumers": 0}, ErrorCode.CONFIGURATION_ERROR),
            ({"producer_delay": "slow"}, ErrorCode.INVALID_DELAY_STRATEGY),
        ],
    )
    def test_invalid_arguments(self, kwargs: dict, code: ErrorCode, thread_baseline) -> None:
        arguments = {"num_consumers": 1, "capacity": 5, "wait_timeout": FAST_WAIT_TIMEOUT, **kwargs}

        with pytest.raises(ConfigurationError) as exc_info:
            run_pipeline([["a"]], **arguments)

        assert exc_info.value.code == code
        assert set(threading.enumerate()) <= thread_baseline

    @pytest.mark.parametrize("sources", [None, "abc", 42])
    def test_invalid_sources(self, sources: object) -> None:
        with pytest.raises(ConfigurationError):
            _run(sources)  # type: ignore[arg-type]

    def test_zero_producers_finishes_immediately(self) -> None:
        result = _run([], num_consumers=2)

        assert result.collected() == []
        assert result.producer_stats == {}

    def test_unexpected_failure_is_wrapped(self, mocker, labeled_items: list[str]) -> None:
        mocker.patch(
            "boundedflow.core.pipeline.domain.orchestrator.wait_for_producer_completion",
            side_effect=OSError("join failed"),
        )

        with pytest.raises(PipelineExecutionError) as exc_info:
            _run([labeled_items])

        assert exc_info.value.code == ErrorCode.PIPELINE_EXECUTION_ERROR
        assert isinstance(exc_info.value.original_error, OSError)


class TestSettingsDelayFactories:
    def test_latency_disabled(self) -> None:
        producer_factory, consumer_factory = settings_delay_factories(PipelineSettings(simulate_latency=False))

        assert producer_factory() is no_delay
        assert consumer_factory() is no_delay

    def test_latency_enabled_gives_each_actor_its_own_strategy(self) -> None:
        settings = PipelineSettings(
            simulate_latency=True,
            producer_delay_min=0.1,
            producer_delay_max=0.2,
            consumer_delay_min=0.3,
            consumer_delay_max=0.4,
        )
        producer_factory, consumer_factory = settings_delay_factories(settings)

        first, second = producer_factory(), producer_factory()
        assert first is not second
        assert 0.1 <= first() <= 0.2
        assert 0.3 <= consumer_factory()() <= 0.4
