"""Tests for delay strategies."""

from __future__ import annotations

import pytest

from boundedflow.core.pipeline.utils import fixed_delay, no_delay, uniform_delay
from boundedflow.core.pipeline.utils.latency import validate_delay_strategy
from boundedflow.shared.errors import ConfigurationError, ErrorCode


def test_no_delay() -> None:
    assert no_delay() == 0.0


def test_fixed_delay() -> None:
    delay = fixed_delay(0.25)

    assert [delay() for _ in range(3)] == [0.25, 0.25, 0.25]


def test_fixed_delay_rejects_negative() -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        fixed_delay(-0.1)

    assert exc_info.value.code == ErrorCode.INVALID_DELAY_STRATEGY


def test_uniform_delay_stays_in_range() -> None:
    delay = uniform_delay(0.1, 0.5, seed=7)

    values = [delay() for _ in range(200)]

    assert all(0.1 <= value <= 0.5 for value in values)


def test_uniform_delay_is_reproducible_with_seed() -> None:
    first = uniform_delay(0.0, 1.0, seed=42)
    second = uniform_delay(0.0, 1.0, seed=42)

    assert [first() for _ in range(5)] == [second() for _ in range(5)]


@pytest.mark.parametrize(("low", "high"), [(-0.1, 0.5), (0.5, 0.1)])
def test_uniform_delay_rejects_bad_range(low: float, high: float) -> None:
    with pytest.raises(ConfigurationError):
        uniform_delay(low, high)


def test_validate_delay_strategy() -> None:
    assert validate_delay_strategy(no_delay, "test") is no_delay

    with pytest.raises(ConfigurationError) as exc_info:
        validate_delay_strategy(0.5, "create_producer")

    assert exc_info.value.context.operation == "create_producer"
