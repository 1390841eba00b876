"""
Pytest configuration and shared fixtures for boundedflow tests.

This module provides common fixtures and configuration that can be used
across all test modules in the project.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Generator

import pytest

from boundedflow.config import PipelineSettings, Settings, reset_config
from boundedflow.core.pipeline.utils import (
    AggregateCompletionSignal,
    BoundedQueue,
    CompletionSignal,
    SharedCoordinator,
)
from tests.core.pipeline.concurrency_helpers import FAST_WAIT_TIMEOUT

@pytest.fixture(autouse=True)
def clean_config(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Isolate every test from cached settings and BOUNDEDFLOW_ variables."""
    for name in list(os.environ):
        if name.startswith("BOUNDEDFLOW_"):
            monkeypatch.delenv(name)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def fast_settings() -> Settings:
    """Settings with no simulated latency and a short coordinator wait."""
    return Settings(
        pipeline=PipelineSettings(
            queue_capacity=5,
            wait_timeout=FAST_WAIT_TIMEOUT,
            num_consumers=1,
            simulate_latency=False,
        )
    )


@pytest.fixture
def coordinator() -> SharedCoordinator:
    return SharedCoordinator(wait_timeout=FAST_WAIT_TIMEOUT)


@pytest.fixture
def queue() -> BoundedQueue:
    return BoundedQueue(capacity=5)


@pytest.fixture
def signal() -> CompletionSignal:
    return CompletionSignal()


@pytest.fixture
def aggregate(signal: CompletionSignal) -> AggregateCompletionSignal:
    return AggregateCompletionSignal([signal])


@pytest.fixture
def labeled_items() -> list[str]:
    """Ten labeled items, Item-1 .. Item-10."""
    return [f"Item-{i}" for i in range(1, 11)]


@pytest.fixture
def thread_baseline() -> set[threading.Thread]:
    """Threads alive before the test body runs."""
    return set(threading.enumerate())


@pytest.fixture(autouse=True)
def reset_package_logger() -> Generator[None, None, None]:
    """Undo setup_structured_logger() so caplog keeps seeing records."""
    yield
    logger = logging.getLogger("boundedflow")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
