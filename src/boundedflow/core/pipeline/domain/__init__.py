"""Pipeline domain logic package.

This package contains orchestration logic for the pipeline:
- lifecycle: Actor lifecycle management functions
- orchestrator: Pipeline component factory and orchestration
- statistics: Statistics formatting and aggregation
"""

from __future__ import annotations

from boundedflow.core.pipeline.domain.lifecycle import (
    force_shutdown_if_needed,
    interrupt_pipeline,
    start_pipeline_components,
    wait_for_consumer_completion,
    wait_for_producer_completion,
)
from boundedflow.core.pipeline.domain.orchestrator import (
    PipelineComponents,
    PipelineFactory,
    PipelineResult,
    run_pipeline,
    settings_delay_factories,
    transfer,
)
from boundedflow.core.pipeline.domain.statistics import (
    StatisticsAggregator,
    format_statistics,
)

__all__ = [
    "PipelineComponents",
    "PipelineFactory",
    "PipelineResult",
    "StatisticsAggregator",
    "force_shutdown_if_needed",
    "format_statistics",
    "interrupt_pipeline",
    "run_pipeline",
    "settings_delay_factories",
    "start_pipeline_components",
    "transfer",
    "wait_for_consumer_completion",
    "wait_for_producer_completion",
]
