"""Bounded-buffer producer/consumer pipeline.

This package contains the pipeline:
- run_pipeline / transfer: Orchestration of producers and consumers
- BoundedQueue: Fixed-capacity FIFO shared by all actors
- SharedCoordinator: Lock + broadcast condition serializing shared state
- Producer / Consumer: The actor threads

Recommended imports:
    from boundedflow.core.pipeline import run_pipeline, transfer
    from boundedflow.core.pipeline.domain import PipelineFactory
    from boundedflow.core.pipeline.components import Producer, Consumer
"""

from boundedflow.core.pipeline.domain.orchestrator import PipelineResult, run_pipeline, transfer

__all__ = ["PipelineResult", "run_pipeline", "transfer"]
