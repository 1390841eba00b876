"""Pipeline components package.

This package contains the actor threads of the pipeline:
- Producer: Moves a finite source into the shared queue
- Consumer: Drains the shared queue into a destination list
"""

from __future__ import annotations

from boundedflow.core.pipeline.components.actor import PipelineActor
from boundedflow.core.pipeline.components.consumer import Consumer, ConsumerState
from boundedflow.core.pipeline.components.producer import Producer, ProducerState

__all__ = [
    "Consumer",
    "ConsumerState",
    "PipelineActor",
    "Producer",
    "ProducerState",
]
