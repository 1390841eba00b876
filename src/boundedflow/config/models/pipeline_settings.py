"""Pipeline configuration model.

This module contains the configuration model for the shared queue, the
coordinator and the simulated processing latency of the actors.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from boundedflow.shared.constants import Latency, Pipeline


class PipelineSettings(BaseModel):
    """Pipeline configuration.

    This class manages queue capacity, the coordinator's retry granularity,
    the default number of consumers and the latency simulation ranges.
    """

    queue_capacity: int = Field(
        default=Pipeline.DEFAULT_QUEUE_CAPACITY,
        gt=0,
        description="Capacity of the shared bounded queue",
    )
    wait_timeout: float = Field(
        default=Pipeline.DEFAULT_WAIT_TIMEOUT,
        gt=0,
        description="Upper bound in seconds of one coordinator wait",
    )
    num_consumers: int = Field(
        default=Pipeline.DEFAULT_NUM_CONSUMERS,
        ge=1,
        description="Default number of consumer threads",
    )
    simulate_latency: bool = Field(
        default=False,
        description="Pause a random duration after every item",
    )
    producer_delay_min: float = Field(default=Latency.PRODUCER_MIN, ge=0)
    producer_delay_max: float = Field(default=Latency.PRODUCER_MAX, ge=0)
    consumer_delay_min: float = Field(default=Latency.CONSUMER_MIN, ge=0)
    consumer_delay_max: float = Field(default=Latency.CONSUMER_MAX, ge=0)

    @model_validator(mode="after")
    def _check_delay_ranges(self) -> PipelineSettings:
        if self.producer_delay_min > self.producer_delay_max:
            msg = "producer_delay_min must not exceed producer_delay_max"
            raise ValueError(msg)
        if self.consumer_delay_min > self.consumer_delay_max:
            msg = "consumer_delay_min must not exceed consumer_delay_max"
            raise ValueError(msg)
        return self


__all__ = ["PipelineSettings"]
