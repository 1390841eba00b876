"""Pipeline statistics formatting and aggregation.

This module provides utilities for formatting and aggregating pipeline statistics:
- format_statistics(): Format statistics into human-readable report
- StatisticsAggregator: Aggregate and export statistics as dict or JSON
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from boundedflow.core.pipeline.utils import (
    ConsumerStatistics,
    ProducerStatistics,
    QueueStatistics,
)


def format_statistics(
    queue_stats: QueueStatistics,
    producer_stats: Mapping[str, ProducerStatistics],
    consumer_stats: Mapping[str, ConsumerStatistics],
    total_duration: float,
    capacity: int | None = None,
) -> str:
    """Format pipeline statistics into a human-readable report.

    Args:
        queue_stats: QueueStatistics of the shared queue.
        producer_stats: ProducerStatistics keyed by producer id.
        consumer_stats: ConsumerStatistics keyed by consumer id.
        total_duration: Total pipeline execution time in seconds.
        capacity: Queue capacity, shown next to the peak size when given.

    Returns:
        A formatted multi-line string containing all statistics.
    """
    peak = f"{queue_stats.max_size:,}"
    if capacity is not None:
        peak = f"{peak} / {capacity:,}"

    lines = [
        "",
        "=" * 60,
        "                    PIPELINE STATISTICS",
        "=" * 60,
        "",
        "Timing:",
        f"  - Total pipeline time:  {total_duration:.2f}s",
        "",
        "Queue:",
        f"  - Items put:            {queue_stats.items_put:,}",
        f"  - Items got:            {queue_stats.items_got:,}",
        f"  - Rejected puts:        {queue_stats.rejected_puts:,}",
        f"  - Peak size:            {peak}",
        "",
        "Producers:",
    ]
    for producer_id, stats in producer_stats.items():
        lines.append(
            f"  - {producer_id}: {stats.items_produced:,} produced, "
            f"{stats.backpressure_waits:,} backpressure waits"
        )

    lines += ["", "Consumers:"]
    for consumer_id, stats in consumer_stats.items():
        lines.append(
            f"  - {consumer_id}: {stats.items_consumed:,} consumed, "
            f"{stats.starvation_waits:,} starvation waits"
        )

    lines += ["", "=" * 60, ""]

    return "\n".join(lines)


class StatisticsAggregator:
    """Aggregates and exports pipeline statistics in various formats."""

    def __init__(
        self,
        queue_stats: QueueStatistics,
        producer_stats: Mapping[str, ProducerStatistics],
        consumer_stats: Mapping[str, ConsumerStatistics],
        total_duration: float,
    ) -> None:
        self.queue_stats = queue_stats
        self.producer_stats = producer_stats
        self.consumer_stats = consumer_stats
        self.total_duration = total_duration

    def aggregate(self) -> dict[str, Any]:
        """Aggregate all statistics into a structured dictionary.

        Returns:
            Dictionary containing all pipeline statistics organized by category.
        """
        return {
            "timing": {"total_duration": self.total_duration},
            "queue": {
                "items_put": self.queue_stats.items_put,
                "items_got": self.queue_stats.items_got,
                "rejected_puts": self.queue_stats.rejected_puts,
                "max_size": self.queue_stats.max_size,
            },
            "producers": {
                producer_id: {
                    "items_produced": stats.items_produced,
                    "backpressure_waits": stats.backpressure_waits,
                }
                for producer_id, stats in self.producer_stats.items()
            },
            "consumers": {
                consumer_id: {
                    "items_consumed": stats.items_consumed,
                    "starvation_waits": stats.starvation_waits,
                }
                for consumer_id, stats in self.consumer_stats.items()
            },
            "totals": {
                "items_produced": sum(s.items_produced for s in self.producer_stats.values()),
                "items_consumed": sum(s.items_consumed for s in self.consumer_stats.values()),
            },
        }

    def to_json(self, indent: int = 2) -> str:
        """Export statistics as a JSON string."""
        return json.dumps(self.aggregate(), indent=indent)
