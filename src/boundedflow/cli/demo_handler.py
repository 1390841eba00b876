"""Demo command handler for the boundedflow CLI.

Runs labeled items through the pipeline and reports whether everything
the producers generated reached the consumers.
"""

from __future__ import annotations

import logging
import sys
from collections import Counter
from typing import Any

from rich.console import Console
from rich.table import Table

from boundedflow.cli.context import get_cli_context
from boundedflow.cli.json_formatter import format_json_output
from boundedflow.cli.models import DemoOptions
from boundedflow.config import Settings, get_config, load_settings
from boundedflow.core.pipeline import PipelineResult, run_pipeline
from boundedflow.shared.constants import CLIDefaults, ExitCodes
from boundedflow.shared.logging import setup_structured_logger

logger = logging.getLogger(__name__)


def build_sources(items: int, producers: int) -> list[list[str]]:
    """Build one labeled source per producer.

    A single producer gets ``Item-1 .. Item-N``; several producers get
    ``P1-Item-1 .. Pk-Item-N`` so every label stays unique.
    """
    if producers == 1:
        return [[CLIDefaults.ITEM_LABEL.format(index=i) for i in range(1, items + 1)]]
    return [
        [CLIDefaults.PRODUCER_ITEM_LABEL.format(producer=p, index=i) for i in range(1, items + 1)]
        for p in range(1, producers + 1)
    ]


def _resolve_settings(options: DemoOptions) -> Settings:
    settings = load_settings(options.config_path) if options.config_path else get_config()
    if options.latency is None:
        return settings
    pipeline = settings.pipeline.model_copy(update={"simulate_latency": options.latency})
    return settings.model_copy(update={"pipeline": pipeline})


def transfer_matches(sources: list[list[Any]], result: PipelineResult) -> bool:
    """True if the consumed items are exactly the produced items, as multisets."""
    expected = Counter(item for source in sources for item in source)
    return result.succeeded and Counter(result.collected()) == expected


def _result_data(sources: list[list[Any]], result: PipelineResult, *, matched: bool) -> dict[str, Any]:
    return {
        "matched": matched,
        "items_expected": sum(len(source) for source in sources),
        "items_consumed": len(result.collected()),
        "destinations": dict(zip(result.consumer_stats, result.destinations)),
        "statistics": result.to_dict(),
        "errors": [str(error) for error in result.errors],
    }


def _print_result(
    console: Console,
    sources: list[list[Any]],
    result: PipelineResult,
    *,
    matched: bool,
) -> None:
    table = Table(title="Pipeline transfer")
    table.add_column("Actor", style="cyan")
    table.add_column("Items", justify="right")
    table.add_column("Waits", justify="right")
    table.add_column("Items moved")

    for source, (producer_id, stats) in zip(sources, result.producer_stats.items()):
        table.add_row(
            producer_id,
            str(stats.items_produced),
            str(stats.backpressure_waits),
            ", ".join(map(str, source)),
        )
    for destination, (consumer_id, stats) in zip(result.destinations, result.consumer_stats.items()):
        table.add_row(
            consumer_id,
            str(stats.items_consumed),
            str(stats.starvation_waits),
            ", ".join(map(str, destination)),
        )
    console.print(table)

    queue_stats = result.queue_stats
    console.print(
        f"Queue capacity {result.queue.capacity}, peak size {queue_stats.max_size}, "
        f"{queue_stats.rejected_puts} rejected puts, {result.duration:.2f}s"
    )
    if matched:
        console.print("[green]✓ Every produced item was consumed exactly once[/green]")
    else:
        console.print("[red]✗ Consumed items do not match the produced items[/red]")
        for error in result.errors:
            console.print(f"[red]  {error}[/red]")


def handle_demo_command(options: DemoOptions, console: Console | None = None) -> int:
    """Run the demo and report the transfer.

    Args:
        options: Validated demo options
        console: Console for human-readable output

    Returns:
        ExitCodes.SUCCESS if the transfer matched, ExitCodes.TRANSFER_MISMATCH otherwise

    Raises:
        ConfigurationError: If the configuration or options are invalid
    """
    context = get_cli_context()
    settings = _resolve_settings(options)
    setup_structured_logger(
        level=context.get_effective_log_level(),
        log_file=settings.logging.file,
        use_rich_console=settings.logging.use_rich_console,
    )

    sources = build_sources(options.items, options.producers)
    logger.info(
        "Demo: %s producer(s) x %s item(s)",
        options.producers,
        options.items,
    )

    result = run_pipeline(
        sources,
        num_consumers=options.consumers,
        capacity=options.capacity,
        settings=settings,
    )
    matched = transfer_matches(sources, result)

    if context.json_output:
        output = format_json_output(
            success=matched,
            command="demo",
            data=_result_data(sources, result, matched=matched),
        )
        sys.stdout.buffer.write(output)
        sys.stdout.buffer.write(b"\n")
        sys.stdout.buffer.flush()
    else:
        _print_result(console or Console(), sources, result, matched=matched)

    return ExitCodes.SUCCESS if matched else ExitCodes.TRANSFER_MISMATCH
