"""
boundedflow Typer CLI Application

Entry point of the ``boundedflow`` command. The main callback stores the
global options in the CLI context; commands read them from there.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError

from boundedflow.cli.context import CliContext, LogLevel, get_cli_context, set_cli_context
from boundedflow.cli.demo_handler import handle_demo_command
from boundedflow.cli.error_handler import handle_cli_error
from boundedflow.cli.models import DemoOptions
from boundedflow.cli.options import (
    config_option,
    json_output_option,
    log_level_option,
    verbose_option,
    version_option,
)
from boundedflow.shared.constants import CLIDefaults, CLIHelp, ExitCodes
from boundedflow.shared.errors import ErrorCode, create_config_error

__version__ = CLIDefaults.VERSION


def version_callback(value: bool) -> None:
    """Print version information and exit."""
    if value:
        typer.echo(CLIHelp.VERSION_TEXT.format(version=__version__))
        raise typer.Exit


def main_callback(
    verbose: int,
    log_level: LogLevel,
    json_output: bool,
    version: bool,
) -> None:
    """
    Process the global options and store them in the CLI context.

    Args:
        verbose: Verbosity level (count-based)
        log_level: Logging level (enum-based)
        json_output: Whether to output in JSON format
        version: Whether to show version information
    """
    if version:
        version_callback(value=True)

    set_cli_context(
        CliContext(
            verbose=verbose,
            log_level=log_level,
            json_output=json_output,
        )
    )


app = typer.Typer(
    name=CLIHelp.APP_NAME,
    help=CLIHelp.APP_DESCRIPTION,
    add_completion=False,
    rich_markup_mode=CLIHelp.APP_STYLE,
    no_args_is_help=True,
    invoke_without_command=True,
)


@app.callback()
def main(
    verbose: Annotated[int, verbose_option] = 0,
    log_level: Annotated[LogLevel, log_level_option] = LogLevel.WARNING,
    json_output: Annotated[bool, json_output_option] = False,
    version: Annotated[bool, version_option] = False,
) -> None:
    """Bounded-buffer producer/consumer pipeline demonstrations."""
    main_callback(verbose, log_level, json_output, version)


@app.command("demo", help=CLIHelp.DEMO)
def demo_command(
    items: int = typer.Option(CLIDefaults.DEMO_ITEMS, "--items", "-n", help=CLIHelp.ITEMS),
    capacity: Optional[int] = typer.Option(None, "--capacity", help=CLIHelp.CAPACITY),
    producers: int = typer.Option(CLIDefaults.DEMO_PRODUCERS, "--producers", "-p", help=CLIHelp.PRODUCERS),
    consumers: Optional[int] = typer.Option(None, "--consumers", help=CLIHelp.CONSUMERS),
    latency: Optional[bool] = typer.Option(None, "--latency/--no-latency", help=CLIHelp.LATENCY),
    config_path: Annotated[Optional[Path], config_option] = None,
) -> None:
    """
    Run labeled items through producers and consumers.

    Examples:
        # One producer, one consumer, ten items
        boundedflow demo --no-latency

        # Two producers feeding three consumers through a queue of two slots
        boundedflow demo --producers 2 --consumers 3 --capacity 2

        # Machine-readable result
        boundedflow --json demo --items 50
    """
    json_output = get_cli_context().json_output
    try:
        try:
            options = DemoOptions(
                items=items,
                producers=producers,
                capacity=capacity,
                consumers=consumers,
                latency=latency,
                config_path=config_path,
            )
        except ValidationError as e:
            raise create_config_error(
                f"Invalid demo options: {e}",
                code=ErrorCode.INVALID_CONFIG,
                operation="demo",
                original_error=e,
            ) from e

        exit_code = handle_demo_command(options)

    except Exception as e:  # pylint: disable=broad-exception-caught
        exit_code = handle_cli_error(e, "demo", json_output=json_output)

    if exit_code != ExitCodes.SUCCESS:
        raise typer.Exit(exit_code)


if __name__ == "__main__":
    app()
