"""
Reusable Typer Options Module

Option declarations shared by the main callback and the commands. They are
used as ``Annotated`` metadata, e.g. ``verbose: Annotated[int, verbose_option] = 0``:
- verbose: Verbosity level (count-based)
- log_level: Logging level (enum-based)
- json_output: JSON output mode (flag-based)
- version: Eager version flag
- config: TOML configuration file
"""

from __future__ import annotations

import typer

from boundedflow.shared.constants import CLIHelp

verbose_option = typer.Option(
    "--verbose",
    "-v",
    count=True,
    help=CLIHelp.VERBOSE,
)

log_level_option = typer.Option(
    "--log-level",
    case_sensitive=False,
    help=CLIHelp.LOG_LEVEL,
)

json_output_option = typer.Option(
    "--json",
    help=CLIHelp.JSON,
)

version_option = typer.Option(
    "--version",
    "-V",
    help=CLIHelp.VERSION,
    is_eager=True,
)

config_option = typer.Option(
    "--config",
    "-c",
    help=CLIHelp.CONFIG,
    exists=True,
    file_okay=True,
    dir_okay=False,
    readable=True,
)
