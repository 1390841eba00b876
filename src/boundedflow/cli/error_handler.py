"""
CLI Error Handling Utilities

Maps exceptions raised by commands to exit codes and writes them to stderr
or, in JSON mode, as a JSON envelope on stdout.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from boundedflow.cli.json_formatter import format_json_output
from boundedflow.shared.constants import ExitCodes
from boundedflow.shared.errors import BoundedFlowError, ConfigurationError, ErrorCode

logger = logging.getLogger(__name__)


def handle_cli_error(
    error: Exception,
    command: str,
    *,
    json_output: bool = False,
) -> int:
    """Handle CLI errors with consistent formatting and logging.

    Args:
        error: The exception that occurred
        command: The CLI command being executed
        json_output: Whether to output JSON format

    Returns:
        Exit code for the CLI command
    """
    error_context = _create_error_context(error, command, json_output=json_output)
    exit_code, message = _map_error(error, error_context)
    _log_error(error, command, message, error_context)
    _output_error(message, command, exit_code, error_context, json_output=json_output)
    return exit_code


def _create_error_context(
    error: Exception,
    command: str,
    *,
    json_output: bool,
) -> dict[str, Any]:
    return {
        "command": command,
        "error_type": type(error).__name__,
        "json_output": json_output,
    }


def _map_error(error: Exception, error_context: dict[str, Any]) -> tuple[int, str]:
    """Map an exception to an exit code and a user-facing message."""
    if isinstance(error, ConfigurationError):
        error_context["error_code"] = error.code.value
        return ExitCodes.CONFIGURATION_ERROR, f"Configuration error: {error.message}"

    if isinstance(error, BoundedFlowError):
        error_context["error_code"] = error.code.value
        return ExitCodes.UNEXPECTED_ERROR, f"Pipeline error: {error.message}"

    error_context["error_code"] = ErrorCode.CLI_UNEXPECTED_ERROR.value
    return ExitCodes.UNEXPECTED_ERROR, f"Unexpected error: {error}"


def _log_error(
    error: Exception,
    command: str,
    message: str,
    error_context: dict[str, Any],
) -> None:
    if isinstance(error, ConfigurationError):
        # Bad input, not a bug: no traceback
        logger.error("CLI error in %s: %s", command, message, extra={"context": error_context})
    else:
        logger.exception("CLI error in %s: %s", command, message, extra={"context": error_context})


def _output_error(
    message: str,
    command: str,
    exit_code: int,
    error_context: dict[str, Any],
    *,
    json_output: bool,
) -> None:
    if not json_output:
        sys.stderr.write(f"Error: {message}\n")
        return

    error_output = format_json_output(
        success=False,
        command=command,
        errors=[message],
        data={
            "error_code": error_context.get("error_code"),
            "error_type": error_context["error_type"],
            "exit_code": exit_code,
        },
    )
    sys.stdout.buffer.write(error_output)
    sys.stdout.buffer.write(b"\n")
    sys.stdout.buffer.flush()
