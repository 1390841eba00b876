"""
JSON Output Formatter for the boundedflow CLI

Commands use this when the --json flag is given so that every command
emits the same envelope.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import orjson


def format_json_output(
    success: bool,
    command: str,
    data: Any | None = None,
    errors: list[str] | None = None,
) -> bytes:
    """
    Format command output as JSON.

    Args:
        success: Whether the command executed successfully
        command: The command name (e.g., "demo")
        data: The command's output data
        errors: List of error messages

    Returns:
        JSON-encoded bytes ready for output

    Example:
        >>> output = format_json_output(
        ...     success=True,
        ...     command="demo",
        ...     data={"items_consumed": 10}
        ... )
    """
    if errors is None:
        errors = []

    if errors:
        success = False

    json_data = {
        "success": success,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "command": command,
        "data": data,
        "errors": errors,
    }

    # Items are arbitrary objects; anything orjson cannot encode becomes its str()
    return orjson.dumps(
        json_data,
        default=str,
        option=orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2,
    )
