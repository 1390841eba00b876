"""
CLI Configuration Constants

This module contains constants for the boundedflow command-line interface.
"""


class CLIDefaults:
    """Default values for CLI options."""

    VERSION = "1.0.0"
    DEMO_ITEMS = 10
    DEMO_PRODUCERS = 1
    ITEM_LABEL = "Item-{index}"
    PRODUCER_ITEM_LABEL = "P{producer}-Item-{index}"


class CLIHelp:
    """Help texts."""

    APP_NAME = "boundedflow"
    APP_DESCRIPTION = "Bounded-buffer producer/consumer pipeline demonstrations."
    APP_STYLE = "rich"
    VERSION_TEXT = "boundedflow {version}"

    DEMO = "Run producers and consumers over labeled items and report the transfer."
    ITEMS = "Number of items each producer generates."
    CAPACITY = "Shared queue capacity (defaults to the configured value)."
    PRODUCERS = "Number of producer threads."
    CONSUMERS = "Number of consumer threads (defaults to the configured value)."
    LATENCY = "Simulate random per-item processing latency."
    CONFIG = "Path to a TOML configuration file."
    LOG_LEVEL = "Logging level."
    VERBOSE = "Enable verbose (DEBUG) output."
    JSON = "Print results as JSON."
    VERSION = "Show version and exit."


class ExitCodes:
    """Process exit codes."""

    SUCCESS = 0
    TRANSFER_MISMATCH = 1
    CONFIGURATION_ERROR = 2
    UNEXPECTED_ERROR = 3


__all__ = ["CLIDefaults", "CLIHelp", "ExitCodes"]
