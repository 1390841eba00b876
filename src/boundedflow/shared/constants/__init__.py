"""
boundedflow Constants Module

Centralized constants so that defaults and magic values live in one place.
"""

from .cli import CLIDefaults, CLIHelp, ExitCodes
from .pipeline import ActorNames, Latency, Pipeline

__all__ = [
    "ActorNames",
    "CLIDefaults",
    "CLIHelp",
    "ExitCodes",
    "Latency",
    "Pipeline",
]
