"""boundedflow Configuration Module

This module provides unified access to configuration models and settings
management:
- Settings: Main configuration facade
- Loader functions: get_config, load_settings, reload_config, reset_config
- Domain models: PipelineSettings, LoggingSettings
"""

from __future__ import annotations

from .loader import (
    get_config,
    load_settings,
    reload_config,
    reset_config,
)
from .models import LoggingSettings, PipelineSettings, Settings

__all__ = [
    "LoggingSettings",
    "PipelineSettings",
    "Settings",
    "get_config",
    "load_settings",
    "reload_config",
    "reset_config",
]
