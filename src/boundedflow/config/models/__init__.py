"""Configuration models package."""

from __future__ import annotations

from .app_settings import LoggingSettings
from .pipeline_settings import PipelineSettings
from .settings import Settings

__all__ = [
    "LoggingSettings",
    "PipelineSettings",
    "Settings",
]
