"""Settings loader and singleton manager.

This module handles:
- Configuration file loading from TOML
- Environment variable overrides (through pydantic-settings)
- Thread-safe singleton pattern for the Settings instance
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from pydantic import ValidationError

from boundedflow.config.models.settings import Settings
from boundedflow.shared.errors import (
    ConfigurationError,
    ErrorCode,
    ErrorContext,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATHS: tuple[Path, ...] = (
    Path("config/boundedflow.toml"),
    Path("boundedflow.toml"),
)


class SettingsLoader:
    """Thread-safe singleton manager for Settings.

    Uses double-checked locking pattern to ensure thread-safety
    while minimizing lock overhead.
    """

    def __init__(self) -> None:
        self._instance: Settings | None = None
        self._lock = threading.RLock()

    def get_config(self) -> Settings:
        """Get the global settings instance (thread-safe).

        Returns:
            The global Settings instance, loading it if necessary.
        """
        # First check (without lock for performance)
        if self._instance is None:
            # Second check (with lock for thread-safety)
            with self._lock:
                if self._instance is None:
                    self._instance = load_settings()

        return self._instance

    def reload_config(self, config_path: str | Path | None = None) -> Settings:
        """Reload the global settings instance from configuration files.

        Args:
            config_path: Optional explicit TOML file to load.

        Returns:
            The reloaded Settings instance.
        """
        with self._lock:
            self._instance = load_settings(config_path)

        return self._instance

    def reset(self) -> None:
        """Forget the cached instance; the next get_config() loads again."""
        with self._lock:
            self._instance = None


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from a TOML configuration file or the environment.

    Args:
        config_path: Optional path to a TOML file. If None, the default
            locations are tried before falling back to environment
            variables and defaults.

    Returns:
        Settings instance loaded from the specified source

    Raises:
        ConfigurationError: If the file is missing or its values are invalid.
    """
    context = ErrorContext(
        operation="load_settings",
        additional_data={"config_path": str(config_path) if config_path else ""},
    )

    try:
        if config_path:
            return Settings.from_toml_file(config_path)

        for default_path in DEFAULT_CONFIG_PATHS:
            if default_path.exists():
                return Settings.from_toml_file(default_path)

        return Settings()

    except FileNotFoundError as e:
        raise ConfigurationError(
            ErrorCode.CONFIG_FILE_NOT_FOUND,
            str(e),
            context,
            original_error=e,
        ) from e
    except (ValidationError, ValueError, TypeError) as e:
        # toml.TomlDecodeError is a ValueError
        raise ConfigurationError(
            ErrorCode.INVALID_CONFIG,
            f"Invalid configuration: {e}",
            context,
            original_error=e,
        ) from e


# Global loader instance
_loader = SettingsLoader()


def get_config() -> Settings:
    """Get the global settings instance (thread-safe).

    Returns:
        The global Settings instance, loading it if necessary.
    """
    return _loader.get_config()


def reload_config(config_path: str | Path | None = None) -> Settings:
    """Reload the global settings instance from configuration files.

    Returns:
        The reloaded Settings instance.
    """
    return _loader.reload_config(config_path)


def reset_config() -> None:
    """Drop the cached global settings instance."""
    _loader.reset()


__all__ = [
    "DEFAULT_CONFIG_PATHS",
    "SettingsLoader",
    "get_config",
    "load_settings",
    "reload_config",
    "reset_config",
]
