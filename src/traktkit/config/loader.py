"""Settings loader and cached instance manager.

This module handles:
- Configuration file loading from TOML
- Environment variable overrides (TRAKT_ prefix)
- A cached Settings instance shared by callers
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from pydantic import ValidationError

from traktkit.config.models.settings import Settings
from traktkit.shared.errors import (
    ApplicationError,
    ErrorCode,
    ErrorContext,
    create_config_error,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/trakt.toml")


class SettingsLoader:
    """Thread-safe holder of the shared Settings instance."""

    _instance: Settings | None = None
    _lock: threading.RLock = threading.RLock()

    def get_config(self, config_path: Path | str | None = None) -> Settings:
        """Get the shared settings instance, loading it if necessary."""
        if self._instance is None:
            with self._lock:
                if self._instance is None:
                    self._instance = load_settings(config_path)
        return self._instance

    def reload_config(self, config_path: Path | str | None = None) -> Settings:
        """Force a reload of the shared settings instance."""
        with self._lock:
            self._instance = load_settings(config_path)
            return self._instance


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from a TOML file (if any) and the environment.

    Args:
        config_path: Explicit TOML file. When omitted, DEFAULT_CONFIG_PATH
            is used if it exists, otherwise only the environment is read.

    Returns:
        Validated Settings instance

    Raises:
        ApplicationError: If the file is missing, unreadable or invalid
    """
    try:
        if config_path is not None:
            return Settings.from_toml_file(config_path)
        if DEFAULT_CONFIG_PATH.exists():
            return Settings.from_toml_file(DEFAULT_CONFIG_PATH)
        return Settings()
    except FileNotFoundError as e:
        raise ApplicationError(
            ErrorCode.CONFIG_MISSING,
            f"Configuration file not found: {config_path}",
            ErrorContext(operation="load_settings"),
            e,
        ) from e
    except (ValidationError, ValueError, OSError) as e:
        logger.exception("Failed to load configuration")
        raise create_config_error(
            f"Invalid configuration: {e}",
            operation="load_settings",
            original_error=e,
        ) from e


_loader = SettingsLoader()


def get_config(config_path: Path | str | None = None) -> Settings:
    """Get the shared settings instance.

    Returns:
        The shared Settings instance, loading it if necessary.
    """
    return _loader.get_config(config_path)


def reload_config(config_path: Path | str | None = None) -> Settings:
    """Reload the shared settings instance.

    Returns:
        The reloaded Settings instance.
    """
    return _loader.reload_config(config_path)
