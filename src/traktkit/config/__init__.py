"""traktkit Configuration Module

- Settings: Main configuration facade
- Loader functions: get_config, load_settings, reload_config
- Domain models: client, logging and cache settings
"""

from __future__ import annotations

from .loader import get_config, load_settings, reload_config
from .models import CacheSettings, LoggingSettings, Settings, TraktClientSettings

__all__ = [
    "CacheSettings",
    "LoggingSettings",
    "Settings",
    "TraktClientSettings",
    "get_config",
    "load_settings",
    "reload_config",
]
