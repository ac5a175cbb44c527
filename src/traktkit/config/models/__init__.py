"""Configuration models for traktkit."""

from .client_settings import CacheSettings, LoggingSettings, TraktClientSettings
from .settings import Settings

__all__ = [
    "CacheSettings",
    "LoggingSettings",
    "Settings",
    "TraktClientSettings",
]
