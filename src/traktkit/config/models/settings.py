"""traktkit Settings Configuration Model.

Main Settings class that consolidates all configuration domains.
"""

from __future__ import annotations

import logging
from pathlib import Path

import toml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from traktkit.config.models.client_settings import (
    CacheSettings,
    LoggingSettings,
    TraktClientSettings,
)

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Settings facade providing unified configuration access.

    Values can be overridden with environment variables such as
    ``TRAKT_CLIENT__CLIENT_ID`` or ``TRAKT_LOGGING__LEVEL``.
    """

    model_config = SettingsConfigDict(
        env_prefix="TRAKT_",
        env_nested_delimiter="__",
        env_ignore_empty=True,
        extra="ignore",
    )

    client: TraktClientSettings = Field(default_factory=TraktClientSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)

    @classmethod
    def from_toml_file(cls, file_path: str | Path) -> Settings:
        """Load settings from TOML file.

        Values from the file take precedence; environment variables fill the
        keys it leaves unset.
        """

        file_path = Path(file_path)
        if not file_path.exists():
            msg = f"Configuration file not found: {file_path}"
            raise FileNotFoundError(msg)

        raw_config = toml.load(file_path)
        return cls(**raw_config)

    def to_toml_file(self, file_path: str | Path) -> None:
        """Save settings to TOML file.

        The client secret is written: configuration files are not logs.
        """

        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        data = self.model_dump(mode="json", exclude_none=True)
        with file_path.open("w", encoding="utf-8") as f:
            toml.dump(data, f)

        logger.debug("Settings saved to %s", file_path)


__all__ = ["Settings"]
