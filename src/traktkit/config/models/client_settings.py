"""Trakt client configuration models.

This module contains the application credentials and endpoint settings
supplied to the client at construction.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from traktkit.shared.constants import ClientDefaults, TraktEndpoint


class TraktClientSettings(BaseModel):
    """Trakt application configuration.

    Security: client_secret is masked in __repr__ to prevent accidental
    exposure in logs.
    """

    client_id: str = Field(default="", description="Trakt application client id (API key)")
    client_secret: str = Field(
        default="",
        repr=False,
        description="Trakt application client secret",
    )
    redirect_uri: str = Field(default="", description="OAuth redirect URI")
    endpoint: str = Field(
        default=TraktEndpoint.PRODUCTION,
        description="Base API endpoint (production or staging)",
    )
    useragent: str = Field(
        default=ClientDefaults.USER_AGENT,
        description="User agent sent with every request",
    )
    timeout: int = Field(
        default=ClientDefaults.TIMEOUT,
        gt=0,
        description="Request timeout in seconds for the default transport",
    )

    @property
    def is_staging(self) -> bool:
        """Whether the client targets the staging environment."""
        return "staging" in self.endpoint

    def __repr__(self) -> str:
        """Repr that masks the client secret."""
        masked_secret = "****" if self.client_secret else "[empty]"
        return (
            f"TraktClientSettings("
            f"client_id={self.client_id!r}, "
            f"client_secret={masked_secret}, "
            f"redirect_uri={self.redirect_uri!r}, "
            f"endpoint={self.endpoint!r})"
        )


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Logging level")
    file: str | None = Field(default=None, description="Optional JSON log file path")
    use_rich_console: bool = Field(default=True, description="Use rich console output")


class CacheSettings(BaseModel):
    """Cached call configuration."""

    retention: float | None = Field(
        default=None,
        ge=0,
        description="Seconds a cached response stays valid (None keeps it until cleared)",
    )


__all__ = [
    "CacheSettings",
    "LoggingSettings",
    "TraktClientSettings",
]
