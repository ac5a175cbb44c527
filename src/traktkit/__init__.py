"""traktkit: asynchronous client for the Trakt API."""

from __future__ import annotations

from traktkit.api import MINIMAL_TRAKT_API, TRAKT_API, TraktApiParams, TraktApiTemplate
from traktkit.config import Settings, TraktClientSettings, get_config
from traktkit.services import (
    AiohttpTransport,
    CancellablePolling,
    HttpResponse,
    TraktApiResponse,
    TraktClient,
    TraktClientAuthentication,
)
from traktkit.shared.errors import ErrorCode, TraktApiResponseError, TraktError
from traktkit.shared.logging import setup_structured_logger

__version__ = "0.1.0"

__all__ = [
    "MINIMAL_TRAKT_API",
    "TRAKT_API",
    "AiohttpTransport",
    "CancellablePolling",
    "ErrorCode",
    "HttpResponse",
    "Settings",
    "TraktApiParams",
    "TraktApiResponse",
    "TraktApiResponseError",
    "TraktApiTemplate",
    "TraktClient",
    "TraktClientAuthentication",
    "TraktClientSettings",
    "TraktError",
    "__version__",
    "get_config",
    "setup_structured_logger",
]
