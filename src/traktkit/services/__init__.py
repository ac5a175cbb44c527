"""Client services: transport, response enrichment, caching, polling and clients."""

from __future__ import annotations

from .auth_models import TraktAuthentication, TraktClientAuthentication, TraktDeviceAuthentication
from .base_client import BaseTraktClient, TraktApiNamespace, TraktClientEndpoint
from .cache import ResponseCache
from .polling import CancellablePolling, PollingState
from .response import TraktApiResponse, is_response_ok, parse_error, parse_response
from .trakt_client import TraktClient, handle_error
from .transport import AiohttpTransport, HttpResponse, Transport

__all__ = [
    "AiohttpTransport",
    "BaseTraktClient",
    "CancellablePolling",
    "HttpResponse",
    "PollingState",
    "ResponseCache",
    "TraktApiNamespace",
    "TraktApiResponse",
    "TraktAuthentication",
    "TraktClient",
    "TraktClientAuthentication",
    "TraktClientEndpoint",
    "TraktDeviceAuthentication",
    "Transport",
    "handle_error",
    "is_response_ok",
    "parse_error",
    "parse_response",
]
