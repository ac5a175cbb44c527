"""
traktkit Constants Module

Centralized constants for the Trakt client: endpoints, headers,
response codes and the fixed vocabulary of the API.
"""

from .api import (
    ClientDefaults,
    HttpMethod,
    RedirectMode,
    ResponseType,
    TraktApiExtended,
    TraktEndpoint,
    TraktGrantType,
    TraktVerification,
    TraktWebsite,
)
from .headers import TRAKT_API_VERSION, ContentType, TraktApiHeaders
from .http_codes import TRAKT_RESPONSE_CODE_MESSAGES, TraktResponseCode

__all__ = [
    "TRAKT_API_VERSION",
    "TRAKT_RESPONSE_CODE_MESSAGES",
    "ClientDefaults",
    "ContentType",
    "HttpMethod",
    "RedirectMode",
    "ResponseType",
    "TraktApiExtended",
    "TraktApiHeaders",
    "TraktEndpoint",
    "TraktGrantType",
    "TraktResponseCode",
    "TraktVerification",
    "TraktWebsite",
]
