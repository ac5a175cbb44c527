"""Request building: templates, filters, validators and the endpoint registry."""

from __future__ import annotations

from .endpoints import MINIMAL_TRAKT_API, TRAKT_API
from .filters import TraktApiFilters, TraktApiFilterValidator, is_filter
from .parser import build_request, parse_body, parse_url
from .template import (
    TraktApiPagination,
    TraktApiParams,
    TraktApiRequest,
    TraktApiTemplate,
    TraktApiTemplateOptions,
    TraktApiTemplateParameters,
)

__all__ = [
    "MINIMAL_TRAKT_API",
    "TRAKT_API",
    "TraktApiFilterValidator",
    "TraktApiFilters",
    "TraktApiPagination",
    "TraktApiParams",
    "TraktApiRequest",
    "TraktApiTemplate",
    "TraktApiTemplateOptions",
    "TraktApiTemplateParameters",
    "build_request",
    "is_filter",
    "parse_body",
    "parse_url",
]
