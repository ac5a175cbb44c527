"""Response checking and header metadata extraction.

Successful responses are wrapped in a ``TraktApiResponse`` carrying the
pagination, sort, interval, VIP and rate-limit metadata read from headers.
The body is never consumed here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ValidationError

from traktkit.shared.constants import (
    TRAKT_RESPONSE_CODE_MESSAGES,
    ResponseType,
    TraktApiHeaders,
)
from traktkit.shared.errors import TraktApiResponseError

if TYPE_CHECKING:
    from traktkit.api.template import TraktApiTemplate
    from traktkit.services.transport import RawResponse

logger = logging.getLogger(__name__)


@dataclass
class TraktApiPaginationInfo:
    """Pagination metadata (None when unknown)."""

    item_count: int | None = None
    page_count: int | None = 1
    limit: int | None = None
    page: int | None = 1


@dataclass(frozen=True)
class TraktApiSort:
    by: str | None = None
    how: str | None = None


@dataclass(frozen=True)
class TraktApiInterval:
    start: str | None = None
    end: str | None = None


@dataclass(frozen=True)
class TraktApiVip:
    url: str | None = None
    user: str | None = None
    limit: str | None = None


class TraktApiRateLimit(BaseModel):
    """Decoded ``X-Ratelimit`` header."""

    name: str
    period: int
    limit: int
    remaining: int
    until: str


@dataclass
class TraktApiResponseLimit:
    rate: TraktApiRateLimit | None = None
    retry: float | None = None


class TraktApiResponse:
    """Raw response plus metadata parsed from its headers.

    Status, headers and body readers are delegated to the wrapped response.
    """

    def __init__(self, inner: RawResponse) -> None:
        self.inner = inner
        self.pagination: TraktApiPaginationInfo | None = None
        self.sort: TraktApiSort | None = None
        self.applied_sort: TraktApiSort | None = None
        self.interval: TraktApiInterval | None = None
        self.vip: TraktApiVip | None = None
        self.limit: TraktApiResponseLimit | None = None

    @property
    def status(self) -> int:
        return self.inner.status

    @property
    def reason(self) -> str:
        return self.inner.reason

    @property
    def ok(self) -> bool:
        return self.inner.ok

    @property
    def type(self) -> str:
        return self.inner.type

    @property
    def headers(self) -> Any:
        return self.inner.headers

    async def json(self) -> Any:
        return await self.inner.json()

    async def text(self) -> str:
        return await self.inner.text()

    def __repr__(self) -> str:
        return f"TraktApiResponse(status={self.status}, pagination={self.pagination})"


def parse_error(response: RawResponse) -> TraktApiResponseError:
    """Build the error raised for a non-success response."""
    message = TRAKT_RESPONSE_CODE_MESSAGES.get(response.status) or response.reason
    return TraktApiResponseError(message, response)


def is_response_ok(response: RawResponse) -> RawResponse:
    """Return the response if acceptable.

    Opaque redirects cannot be inspected and are always accepted.

    Raises:
        TraktApiResponseError: On a non-success status
    """
    if response.type == ResponseType.OPAQUE_REDIRECT:
        return response
    if not response.ok or response.status >= 400:
        raise parse_error(response)
    return response


def _has_any(headers: Any, *names: str) -> bool:
    return any(name in headers for name in names)


def _to_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _parse_pagination(response: TraktApiResponse, paginated: bool) -> None:
    headers = response.headers
    if paginated:
        response.pagination = TraktApiPaginationInfo()

    names = {
        "item_count": TraktApiHeaders.X_PAGINATION_ITEM_COUNT,
        "page_count": TraktApiHeaders.X_PAGINATION_PAGE_COUNT,
        "limit": TraktApiHeaders.X_PAGINATION_LIMIT,
        "page": TraktApiHeaders.X_PAGINATION_PAGE,
    }
    if not _has_any(headers, *names.values()):
        return

    if response.pagination is None:
        response.pagination = TraktApiPaginationInfo()
    for attr, header in names.items():
        if header in headers:
            setattr(response.pagination, attr, _to_int(headers.get(header)))


def _parse_limit(response: TraktApiResponse) -> None:
    headers = response.headers
    if not _has_any(headers, TraktApiHeaders.X_RATELIMIT, TraktApiHeaders.RETRY_AFTER):
        return

    limit = TraktApiResponseLimit()
    raw_rate = headers.get(TraktApiHeaders.X_RATELIMIT)
    if raw_rate is not None:
        try:
            limit.rate = TraktApiRateLimit.model_validate_json(raw_rate)
        except ValidationError as e:
            logger.warning("Failed to parse rate limit %r: %s", raw_rate, e)
    raw_retry = headers.get(TraktApiHeaders.RETRY_AFTER)
    if raw_retry is not None:
        try:
            limit.retry = float(raw_retry)
        except ValueError:
            logger.warning("Failed to parse retry-after: %r", raw_retry)
    response.limit = limit


def parse_response(response: RawResponse, template: TraktApiTemplate | None = None) -> TraktApiResponse:
    """Check a raw response and attach its header metadata.

    Args:
        response: Raw transport response
        template: Endpoint template, used to pre-seed pagination

    Returns:
        Enriched response wrapping ``response``

    Raises:
        TraktApiResponseError: On a non-success, non-redirect status
    """
    is_response_ok(response)

    enriched = response if isinstance(response, TraktApiResponse) else TraktApiResponse(response)
    headers = enriched.headers

    _parse_pagination(enriched, bool(template is not None and template.opts.pagination))

    if _has_any(headers, TraktApiHeaders.X_SORT_BY, TraktApiHeaders.X_SORT_HOW):
        enriched.sort = TraktApiSort(
            by=headers.get(TraktApiHeaders.X_SORT_BY),
            how=headers.get(TraktApiHeaders.X_SORT_HOW),
        )

    if _has_any(headers, TraktApiHeaders.X_APPLIED_SORT_BY, TraktApiHeaders.X_APPLIED_SORT_HOW):
        enriched.applied_sort = TraktApiSort(
            by=headers.get(TraktApiHeaders.X_APPLIED_SORT_BY),
            how=headers.get(TraktApiHeaders.X_APPLIED_SORT_HOW),
        )

    if _has_any(headers, TraktApiHeaders.X_START_DATE, TraktApiHeaders.X_END_DATE):
        enriched.interval = TraktApiInterval(
            start=headers.get(TraktApiHeaders.X_START_DATE),
            end=headers.get(TraktApiHeaders.X_END_DATE),
        )

    if _has_any(
        headers,
        TraktApiHeaders.X_UPGRADE_URL,
        TraktApiHeaders.X_VIP_USER,
        TraktApiHeaders.X_ACCOUNT_LIMIT,
    ):
        enriched.vip = TraktApiVip(
            url=headers.get(TraktApiHeaders.X_UPGRADE_URL),
            user=headers.get(TraktApiHeaders.X_VIP_USER),
            limit=headers.get(TraktApiHeaders.X_ACCOUNT_LIMIT),
        )

    _parse_limit(enriched)

    return enriched
