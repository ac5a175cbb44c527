"""HTTP transport for the Trakt client.

The client only depends on the ``Transport`` protocol: an async callable
taking a URL and a request init dict and returning a response-like object.
``AiohttpTransport`` is the default implementation.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

import aiohttp
from multidict import CIMultiDict, CIMultiDictProxy

from traktkit.shared.constants import (
    ClientDefaults,
    RedirectMode,
    ResponseType,
)
from traktkit.shared.errors import ErrorCode, ErrorContext, InfrastructureError

logger = logging.getLogger(__name__)

RequestInit = dict[str, Any]


@runtime_checkable
class RawResponse(Protocol):
    """Response contract consumed by the response enricher."""

    status: int
    reason: str
    type: str
    headers: CIMultiDict[str] | CIMultiDictProxy[str]

    @property
    def ok(self) -> bool: ...

    async def json(self) -> Any: ...

    async def text(self) -> str: ...


class Transport(Protocol):
    """Injected fetch-like primitive."""

    async def __call__(self, url: str, init: RequestInit) -> RawResponse: ...


@dataclass
class HttpResponse:
    """Fully read HTTP response.

    Attributes:
        status: HTTP status code
        reason: Status text
        headers: Case-insensitive response headers
        body: Raw response body
        url: Final request URL
        type: "basic", or "opaqueredirect" for unfollowed redirects
    """

    status: int = 200
    reason: str = "OK"
    headers: CIMultiDict[str] = field(default_factory=CIMultiDict)
    body: bytes = b""
    url: str = ""
    type: str = ResponseType.BASIC

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    async def text(self) -> str:
        return self.body.decode("utf-8")

    async def json(self) -> Any:
        return json.loads(self.body) if self.body else None


class AiohttpTransport:
    """Transport backed by a lazily created ``aiohttp.ClientSession``.

    The session is owned by the transport unless one is injected.

    Example:
        >>> async with AiohttpTransport(timeout=10) as transport:
        ...     response = await transport("https://api.trakt.tv/networks", {"method": "GET"})
    """

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        timeout: float = ClientDefaults.TIMEOUT,
    ) -> None:
        self._session = session
        self._owns_session = session is None
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
            self._owns_session = True
            logger.debug("aiohttp.ClientSession created")
        return self._session

    async def __call__(self, url: str, init: RequestInit) -> HttpResponse:
        session = self._get_session()
        manual = init.get("redirect") == RedirectMode.MANUAL
        try:
            async with session.request(
                init.get("method", "GET"),
                url,
                headers=init.get("headers"),
                data=init.get("body"),
                allow_redirects=not manual,
            ) as response:
                body = await response.read()
                redirected = manual and 300 <= response.status < 400
                return HttpResponse(
                    status=response.status,
                    reason=response.reason or "",
                    headers=CIMultiDict(response.headers),
                    body=body,
                    url=str(response.url),
                    type=ResponseType.OPAQUE_REDIRECT if redirected else ResponseType.BASIC,
                )
        except aiohttp.ClientError as e:
            raise InfrastructureError(
                ErrorCode.NETWORK_ERROR,
                f"Request failed: {e}",
                ErrorContext(
                    operation="transport",
                    additional_data={"url": url, "method": init.get("method", "GET")},
                ),
                e,
            ) from e

    async def close(self) -> None:
        """Close the owned session, if any."""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
            logger.debug("aiohttp.ClientSession closed")
        self._session = None

    async def __aenter__(self) -> AiohttpTransport:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
