"""Authenticated request executor for the Trakt API.

``BaseTraktClient`` turns an endpoint template and call parameters into an
HTTP request, checks the access-token contract, sends the request through
the injected transport and enriches the response. Registry entries are
bound as ``TraktClientEndpoint`` objects on a nested attribute tree.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any, Callable, Union

from traktkit.api.endpoints import TRAKT_API
from traktkit.api.parser import parse_body, parse_url, prepare_params
from traktkit.api.template import TraktApiParams, TraktApiTemplate
from traktkit.config.models.client_settings import TraktClientSettings
from traktkit.services.auth_models import (
    AuthUpdater,
    TraktClientAuthentication,
    now_ms,
)
from traktkit.services.cache import CacheEntry, ResponseCache, cache_key
from traktkit.services.response import TraktApiResponse, parse_response
from traktkit.services.transport import AiohttpTransport, RequestInit, Transport
from traktkit.shared.constants import TRAKT_API_VERSION, ContentType, TraktApiHeaders
from traktkit.shared.errors import (
    ErrorContext,
    TraktExpiredTokenError,
    TraktInvalidParameterError,
)
from traktkit.shared.logging import log_api_call

logger = logging.getLogger(__name__)

ParamsInput = Union[TraktApiParams, Mapping[str, Any], None]
AuthListener = Callable[[TraktClientAuthentication], None]


class TraktClientEndpoint:
    """A registry template bound to a client.

    Example:
        >>> response = await client.api.movies.summary({"id": "tron-legacy-2010"})
        >>> client.api.movies.summary.resolve({"id": "tron-legacy-2010"})
        'https://api.trakt.tv/movies/tron-legacy-2010'
    """

    def __init__(self, client: BaseTraktClient, name: str, template: TraktApiTemplate) -> None:
        self.client = client
        self.name = name
        self.template = template

    @property
    def method(self) -> str:
        return self.template.method

    @property
    def url(self) -> str:
        return self.template.url

    async def __call__(self, params: ParamsInput = None, init: RequestInit | None = None) -> TraktApiResponse:
        return await self.client._call(self.template, params, init)

    def resolve(self, params: ParamsInput = None) -> str:
        """Build the request URL without sending the request."""
        return self.client._resolve(self.template, params)

    async def cached(self, params: ParamsInput = None, init: RequestInit | None = None) -> TraktApiResponse:
        """Like calling the endpoint, but served from the client cache when possible."""
        return await self.client._cached_call(self.template, params, init)

    def __repr__(self) -> str:
        return f"TraktClientEndpoint({self.name!r}, {self.method} {self.url})"


class TraktApiNamespace:
    """Attribute tree over bound endpoints (``client.api.movies.summary``)."""

    def __init__(self, path: str = "") -> None:
        self._path = path
        self._children: dict[str, TraktApiNamespace | TraktClientEndpoint] = {}

    @classmethod
    def build(cls, client: BaseTraktClient, api: Mapping[str, TraktApiTemplate]) -> TraktApiNamespace:
        root = cls()
        for name, template in api.items():
            *groups, leaf = name.split(".")
            node = root
            for group in groups:
                child = node._children.get(group)
                if child is None:
                    child = cls(f"{node._path}.{group}".lstrip("."))
                    node._children[group] = child
                elif not isinstance(child, TraktApiNamespace):
                    raise ValueError(f"Endpoint name conflicts with a group: {name}")
                node = child
            if leaf in node._children:
                raise ValueError(f"Duplicate endpoint name: {name}")
            node._children[leaf] = TraktClientEndpoint(client, name, template)
        return root

    def __getattr__(self, name: str) -> TraktApiNamespace | TraktClientEndpoint:
        try:
            return self.__dict__["_children"][name]
        except KeyError:
            raise AttributeError(f"No endpoint or group '{name}' under '{self._path or 'api'}'") from None

    def __dir__(self) -> list[str]:
        return sorted(self._children)

    def __iter__(self) -> Iterator[str]:
        return iter(self._children)

    def __repr__(self) -> str:
        return f"TraktApiNamespace({self._path or 'api'}: {', '.join(self._children)})"


class BaseTraktClient:
    """Trakt API client with request building and authentication state.

    Args:
        settings: Application credentials and endpoint
        authentication: Initial authentication state
        api: Registry of templates to bind, keyed by dotted name
        transport: Fetch-like transport (defaults to AiohttpTransport)
        cache_store: Mapping backing cached calls
        cache_retention: Seconds a cached response stays valid
    """

    def __init__(
        self,
        settings: TraktClientSettings,
        authentication: TraktClientAuthentication | None = None,
        api: Mapping[str, TraktApiTemplate] = TRAKT_API,
        transport: Transport | None = None,
        cache_store: MutableMapping[str, CacheEntry[TraktApiResponse]] | None = None,
        cache_retention: float | None = None,
    ) -> None:
        self.settings = settings
        self._auth = authentication or TraktClientAuthentication()
        self._auth_listeners: list[AuthListener] = []
        self._owns_transport = transport is None
        self._transport: Transport = transport or AiohttpTransport(timeout=settings.timeout)
        self._cache: ResponseCache[TraktApiResponse] = ResponseCache(cache_store, cache_retention)
        self._registry = dict(api)
        self.api = TraktApiNamespace.build(self, self._registry)

    @property
    def auth(self) -> TraktClientAuthentication:
        """Current authentication state (immutable snapshot)."""
        return self._auth

    def update_auth(self, auth: AuthUpdater) -> TraktClientAuthentication:
        """Replace the authentication state in one step.

        Args:
            auth: New state, or a function of the current state

        Returns:
            The new state
        """
        self._auth = auth(self._auth) if callable(auth) else auth
        for listener in list(self._auth_listeners):
            listener(self._auth)
        return self._auth

    def on_auth_change(self, listener: AuthListener) -> Callable[[], None]:
        """Subscribe to authentication changes.

        Returns:
            A function removing the subscription
        """
        self._auth_listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._auth_listeners:
                self._auth_listeners.remove(listener)

        return unsubscribe

    def endpoint(self, name: str) -> TraktClientEndpoint:
        """Bound endpoint by dotted registry name."""
        node: Any = self.api
        for part in name.split("."):
            node = getattr(node, part)
        if not isinstance(node, TraktClientEndpoint):
            raise KeyError(f"'{name}' is a group, not an endpoint")
        return node

    async def call(self, name: str, params: ParamsInput = None, init: RequestInit | None = None) -> TraktApiResponse:
        """Call a registry endpoint by dotted name."""
        return await self.endpoint(name)(params, init)

    def clear_cache(self) -> None:
        self._cache.clear()

    def _parse_headers(self, template: TraktApiTemplate) -> dict[str, str]:
        """Build request headers, enforcing the access-token contract.

        Raises:
            TraktInvalidParameterError: OAuth is required and no token is stored
            TraktExpiredTokenError: A token is stored but has expired
        """
        headers = {
            TraktApiHeaders.USER_AGENT: self.settings.useragent,
            TraktApiHeaders.CONTENT_TYPE: ContentType.JSON,
            TraktApiHeaders.TRAKT_API_VERSION: TRAKT_API_VERSION,
            TraktApiHeaders.TRAKT_API_KEY: self.settings.client_id,
        }

        auth = self._auth
        required = template.opts.auth
        if required is True and not auth.access_token:
            raise TraktInvalidParameterError(
                "OAuth required: access_token is missing",
                ErrorContext(operation="parse_headers", additional_data={"url": template.url}),
            )
        if required and auth.access_token:
            if auth.expires is None or auth.expires <= now_ms():
                raise TraktExpiredTokenError(
                    "OAuth required: access_token has expired",
                    ErrorContext(operation="parse_headers", additional_data={"url": template.url}),
                )
            headers[TraktApiHeaders.AUTHORIZATION] = f"Bearer {auth.access_token}"

        return headers

    def _resolve(self, template: TraktApiTemplate, params: ParamsInput = None) -> str:
        return parse_url(template, prepare_params(template, params), self.settings.endpoint)

    def _prepare(
        self,
        template: TraktApiTemplate,
        params: ParamsInput,
        init: RequestInit | None,
    ) -> tuple[str, RequestInit]:
        _params = prepare_params(template, params)
        headers = self._parse_headers(template)
        url = parse_url(template, _params, self.settings.endpoint)
        body = parse_body(template, _params)

        overrides = dict(init or {})
        extra_headers = overrides.pop("headers", None) or {}
        request_init: RequestInit = {
            **(template.init or {}),
            **overrides,
            "method": template.method,
            "headers": {**headers, **extra_headers},
        }
        if body is not None:
            request_init["body"] = body
        return url, request_init

    async def _fetch(self, template: TraktApiTemplate, url: str, init: RequestInit) -> TraktApiResponse:
        start = time.perf_counter()
        response = await self._transport(url, init)
        log_api_call(
            logger,
            url,
            method=init["method"],
            status_code=response.status,
            duration_ms=(time.perf_counter() - start) * 1000,
        )
        return parse_response(response, template)

    async def _call(
        self,
        template: TraktApiTemplate,
        params: ParamsInput = None,
        init: RequestInit | None = None,
    ) -> TraktApiResponse:
        """Validate, send and enrich a single request."""
        url, request_init = self._prepare(template, params, init)
        return await self._fetch(template, url, request_init)

    async def _cached_call(
        self,
        template: TraktApiTemplate,
        params: ParamsInput = None,
        init: RequestInit | None = None,
    ) -> TraktApiResponse:
        url, request_init = self._prepare(template, params, init)
        key = cache_key(
            request_init["method"],
            url,
            request_init.get("body"),
            request_init["headers"].get(TraktApiHeaders.AUTHORIZATION),
        )
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for %s %s", request_init["method"], url)
            return cached
        response = await self._fetch(template, url, request_init)
        self._cache.set(key, response)
        return response

    async def close(self) -> None:
        """Release the default transport."""
        if self._owns_transport and isinstance(self._transport, AiohttpTransport):
            await self._transport.close()

    async def __aenter__(self) -> BaseTraktClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
