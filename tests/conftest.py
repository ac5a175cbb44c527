"""
Pytest configuration and shared fixtures for traktkit tests.

This module provides client settings, fake transports and response
builders shared across the test modules.
"""

from __future__ import annotations

import json
from typing import Any, Callable
from unittest.mock import AsyncMock

import pytest
from multidict import CIMultiDict

from traktkit.api.template import (
    TraktApiTemplate,
    TraktApiTemplateOptions,
    TraktApiTemplateParameters,
)
from traktkit.config.models.client_settings import TraktClientSettings
from traktkit.services.auth_models import TraktClientAuthentication, now_ms
from traktkit.services.trakt_client import TraktClient
from traktkit.services.transport import HttpResponse
from traktkit.shared.constants import HttpMethod, ResponseType, TraktEndpoint

ResponseFactory = Callable[..., HttpResponse]


@pytest.fixture
def settings() -> TraktClientSettings:
    """Client settings used by every client fixture."""
    return TraktClientSettings(
        client_id="client_id",
        client_secret="client_secret",  # pragma: allowlist secret
        redirect_uri="http://localhost/callback",
        endpoint=TraktEndpoint.PRODUCTION,
        useragent="my-user-agent",
    )


@pytest.fixture
def make_response() -> ResponseFactory:
    """Build HttpResponse objects.

    Returns:
        Factory taking status, JSON body, headers, reason and type.
    """

    def factory(
        status: int = 200,
        body: Any = None,
        headers: dict[str, str] | None = None,
        reason: str = "OK",
        type: str = ResponseType.BASIC,
    ) -> HttpResponse:
        return HttpResponse(
            status=status,
            reason=reason,
            headers=CIMultiDict(headers or {}),
            body=json.dumps(body).encode("utf-8") if body is not None else b"",
            type=type,
        )

    return factory


@pytest.fixture
def transport(make_response: ResponseFactory) -> AsyncMock:
    """Fake transport returning an empty 200 response by default."""
    return AsyncMock(return_value=make_response())


@pytest.fixture
def client(settings: TraktClientSettings, transport: AsyncMock) -> TraktClient:
    """Unauthenticated client over the fake transport."""
    return TraktClient(settings, transport=transport)


@pytest.fixture
def valid_auth() -> TraktClientAuthentication:
    """Authentication state expiring in one hour."""
    now = now_ms()
    return TraktClientAuthentication(
        access_token="access_token",
        refresh_token="refresh_token",
        created=now,
        expires=now + 3_600_000,
    )


@pytest.fixture
def expired_auth() -> TraktClientAuthentication:
    """Authentication state that expired one minute ago."""
    now = now_ms()
    return TraktClientAuthentication(
        access_token="expired_access_token",
        refresh_token="refresh_token",
        created=now - 7_200_000,
        expires=now - 60_000,
    )


@pytest.fixture
def mock_template() -> TraktApiTemplate:
    """Template with required and optional path, query and body parameters."""
    return TraktApiTemplate(
        method=HttpMethod.POST,
        url="/movies/:requiredPath/:optionalPath/popular?requiredQuery=&optionalQuery=",
        opts=TraktApiTemplateOptions(
            parameters=TraktApiTemplateParameters(
                query={"requiredQuery": True, "optionalQuery": False},
                path={"requiredPath": True, "optionalPath": False},
            ),
            filters=("genres", "query"),
            pagination=True,
            extended=("full",),
        ),
        body={"requiredBody": True, "optionalBody": False},
    )


@pytest.fixture
def mock_params() -> dict[str, Any]:
    """Parameters satisfying ``mock_template``."""
    return {
        "requiredQuery": "requiredQuery",
        "requiredPath": "requiredPath",
        "requiredBody": "requiredBody",
        "filters": {"genres": ["action", "adventure"]},
        "pagination": {"page": 1, "limit": 10},
        "extended": "full",
    }


@pytest.fixture
def mock_url() -> str:
    """URL built from ``mock_template`` and ``mock_params``."""
    return (
        f"{TraktEndpoint.PRODUCTION}/movies/requiredPath/popular"
        "?requiredQuery=requiredQuery&genres=action%2Cadventure&page=1&limit=10&extended=full"
    )
