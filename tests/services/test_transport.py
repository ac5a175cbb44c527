"""Tests for the HTTP transport."""

from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest
from multidict import CIMultiDict

from traktkit.services.transport import AiohttpTransport, HttpResponse, RawResponse
from traktkit.shared.constants import ResponseType
from traktkit.shared.errors import ErrorCode, InfrastructureError


def _session(status=200, reason="OK", headers=None, body=b"", url="https://api.trakt.tv/networks"):
    response = MagicMock()
    response.status = status
    response.reason = reason
    response.headers = headers or {}
    response.url = url
    response.read = AsyncMock(return_value=body)

    session = MagicMock()
    session.closed = False
    session.close = AsyncMock()
    session.request.return_value.__aenter__ = AsyncMock(return_value=response)
    session.request.return_value.__aexit__ = AsyncMock(return_value=False)
    return session


class TestHttpResponse:
    """Test the buffered response."""

    def test_ok(self):
        """Test the success range."""
        assert HttpResponse(status=204).ok
        assert not HttpResponse(status=302).ok
        assert not HttpResponse(status=404).ok

    def test_satisfies_raw_response(self):
        """Test the structural response contract."""
        assert isinstance(HttpResponse(), RawResponse)

    @pytest.mark.asyncio
    async def test_json_and_text(self):
        """Test body readers."""
        response = HttpResponse(body=b'{"name": "HBO"}')
        assert await response.json() == {"name": "HBO"}
        assert await response.text() == '{"name": "HBO"}'

    @pytest.mark.asyncio
    async def test_empty_body(self):
        """Test that an empty body decodes to None."""
        assert await HttpResponse(status=204).json() is None

    def test_headers_case_insensitive(self):
        """Test header lookups."""
        response = HttpResponse(headers=CIMultiDict({"X-Pagination-Page": "1"}))
        assert response.headers["x-pagination-page"] == "1"


class TestAiohttpTransport:
    """Test AiohttpTransport with a mocked session."""

    @pytest.mark.asyncio
    async def test_request(self):
        """Test that the init dict maps onto the session request."""
        session = _session(body=b"[]", headers={"X-Pagination-Page": "1"})
        transport = AiohttpTransport(session=session)

        response = await transport(
            "https://api.trakt.tv/sync/history",
            {"method": "POST", "headers": {"trakt-api-key": "id"}, "body": "{}"},
        )

        session.request.assert_called_once_with(
            "POST",
            "https://api.trakt.tv/sync/history",
            headers={"trakt-api-key": "id"},
            data="{}",
            allow_redirects=True,
        )
        assert response.status == 200
        assert response.type == ResponseType.BASIC
        assert response.headers["x-pagination-page"] == "1"
        assert await response.json() == []

    @pytest.mark.asyncio
    async def test_manual_redirect(self):
        """Test that unfollowed redirects become opaque redirects."""
        session = _session(status=302, reason="Found", headers={"Location": "https://trakt.tv/auth/signin"})
        transport = AiohttpTransport(session=session)

        response = await transport("https://api.trakt.tv/oauth/authorize", {"method": "GET", "redirect": "manual"})

        assert session.request.call_args.kwargs["allow_redirects"] is False
        assert response.type == ResponseType.OPAQUE_REDIRECT
        assert response.headers["location"] == "https://trakt.tv/auth/signin"

    @pytest.mark.asyncio
    async def test_followed_redirect_status(self):
        """Test that a 3xx is only opaque under manual redirects."""
        transport = AiohttpTransport(session=_session(status=304, reason="Not Modified"))

        response = await transport("https://api.trakt.tv/networks", {"method": "GET"})

        assert response.type == ResponseType.BASIC

    @pytest.mark.asyncio
    async def test_network_error(self):
        """Test that client errors are wrapped."""
        session = _session()
        session.request.side_effect = aiohttp.ClientConnectionError("refused")
        transport = AiohttpTransport(session=session)

        with pytest.raises(InfrastructureError) as exc_info:
            await transport("https://api.trakt.tv/networks", {"method": "GET"})

        error = exc_info.value
        assert error.code == ErrorCode.NETWORK_ERROR
        assert isinstance(error.original_error, aiohttp.ClientConnectionError)
        assert error.context.additional_data == {"url": "https://api.trakt.tv/networks", "method": "GET"}

    @pytest.mark.asyncio
    async def test_injected_session_not_closed(self):
        """Test that injected sessions belong to the caller."""
        session = _session()
        async with AiohttpTransport(session=session) as transport:
            await transport("https://api.trakt.tv/networks", {"method": "GET"})
        session.close.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_owned_session_lifecycle(self, mocker):
        """Test lazy creation and closing of the owned session."""
        session = _session()
        factory = mocker.patch("aiohttp.ClientSession", return_value=session)
        transport = AiohttpTransport(timeout=5)

        factory.assert_not_called()
        await transport("https://api.trakt.tv/networks", {"method": "GET"})
        await transport("https://api.trakt.tv/genres/movies", {"method": "GET"})
        factory.assert_called_once()

        await transport.close()
        session.close.assert_awaited_once()
