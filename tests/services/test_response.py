"""Tests for response checking and header metadata."""

import json
import logging

import pytest

from traktkit.api.template import TraktApiTemplate, TraktApiTemplateOptions
from traktkit.services.response import (
    TraktApiPaginationInfo,
    TraktApiResponse,
    TraktApiSort,
    is_response_ok,
    parse_error,
    parse_response,
)
from traktkit.shared.constants import TRAKT_RESPONSE_CODE_MESSAGES, HttpMethod, ResponseType
from traktkit.shared.errors import ErrorCode, TraktApiResponseError

RATE_LIMIT = {
    "name": "UNAUTHED_API_GET_LIMIT",
    "period": 300,
    "limit": 1000,
    "remaining": 0,
    "until": "2024-03-01T10:05:00Z",
}


@pytest.fixture
def paginated_template():
    return TraktApiTemplate(
        method=HttpMethod.GET,
        url="/movies/trending",
        opts=TraktApiTemplateOptions(pagination=True),
    )


class TestIsResponseOk:
    """Test status checking."""

    def test_success(self, make_response):
        """Test that a 2xx response is returned unchanged."""
        response = make_response(status=201)
        assert is_response_ok(response) is response

    def test_not_found(self, make_response):
        """Test that a 404 raises with the known message and the response."""
        response = make_response(status=404, reason="Not Found")

        with pytest.raises(TraktApiResponseError) as exc_info:
            is_response_ok(response)

        error = exc_info.value
        assert error.message == TRAKT_RESPONSE_CODE_MESSAGES[404]
        assert error.response is response
        assert error.status == 404
        assert error.code == ErrorCode.API_RESPONSE_ERROR

    def test_unknown_status_uses_reason(self, make_response):
        """Test the fallback to the response reason."""
        error = parse_error(make_response(status=499, reason="Client Closed Request"))
        assert error.message == "Client Closed Request"

    def test_opaque_redirect_is_accepted(self, make_response):
        """Test that opaque redirects never raise."""
        response = make_response(status=0, reason="", type=ResponseType.OPAQUE_REDIRECT)
        assert is_response_ok(response) is response


class TestParseResponse:
    """Test header metadata extraction."""

    def test_no_headers(self, make_response):
        """Test that absent header groups leave metadata unset."""
        response = parse_response(make_response())

        assert isinstance(response, TraktApiResponse)
        assert response.pagination is None
        assert response.sort is None
        assert response.applied_sort is None
        assert response.interval is None
        assert response.vip is None
        assert response.limit is None

    def test_raises_before_enriching(self, make_response):
        """Test that error responses are not wrapped."""
        with pytest.raises(TraktApiResponseError):
            parse_response(make_response(status=500, reason="Internal Server Error"))

    def test_pagination(self, make_response):
        """Test the four pagination headers."""
        response = parse_response(
            make_response(
                headers={
                    "X-Pagination-Item-Count": "4",
                    "X-Pagination-Page-Count": "2",
                    "X-Pagination-Limit": "3",
                    "X-Pagination-Page": "1",
                }
            )
        )
        assert response.pagination == TraktApiPaginationInfo(item_count=4, page_count=2, limit=3, page=1)

    def test_pagination_seeded_from_template(self, make_response, paginated_template):
        """Test that paginated endpoints always expose pagination."""
        response = parse_response(make_response(), paginated_template)
        assert response.pagination == TraktApiPaginationInfo(item_count=None, page_count=1, limit=None, page=1)

    def test_partial_pagination_keeps_defaults(self, make_response, paginated_template):
        """Test that only headers present overwrite the seeded values."""
        response = parse_response(make_response(headers={"X-Pagination-Item-Count": "42"}), paginated_template)
        assert response.pagination.item_count == 42
        assert response.pagination.page == 1
        assert response.pagination.page_count == 1

    def test_non_numeric_pagination(self, make_response):
        """Test that unparsable pagination values become None."""
        response = parse_response(make_response(headers={"X-Pagination-Page": "first"}))
        assert response.pagination.page is None

    def test_header_names_are_case_insensitive(self, make_response):
        """Test lower-cased header names."""
        response = parse_response(make_response(headers={"x-pagination-limit": "10"}))
        assert response.pagination.limit == 10

    def test_sort_and_applied_sort(self, make_response):
        """Test requested and applied sort headers."""
        response = parse_response(
            make_response(
                headers={
                    "X-Sort-By": "rank",
                    "X-Sort-How": "asc",
                    "X-Applied-Sort-By": "added",
                }
            )
        )
        assert response.sort == TraktApiSort(by="rank", how="asc")
        assert response.applied_sort == TraktApiSort(by="added", how=None)

    def test_interval(self, make_response):
        """Test the date interval headers."""
        response = parse_response(make_response(headers={"X-Start-Date": "2024-03-01", "X-End-Date": "2024-03-08"}))
        assert response.interval.start == "2024-03-01"
        assert response.interval.end == "2024-03-08"

    def test_vip(self, make_response):
        """Test VIP upgrade headers."""
        response = parse_response(
            make_response(
                headers={
                    "X-Upgrade-URL": "https://trakt.tv/vip",
                    "X-VIP-User": "false",
                    "X-Account-Limit": "100",
                }
            )
        )
        assert response.vip.url == "https://trakt.tv/vip"
        assert response.vip.user == "false"
        assert response.vip.limit == "100"

    def test_rate_limit(self, make_response):
        """Test a decoded rate limit and retry delay."""
        response = parse_response(
            make_response(headers={"X-Ratelimit": json.dumps(RATE_LIMIT), "Retry-After": "2"})
        )
        assert response.limit.rate.name == "UNAUTHED_API_GET_LIMIT"
        assert response.limit.rate.remaining == 0
        assert response.limit.retry == 2.0

    def test_unparsable_rate_limit(self, make_response, caplog):
        """Test that a malformed rate limit is logged and skipped."""
        with caplog.at_level(logging.WARNING, logger="traktkit.services.response"):
            response = parse_response(make_response(headers={"X-Ratelimit": "not json", "Retry-After": "50"}))

        assert response.limit.rate is None
        assert response.limit.retry == 50.0
        assert "Failed to parse rate limit" in caplog.text

    @pytest.mark.asyncio
    async def test_body_is_not_consumed(self, make_response):
        """Test that the body is still readable after enrichment."""
        response = parse_response(make_response(body=[{"title": "TRON: Legacy"}]))
        assert await response.json() == [{"title": "TRON: Legacy"}]
