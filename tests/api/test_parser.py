"""Tests for request construction from templates."""

import json

import pytest

from traktkit.api.parser import build_request, format_value, parse_body, parse_url, prepare_params
from traktkit.api.template import (
    TraktApiParams,
    TraktApiTemplate,
    TraktApiTemplateOptions,
    TraktApiTemplateParameters,
)
from traktkit.shared.constants import HttpMethod, TraktEndpoint
from traktkit.shared.errors import (
    ErrorCode,
    TraktFilterError,
    TraktInvalidParameterError,
    TraktValidationError,
)

ENDPOINT = TraktEndpoint.PRODUCTION


def _url(template, params):
    return parse_url(template, TraktApiParams.coerce(params), ENDPOINT)


class TestParseUrl:
    """Test URL, query, filter, pagination and extended construction."""

    def test_full_url(self, mock_template, mock_params, mock_url):
        """Test the URL built from every kind of parameter."""
        assert _url(mock_template, mock_params) == mock_url

    def test_missing_required_query(self, mock_template, mock_params):
        """Test that an empty required query parameter is missing."""
        with pytest.raises(TraktInvalidParameterError) as exc_info:
            _url(mock_template, {**mock_params, "requiredQuery": ""})

        assert exc_info.value.message == "Missing mandatory query parameter: 'requiredQuery'"
        assert exc_info.value.code == ErrorCode.INVALID_PARAMETER

    def test_missing_required_path(self, mock_template, mock_params):
        """Test that an empty required path parameter is missing."""
        with pytest.raises(TraktInvalidParameterError, match="Missing mandatory path parameter: 'requiredPath'"):
            _url(mock_template, {**mock_params, "requiredPath": ""})

    def test_none_required_path(self, mock_template, mock_params):
        """Test that None counts as absent."""
        with pytest.raises(TraktInvalidParameterError, match="'requiredPath'"):
            _url(mock_template, {**mock_params, "requiredPath": None})

    def test_optional_path_present(self, mock_template, mock_params):
        """Test that a provided optional path parameter is kept in place."""
        url = _url(mock_template, {**mock_params, "optionalPath": "weekly"})
        assert url.startswith(f"{ENDPOINT}/movies/requiredPath/weekly/popular?")

    def test_trailing_optional_path_removed(self):
        """Test that a trailing optional segment is removed with its slash."""
        template = TraktApiTemplate(
            method=HttpMethod.GET,
            url="/movies/:id/translations/:language",
            opts=TraktApiTemplateOptions(
                parameters=TraktApiTemplateParameters(path={"id": True, "language": False}),
            ),
        )
        assert _url(template, {"id": "tron"}) == f"{ENDPOINT}/movies/tron/translations"
        assert _url(template, {"id": "tron", "language": "fr"}) == f"{ENDPOINT}/movies/tron/translations/fr"

    def test_path_values_are_encoded(self):
        """Test that path values cannot inject path segments."""
        template = TraktApiTemplate(
            method=HttpMethod.GET,
            url="/movies/:id",
            opts=TraktApiTemplateOptions(parameters=TraktApiTemplateParameters(path={"id": True})),
        )
        assert _url(template, {"id": "a/b c"}) == f"{ENDPOINT}/movies/a%2Fb%20c"

    def test_optional_query_included_in_order(self, mock_template, mock_params):
        """Test that query parameters follow the template declaration order."""
        url = _url(mock_template, {**mock_params, "optionalQuery": "opt"})
        assert "?requiredQuery=requiredQuery&optionalQuery=opt&genres=" in url

    def test_unsupported_filter(self, mock_template, mock_params):
        """Test that a filter outside the template set raises a filter error."""
        with pytest.raises(TraktFilterError, match="Filter is not supported: 'status'"):
            _url(mock_template, {**mock_params, "filters": {"status": ["ended", "canceled"]}})

    def test_unknown_filter(self, mock_template, mock_params):
        """Test that an unknown filter name raises a filter error."""
        with pytest.raises(TraktFilterError, match="Filter is not supported: 'foo'"):
            _url(mock_template, {**mock_params, "filters": {"foo": "bar"}})

    def test_filters_on_template_without_filters(self, mock_template, mock_params):
        """Test that filters are rejected when the template allows none."""
        template = mock_template.with_options(filters=())
        with pytest.raises(TraktFilterError):
            _url(template, mock_params)

    def test_single_valued_filter_with_array(self, mock_template, mock_params):
        """Test that an array on a single-valued filter is a validation error."""
        with pytest.raises(TraktValidationError, match="Filter 'query' doesn't support multiple values."):
            _url(mock_template, {**mock_params, "filters": {"query": ["action", "adventure", "invalidFilter"]}})

    def test_invalid_filter_value(self):
        """Test that a value failing its rule is a validation error."""
        template = TraktApiTemplate(
            method=HttpMethod.GET,
            url="/movies/popular",
            opts=TraktApiTemplateOptions(filters=("ratings",)),
        )
        with pytest.raises(TraktValidationError, match="Filter 'ratings' is invalid: '0-200'"):
            _url(template, {"filters": {"ratings": "0-200"}})

    def test_scalar_filter(self, mock_template, mock_params):
        """Test a scalar filter value."""
        url = _url(mock_template, {**mock_params, "filters": {"query": "tron legacy"}})
        assert "&query=tron+legacy&" in url

    def test_pagination_fields_are_independent(self, mock_template, mock_params):
        """Test that page and limit are set independently."""
        url = _url(mock_template, {**mock_params, "pagination": {"limit": 5}})
        assert "limit=5" in url
        assert "page=" not in url

    def test_pagination_ignored_when_unsupported(self, mock_template, mock_params):
        """Test that pagination is dropped for templates without it."""
        template = mock_template.with_options(pagination=False)
        assert "page=" not in _url(template, mock_params)

    def test_invalid_extended(self, mock_template, mock_params):
        """Test that an unsupported extended value is rejected."""
        with pytest.raises(TraktInvalidParameterError, match="Invalid value 'comments', extended should be 'full'"):
            _url(mock_template, {**mock_params, "extended": "comments"})

    def test_extended_list(self, mock_template, mock_params):
        """Test that several extended modes are comma-joined."""
        template = mock_template.with_options(extended=("full", "episodes"))
        url = _url(template, {**mock_params, "extended": ["full", "episodes"]})
        assert url.endswith("extended=full%2Cepisodes")

    def test_invalid_extended_lists_allowed_values(self, mock_template, mock_params):
        """Test that the error names every allowed mode."""
        template = mock_template.with_options(extended=("full", "episodes"))
        with pytest.raises(TraktInvalidParameterError, match="extended should be 'full, episodes'"):
            _url(template, {**mock_params, "extended": ["full", "vip"]})

    def test_fail_fast_order(self, mock_template, mock_params):
        """Test that path errors are reported before query and filter errors."""
        params = {
            **mock_params,
            "requiredPath": "",
            "requiredQuery": "",
            "filters": {"status": "ended"},
        }
        with pytest.raises(TraktInvalidParameterError, match="path parameter"):
            _url(mock_template, params)

    def test_endpoint_trailing_slash(self, mock_template, mock_params, mock_url):
        """Test that a trailing slash on the endpoint is ignored."""
        params = TraktApiParams.coerce(mock_params)
        assert parse_url(mock_template, params, f"{ENDPOINT}/") == mock_url


class TestParseBody:
    """Test body serialization."""

    def test_required_body(self, mock_template, mock_params):
        """Test that only declared, present fields are serialized."""
        body = parse_body(mock_template, TraktApiParams.coerce(mock_params))
        assert body == '{"requiredBody":"requiredBody"}'

    def test_declaration_order(self, mock_template, mock_params):
        """Test that body fields follow the template declaration order."""
        params = {**mock_params, "optionalBody": "optionalBody"}
        body = parse_body(mock_template, TraktApiParams.coerce(params))
        assert body == '{"requiredBody":"requiredBody","optionalBody":"optionalBody"}'

    def test_missing_required_body(self, mock_template, mock_params):
        """Test that a missing required field raises."""
        params = {key: value for key, value in mock_params.items() if key != "requiredBody"}
        with pytest.raises(TraktInvalidParameterError, match="Missing mandatory body parameter: 'requiredBody'"):
            parse_body(mock_template, TraktApiParams.coerce({**params, "optionalBody": "optionalBody"}))

    def test_no_body(self):
        """Test that templates without a body produce none."""
        template = TraktApiTemplate(method=HttpMethod.GET, url="/networks")
        assert parse_body(template, TraktApiParams()) is None

    def test_structured_values(self):
        """Test that nested values are serialized as JSON."""
        template = TraktApiTemplate(method=HttpMethod.POST, url="/sync/history", body={"movies": False})
        body = parse_body(template, TraktApiParams.coerce({"movies": [{"ids": {"trakt": 1}}]}))
        assert json.loads(body) == {"movies": [{"ids": {"trakt": 1}}]}


class TestBuildRequest:
    """Test hooks and the combined request."""

    def test_build_request(self, mock_template, mock_params, mock_url):
        """Test URL and body together."""
        request = build_request(mock_template, mock_params, ENDPOINT)
        assert request.url == mock_url
        assert request.body == '{"requiredBody":"requiredBody"}'

    def test_hooks_run_validate_then_transform(self):
        """Test that validate sees raw params and transform feeds the URL."""
        calls = []

        def validate(params):
            calls.append(("validate", params.get("id")))
            return True

        def transform(params):
            calls.append(("transform", params.get("id")))
            return params.with_values(id=params.get("id").lower())

        template = TraktApiTemplate(
            method=HttpMethod.GET,
            url="/movies/:id",
            opts=TraktApiTemplateOptions(parameters=TraktApiTemplateParameters(path={"id": True})),
            validate=validate,
            transform=transform,
        )
        request = build_request(template, {"id": "TRON"}, ENDPOINT)

        assert calls == [("validate", "TRON"), ("transform", "TRON")]
        assert request.url == f"{ENDPOINT}/movies/tron"

    def test_prepare_params_splits_reserved_keys(self, mock_template, mock_params):
        """Test that reserved keys are not flat values."""
        params = prepare_params(mock_template, mock_params)
        assert params.extended == "full"
        assert params.pagination.page == 1
        assert params.pagination.limit == 10
        assert "filters" not in params
        assert params.get("requiredPath") == "requiredPath"


class TestFormatValue:
    """Test query value rendering."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (["a", "b"], "a,b"),
            (True, "true"),
            (False, "false"),
            (10, "10"),
            ("x", "x"),
        ],
    )
    def test_format_value(self, value, expected):
        """Test arrays, booleans and scalars."""
        assert format_value(value) == expected
