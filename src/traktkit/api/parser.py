"""Request construction from an endpoint template and call parameters.

Validation is fail-fast, in a fixed order: path, query, filters,
pagination, extended, body. Nothing here performs network I/O.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote, urlencode

from traktkit.api.filters import TraktApiFilterValidator, is_array_value, is_filter
from traktkit.api.template import (
    TraktApiParams,
    TraktApiRequest,
    TraktApiTemplate,
)
from traktkit.shared.errors import (
    ErrorContext,
    TraktFilterError,
    TraktInvalidParameterError,
    TraktValidationError,
)

_PLACEHOLDER = re.compile(r"/:([A-Za-z_][A-Za-z0-9_]*)")


def is_absent(value: Any) -> bool:
    """None and the empty string both count as a missing value."""
    return value is None or value == ""


def format_value(value: Any) -> str:
    """Render a scalar or array value as a query string value."""
    if is_array_value(value):
        return ",".join(format_value(v) for v in value)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _missing(kind: str, name: str, operation: str) -> TraktInvalidParameterError:
    return TraktInvalidParameterError(
        f"Missing mandatory {kind} parameter: '{name}'",
        ErrorContext(operation=operation, additional_data={"parameter": name}),
    )


def prepare_params(
    template: TraktApiTemplate,
    params: TraktApiParams | Mapping[str, Any] | None = None,
) -> TraktApiParams:
    """Coerce parameters and run the template validate/transform hooks."""
    _params = TraktApiParams.coerce(params)
    if template.validate is not None:
        template.validate(_params)
    if template.transform is not None:
        _params = template.transform(_params)
    return _params


def _parse_path(template: TraktApiTemplate, params: TraktApiParams) -> str:
    path = template.url.split("?", 1)[0]
    declared = template.opts.parameters.path

    def substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        value = params.get(name)
        if is_absent(value):
            if declared.get(name, True):
                raise _missing("path", name, "parse_url")
            return ""
        return "/" + quote(format_value(value), safe="")

    return _PLACEHOLDER.sub(substitute, path) or "/"


def _declared_query(template: TraktApiTemplate) -> list[str]:
    """Query parameter names, template URL order first."""
    names: list[str] = []
    if "?" in template.url:
        for pair in template.url.split("?", 1)[1].split("&"):
            name = pair.split("=", 1)[0]
            if name and name not in names:
                names.append(name)
    for name in template.opts.parameters.query:
        if name not in names:
            names.append(name)
    return names


def _parse_filters(template: TraktApiTemplate, params: TraktApiParams, query: dict[str, str]) -> None:
    for name, value in (params.filters or {}).items():
        if not is_filter(name) or name not in template.opts.filters:
            raise TraktFilterError(
                f"Filter is not supported: '{name}'",
                ErrorContext(operation="parse_url", additional_data={"filter": name}),
            )
        if is_array_value(value) and not TraktApiFilterValidator.supports_multiple(name):
            raise TraktValidationError(
                f"Filter '{name}' doesn't support multiple values.",
                ErrorContext(operation="parse_url", additional_data={"filter": name}),
            )
        if not TraktApiFilterValidator.validate(name, value, allow_array=True):
            raise TraktValidationError(
                f"Filter '{name}' is invalid: '{format_value(value)}'",
                ErrorContext(operation="parse_url", additional_data={"filter": name}),
            )
        query[name] = format_value(value)


def _parse_extended(template: TraktApiTemplate, params: TraktApiParams, query: dict[str, str]) -> None:
    allowed = template.opts.extended
    requested = [params.extended] if isinstance(params.extended, str) else list(params.extended or ())
    invalid = [mode for mode in requested if mode not in allowed]
    if invalid:
        raise TraktInvalidParameterError(
            f"Invalid value '{format_value(params.extended)}', extended should be '{', '.join(allowed)}'",
            ErrorContext(operation="parse_url", additional_data={"extended": format_value(invalid)}),
        )
    query["extended"] = format_value(requested)


def parse_url(template: TraktApiTemplate, params: TraktApiParams, endpoint: str) -> str:
    """Build the absolute request URL.

    Args:
        template: Endpoint template
        params: Call parameters, already through the template hooks
        endpoint: Base API URL

    Returns:
        Absolute URL with the query string

    Raises:
        TraktInvalidParameterError: Missing path or query parameter, invalid extended value
        TraktFilterError: Filter not supported by the endpoint
        TraktValidationError: Invalid filter value or multiplicity
    """
    path = _parse_path(template, params)

    query: dict[str, str] = {}
    required_query = template.opts.parameters.query
    for name in _declared_query(template):
        value = params.get(name)
        if is_absent(value):
            if required_query.get(name, False):
                raise _missing("query", name, "parse_url")
            continue
        query[name] = format_value(value)

    if params.filters:
        _parse_filters(template, params, query)

    if template.opts.pagination and params.pagination is not None:
        if params.pagination.page is not None:
            query["page"] = str(params.pagination.page)
        if params.pagination.limit is not None:
            query["limit"] = str(params.pagination.limit)

    if template.opts.extended and params.extended:
        _parse_extended(template, params, query)

    url = endpoint.rstrip("/") + path
    if query:
        url = f"{url}?{urlencode(query)}"
    return url


def parse_body(template: TraktApiTemplate, params: TraktApiParams) -> str | None:
    """Serialize the declared body fields to compact JSON.

    Returns:
        JSON string in declaration order, or None if the template has no body

    Raises:
        TraktInvalidParameterError: A required body field is absent
    """
    if template.body is None:
        return None

    body: dict[str, Any] = {}
    for name, required in template.body.items():
        value = params.get(name)
        if is_absent(value):
            if required:
                raise _missing("body", name, "parse_body")
            continue
        body[name] = value
    return json.dumps(body, separators=(",", ":"), default=str)


def build_request(
    template: TraktApiTemplate,
    params: TraktApiParams | Mapping[str, Any] | None,
    endpoint: str,
) -> TraktApiRequest:
    """Run the hooks then build the URL and body of a request.

    Example:
        >>> build_request(TRAKT_API["movies.summary"], {"id": "tron-legacy-2010"}, TraktEndpoint.PRODUCTION).url
        'https://api.trakt.tv/movies/tron-legacy-2010'
    """
    _params = prepare_params(template, params)
    return TraktApiRequest(
        url=parse_url(template, _params, endpoint),
        body=parse_body(template, _params),
    )
