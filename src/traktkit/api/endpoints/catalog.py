"""Reference lists worth caching: certifications, countries, genres, languages, networks."""

from __future__ import annotations

from traktkit.api.template import (
    TraktApiTemplate,
    TraktApiTemplateOptions,
    TraktApiTemplateParameters,
)
from traktkit.shared.constants import HttpMethod


def _by_type(url: str) -> TraktApiTemplate:
    """List endpoint taking a ``type`` (movies or shows) path parameter."""
    return TraktApiTemplate(
        method=HttpMethod.GET,
        url=url,
        opts=TraktApiTemplateOptions(
            parameters=TraktApiTemplateParameters(path={"type": True}),
        ),
    )


ENDPOINTS: dict[str, TraktApiTemplate] = {
    # Only US certifications are currently returned.
    "certifications": _by_type("/certifications/:type"),
    "countries": _by_type("/countries/:type"),
    "genres": _by_type("/genres/:type"),
    "languages": _by_type("/languages/:type"),
    "networks": TraktApiTemplate(
        method=HttpMethod.GET,
        url="/networks",
        opts=TraktApiTemplateOptions(pagination="optional"),
    ),
}
