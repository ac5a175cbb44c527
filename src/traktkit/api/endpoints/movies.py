"""Movie endpoints.

``id`` is a Trakt id, Trakt slug or IMDB id.

See https://trakt.docs.apiary.io/#reference/movies
"""

from __future__ import annotations

from traktkit.api.filters import TraktApiMovieFilterValues
from traktkit.api.template import (
    TraktApiTemplate,
    TraktApiTemplateOptions,
    TraktApiTemplateParameters,
)
from traktkit.api.validators import get_date_transform, get_date_validate
from traktkit.shared.constants import HttpMethod, TraktApiExtended

_FULL = (TraktApiExtended.FULL,)


def _list(url: str, path: dict[str, bool] | None = None) -> TraktApiTemplate:
    """Paginated and filterable movie list."""
    return TraktApiTemplate(
        method=HttpMethod.GET,
        url=url,
        opts=TraktApiTemplateOptions(
            pagination=True,
            extended=_FULL,
            filters=TraktApiMovieFilterValues,
            parameters=TraktApiTemplateParameters(path=path or {}),
        ),
    )


def _by_id(
    url: str,
    path: dict[str, bool] | None = None,
    extended: tuple[str, ...] = (),
    pagination: bool = False,
    query: dict[str, bool] | None = None,
) -> TraktApiTemplate:
    return TraktApiTemplate(
        method=HttpMethod.GET,
        url=url,
        opts=TraktApiTemplateOptions(
            pagination=pagination,
            extended=extended,
            parameters=TraktApiTemplateParameters(
                path={"id": True, **(path or {})},
                query=query or {},
            ),
        ),
    )


_period = {"period": False}

ENDPOINTS: dict[str, TraktApiTemplate] = {
    "trending": _list("/movies/trending"),
    "popular": _list("/movies/popular"),
    "favorited": _list("/movies/favorited/:period", _period),
    "played": _list("/movies/played/:period", _period),
    "watched": _list("/movies/watched/:period", _period),
    "collected": _list("/movies/collected/:period", _period),
    "anticipated": _list("/movies/anticipated"),
    "boxoffice": TraktApiTemplate(
        method=HttpMethod.GET,
        url="/movies/boxoffice",
        opts=TraktApiTemplateOptions(extended=_FULL),
    ),
    "updates": TraktApiTemplate(
        method=HttpMethod.GET,
        url="/movies/updates/:start_date",
        opts=TraktApiTemplateOptions(
            pagination=True,
            parameters=TraktApiTemplateParameters(path={"start_date": False}),
        ),
        validate=get_date_validate("start_date"),
        transform=get_date_transform("start_date"),
    ),
    "summary": _by_id("/movies/:id", extended=_FULL),
    "aliases": _by_id("/movies/:id/aliases"),
    "releases": _by_id("/movies/:id/releases/:country", {"country": False}),
    "translations": _by_id("/movies/:id/translations/:language", {"language": False}),
    "comments": _by_id("/movies/:id/comments/:sort", {"sort": False}, pagination=True),
    "lists": _by_id("/movies/:id/lists/:type/:sort", {"type": False, "sort": False}, pagination=True),
    "people": _by_id("/movies/:id/people", extended=(TraktApiExtended.FULL, TraktApiExtended.GUEST_STARS)),
    "ratings": _by_id("/movies/:id/ratings"),
    "related": _by_id("/movies/:id/related", extended=_FULL, pagination=True),
    "stats": _by_id("/movies/:id/stats"),
    "studios": _by_id("/movies/:id/studios"),
    "watching": _by_id("/movies/:id/watching", extended=_FULL),
}
