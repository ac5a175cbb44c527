"""Show, season and episode endpoints.

See https://trakt.docs.apiary.io/#reference/shows
"""

from __future__ import annotations

from traktkit.api.filters import TraktApiShowFilterValues
from traktkit.api.template import (
    TraktApiTemplate,
    TraktApiTemplateOptions,
    TraktApiTemplateParameters,
)
from traktkit.shared.constants import HttpMethod, TraktApiExtended

_FULL = (TraktApiExtended.FULL,)


def _list(url: str, path: dict[str, bool] | None = None) -> TraktApiTemplate:
    return TraktApiTemplate(
        method=HttpMethod.GET,
        url=url,
        opts=TraktApiTemplateOptions(
            pagination=True,
            extended=_FULL,
            filters=TraktApiShowFilterValues,
            parameters=TraktApiTemplateParameters(path=path or {}),
        ),
    )


def _by_id(
    url: str,
    path: dict[str, bool] | None = None,
    extended: tuple[str, ...] = (),
    query: dict[str, bool] | None = None,
    auth: bool | None = None,
    pagination: bool = False,
) -> TraktApiTemplate:
    return TraktApiTemplate(
        method=HttpMethod.GET,
        url=url,
        opts=TraktApiTemplateOptions(
            auth=auth,
            pagination=pagination,
            extended=extended,
            parameters=TraktApiTemplateParameters(
                path={"id": True, **(path or {})},
                query=query or {},
            ),
        ),
    )


_period = {"period": False}
_season = {"season": True}
_episode = {"season": True, "episode": True}

ENDPOINTS: dict[str, TraktApiTemplate] = {
    "trending": _list("/shows/trending"),
    "popular": _list("/shows/popular"),
    "favorited": _list("/shows/favorited/:period", _period),
    "played": _list("/shows/played/:period", _period),
    "watched": _list("/shows/watched/:period", _period),
    "collected": _list("/shows/collected/:period", _period),
    "anticipated": _list("/shows/anticipated"),
    "summary": _by_id("/shows/:id", extended=_FULL),
    "aliases": _by_id("/shows/:id/aliases"),
    "translations": _by_id("/shows/:id/translations/:language", {"language": False}),
    "people": _by_id("/shows/:id/people", extended=(TraktApiExtended.FULL, TraktApiExtended.GUEST_STARS)),
    "ratings": _by_id("/shows/:id/ratings"),
    "related": _by_id("/shows/:id/related", extended=_FULL, pagination=True),
    "stats": _by_id("/shows/:id/stats"),
    "next_episode": _by_id("/shows/:id/next_episode", extended=_FULL),
    "last_episode": _by_id("/shows/:id/last_episode", extended=_FULL),
    "progress.watched": _by_id(
        "/shows/:id/progress/watched?hidden=&specials=&count_specials=&last_activity=",
        query={"hidden": False, "specials": False, "count_specials": False, "last_activity": False},
        auth=True,
    ),
    "progress.collection": _by_id(
        "/shows/:id/progress/collection?hidden=&specials=&count_specials=",
        query={"hidden": False, "specials": False, "count_specials": False},
        auth=True,
    ),
    "seasons.summary": _by_id(
        "/shows/:id/seasons",
        extended=(TraktApiExtended.FULL, TraktApiExtended.EPISODES),
    ),
    "seasons.season": _by_id(
        "/shows/:id/seasons/:season?translations=",
        _season,
        extended=_FULL,
        query={"translations": False},
    ),
    "episodes.summary": _by_id("/shows/:id/seasons/:season/episodes/:episode", _episode, extended=_FULL),
    "episodes.ratings": _by_id("/shows/:id/seasons/:season/episodes/:episode/ratings", _episode),
    "episodes.stats": _by_id("/shows/:id/seasons/:season/episodes/:episode/stats", _episode),
}
