"""Sync endpoints for the authenticated user's history, watchlist and ratings.

Every sync endpoint requires OAuth. Bodies carry ``movies``, ``shows``,
``seasons`` and ``episodes`` arrays of Trakt objects.

See https://trakt.docs.apiary.io/#reference/sync
"""

from __future__ import annotations

from traktkit.api.template import (
    PaginationSupport,
    TraktApiTemplate,
    TraktApiTemplateOptions,
    TraktApiTemplateParameters,
)
from traktkit.api.validators import get_date_transform, get_date_validate
from traktkit.shared.constants import HttpMethod, TraktApiExtended

_FULL = (TraktApiExtended.FULL,)

_items_body = {
    "movies": False,
    "shows": False,
    "seasons": False,
    "episodes": False,
}


def _get(
    url: str,
    path: dict[str, bool] | None = None,
    query: dict[str, bool] | None = None,
    pagination: PaginationSupport = False,
    extended: tuple[str, ...] = _FULL,
) -> TraktApiTemplate:
    return TraktApiTemplate(
        method=HttpMethod.GET,
        url=url,
        opts=TraktApiTemplateOptions(
            auth=True,
            pagination=pagination,
            extended=extended,
            parameters=TraktApiTemplateParameters(path=path or {}, query=query or {}),
        ),
    )


def _post(url: str, body: dict[str, bool] | None = None) -> TraktApiTemplate:
    return TraktApiTemplate(
        method=HttpMethod.POST,
        url=url,
        opts=TraktApiTemplateOptions(auth=True),
        body=body if body is not None else _items_body,
    )


ENDPOINTS: dict[str, TraktApiTemplate] = {
    "last_activities": _get("/sync/last_activities", extended=()),
    "playback.get": _get(
        "/sync/playback/:type?start_at=&end_at=",
        path={"type": False},
        query={"start_at": False, "end_at": False},
        pagination="optional",
        extended=(),
    ),
    "playback.remove": TraktApiTemplate(
        method=HttpMethod.DELETE,
        url="/sync/playback/:id",
        opts=TraktApiTemplateOptions(
            auth=True,
            parameters=TraktApiTemplateParameters(path={"id": True}),
        ),
    ),
    "collection.get": _get("/sync/collection/:type", path={"type": True}, extended=(TraktApiExtended.METADATA,)),
    "collection.add": _post("/sync/collection"),
    "collection.remove": _post("/sync/collection/remove"),
    "watched": _get("/sync/watched/:type", path={"type": True}, extended=(TraktApiExtended.FULL, TraktApiExtended.NO_SEASONS)),
    "history.get": TraktApiTemplate(
        method=HttpMethod.GET,
        url="/sync/history/:type/:id?start_at=&end_at=",
        opts=TraktApiTemplateOptions(
            auth=True,
            pagination=True,
            extended=_FULL,
            parameters=TraktApiTemplateParameters(
                path={"type": False, "id": False},
                query={"start_at": False, "end_at": False},
            ),
        ),
        validate=get_date_validate("start_at"),
        transform=get_date_transform("start_at"),
    ),
    "history.add": _post("/sync/history"),
    "history.remove": _post("/sync/history/remove", {**_items_body, "ids": False}),
    "ratings.get": _get("/sync/ratings/:type/:rating", path={"type": False, "rating": False}, pagination="optional"),
    "ratings.add": _post("/sync/ratings"),
    "ratings.remove": _post("/sync/ratings/remove"),
    "watchlist.get": _get("/sync/watchlist/:type/:sort", path={"type": False, "sort": False}, pagination="optional"),
    "watchlist.add": _post("/sync/watchlist"),
    "watchlist.remove": _post("/sync/watchlist/remove"),
    "favorites.get": _get("/sync/favorites/:type/:sort", path={"type": False, "sort": False}, pagination="optional"),
    "favorites.add": _post("/sync/favorites"),
    "favorites.remove": _post("/sync/favorites/remove"),
}
