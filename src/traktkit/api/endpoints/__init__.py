"""Endpoint registry.

``TRAKT_API`` maps dotted logical names (``movies.summary``,
``calendars.my.shows.get``, ``authentication.oauth.token.code``...) to
endpoint templates. ``MINIMAL_TRAKT_API`` only holds the authentication
endpoints.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from traktkit.api.template import TraktApiTemplate

from . import authentication, calendars, catalog, checkin, movies, scrobble, search, shows, sync


def _prefixed(prefix: str, endpoints: Mapping[str, TraktApiTemplate]) -> dict[str, TraktApiTemplate]:
    if not prefix:
        return dict(endpoints)
    return {f"{prefix}.{name}": template for name, template in endpoints.items()}


MINIMAL_TRAKT_API: Mapping[str, TraktApiTemplate] = MappingProxyType(
    _prefixed("authentication", authentication.ENDPOINTS),
)

TRAKT_API: Mapping[str, TraktApiTemplate] = MappingProxyType(
    {
        **MINIMAL_TRAKT_API,
        **_prefixed("calendars", calendars.ENDPOINTS),
        **_prefixed("", catalog.ENDPOINTS),
        **_prefixed("checkin", checkin.ENDPOINTS),
        **_prefixed("movies", movies.ENDPOINTS),
        **_prefixed("scrobble", scrobble.ENDPOINTS),
        **_prefixed("search", search.ENDPOINTS),
        **_prefixed("shows", shows.ENDPOINTS),
        **_prefixed("sync", sync.ENDPOINTS),
    }
)

__all__ = ["MINIMAL_TRAKT_API", "TRAKT_API"]
