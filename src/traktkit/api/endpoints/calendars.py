"""Calendar endpoints.

Calendars return shows or movies airing during a period. ``start_date``
defaults to today and ``days`` to 7 (33 at most). All dates are UTC.
The ``my`` calendars require OAuth; the ``all`` calendars do not.

See https://trakt.docs.apiary.io/#reference/calendars
"""

from __future__ import annotations

from dataclasses import replace

from traktkit.api.filters import TraktApiCommonFilterValues
from traktkit.api.template import (
    TraktApiTemplate,
    TraktApiTemplateOptions,
    TraktApiTemplateParameters,
)
from traktkit.api.validators import DATE_ISO8601_SHORT, get_date_transform, get_date_validate
from traktkit.shared.constants import HttpMethod, TraktApiExtended

_opts = TraktApiTemplateOptions(
    extended=(TraktApiExtended.FULL,),
    filters=TraktApiCommonFilterValues,
    parameters=TraktApiTemplateParameters(
        path={"start_date": False, "days": False},
    ),
)
_auth_opts = replace(_opts, auth=True)

_validate = get_date_validate("start_date", DATE_ISO8601_SHORT)
_transform = get_date_transform("start_date", short=True)


def _calendar(url: str, auth: bool) -> TraktApiTemplate:
    return TraktApiTemplate(
        method=HttpMethod.GET,
        url=url,
        opts=_auth_opts if auth else _opts,
        validate=_validate,
        transform=_transform,
    )


ENDPOINTS: dict[str, TraktApiTemplate] = {
    "my.shows.get": _calendar("/calendars/my/shows/:start_date/:days", auth=True),
    "my.shows.new": _calendar("/calendars/my/shows/new/:start_date/:days", auth=True),
    "my.shows.premieres": _calendar("/calendars/my/shows/premieres/:start_date/:days", auth=True),
    "my.shows.finales": _calendar("/calendars/my/shows/finales/:start_date/:days", auth=True),
    "my.movies": _calendar("/calendars/my/movies/:start_date/:days", auth=True),
    "my.dvd": _calendar("/calendars/my/dvd/:start_date/:days", auth=True),
    "all.shows.get": _calendar("/calendars/all/shows/:start_date/:days", auth=False),
    "all.shows.new": _calendar("/calendars/all/shows/new/:start_date/:days", auth=False),
    "all.shows.premieres": _calendar("/calendars/all/shows/premieres/:start_date/:days", auth=False),
    "all.shows.finales": _calendar("/calendars/all/shows/finales/:start_date/:days", auth=False),
    "all.movies": _calendar("/calendars/all/movies/:start_date/:days", auth=False),
    "all.dvd": _calendar("/calendars/all/dvd/:start_date/:days", auth=False),
}
