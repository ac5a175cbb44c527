"""Search endpoints.

Text search takes its terms through the ``query`` filter, for example
``{"type": "movie,show", "filters": {"query": "tron"}}``.

See https://trakt.docs.apiary.io/#reference/search
"""

from __future__ import annotations

from traktkit.api.filters import TraktApiShowFilterValues
from traktkit.api.template import (
    TraktApiTemplate,
    TraktApiTemplateOptions,
    TraktApiTemplateParameters,
)
from traktkit.shared.constants import HttpMethod, TraktApiExtended

ENDPOINTS: dict[str, TraktApiTemplate] = {
    "text": TraktApiTemplate(
        method=HttpMethod.GET,
        url="/search/:type?fields=",
        opts=TraktApiTemplateOptions(
            pagination=True,
            extended=(TraktApiExtended.FULL,),
            filters=TraktApiShowFilterValues,
            parameters=TraktApiTemplateParameters(
                path={"type": True},
                query={"fields": False},
            ),
        ),
    ),
    # id_type is one of trakt, imdb, tmdb or tvdb
    "id": TraktApiTemplate(
        method=HttpMethod.GET,
        url="/search/:id_type/:id?type=",
        opts=TraktApiTemplateOptions(
            pagination=True,
            extended=(TraktApiExtended.FULL,),
            parameters=TraktApiTemplateParameters(
                path={"id_type": True, "id": True},
                query={"type": False},
            ),
        ),
    ),
}
