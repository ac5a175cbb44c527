"""Check in to a movie or episode.

See https://trakt.docs.apiary.io/#reference/checkin
"""

from __future__ import annotations

from traktkit.api.template import TraktApiTemplate, TraktApiTemplateOptions
from traktkit.shared.constants import HttpMethod

ENDPOINTS: dict[str, TraktApiTemplate] = {
    # A 409 means a check in is already in progress.
    "add": TraktApiTemplate(
        method=HttpMethod.POST,
        url="/checkin",
        opts=TraktApiTemplateOptions(auth=True),
        body={
            "movie": False,
            "episode": False,
            "show": False,
            "sharing": False,
            "message": False,
            "venue_id": False,
            "venue_name": False,
            "app_version": False,
            "app_date": False,
        },
    ),
    "delete": TraktApiTemplate(
        method=HttpMethod.DELETE,
        url="/checkin",
        opts=TraktApiTemplateOptions(auth=True),
    ),
}
