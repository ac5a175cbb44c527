"""Scrobble playback progress.

See https://trakt.docs.apiary.io/#reference/scrobble
"""

from __future__ import annotations

from traktkit.api.template import TraktApiTemplate, TraktApiTemplateOptions
from traktkit.shared.constants import HttpMethod


def _scrobble(action: str) -> TraktApiTemplate:
    return TraktApiTemplate(
        method=HttpMethod.POST,
        url=f"/scrobble/{action}",
        opts=TraktApiTemplateOptions(auth=True),
        body={
            "movie": False,
            "episode": False,
            "show": False,
            "progress": True,
            "app_version": False,
            "app_date": False,
        },
    )


ENDPOINTS: dict[str, TraktApiTemplate] = {
    "start": _scrobble("start"),
    "pause": _scrobble("pause"),
    "stop": _scrobble("stop"),
}
