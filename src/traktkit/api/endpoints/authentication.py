"""OAuth and device authentication endpoints.

See https://trakt.docs.apiary.io/#reference/authentication-oauth
and https://trakt.docs.apiary.io/#reference/authentication-devices
"""

from __future__ import annotations

from traktkit.api.template import (
    TraktApiTemplate,
    TraktApiTemplateOptions,
    TraktApiTemplateParameters,
)
from traktkit.shared.constants import HttpMethod, RedirectMode

ENDPOINTS: dict[str, TraktApiTemplate] = {
    # Redirects the user to the Trakt sign in and authorization page.
    "oauth.authorize": TraktApiTemplate(
        method=HttpMethod.GET,
        url="/oauth/authorize?response_type=&client_id=&redirect_uri=&state=&signup=&prompt=",
        opts=TraktApiTemplateOptions(
            parameters=TraktApiTemplateParameters(
                query={
                    "response_type": True,
                    "client_id": True,
                    "redirect_uri": True,
                    "state": False,
                    "signup": False,
                    "prompt": False,
                },
            ),
        ),
        init={"redirect": RedirectMode.MANUAL},
    ),
    # Exchanges an authorization code for tokens.
    "oauth.token.code": TraktApiTemplate(
        method=HttpMethod.POST,
        url="/oauth/token",
        body={
            "client_id": True,
            "client_secret": True,
            "redirect_uri": True,
            "grant_type": True,
            "code": True,
        },
    ),
    # Exchanges a refresh token for new tokens.
    "oauth.token.refresh": TraktApiTemplate(
        method=HttpMethod.POST,
        url="/oauth/token",
        body={
            "client_id": True,
            "client_secret": True,
            "redirect_uri": True,
            "grant_type": True,
            "refresh_token": True,
        },
    ),
    "oauth.revoke": TraktApiTemplate(
        method=HttpMethod.POST,
        url="/oauth/revoke",
        body={
            "token": True,
            "client_id": True,
            "client_secret": True,
        },
    ),
    # Generates a device code and a user code to display.
    "device.code": TraktApiTemplate(
        method=HttpMethod.POST,
        url="/oauth/device/code",
        body={"client_id": True},
    ),
    # Polled at the returned interval until the user approves the device.
    "device.token": TraktApiTemplate(
        method=HttpMethod.POST,
        url="/oauth/device/token",
        body={
            "client_id": True,
            "client_secret": True,
            "code": True,
        },
    ),
}
