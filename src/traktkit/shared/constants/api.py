"""Trakt API Constants.

Endpoints, websites and fixed values of the Trakt API.
"""


class TraktEndpoint:
    """Base API endpoints."""

    PRODUCTION = "https://api.trakt.tv"
    STAGING = "https://api-staging.trakt.tv"


class TraktWebsite:
    """Trakt websites."""

    PRODUCTION = "https://trakt.tv"
    STAGING = "https://staging.trakt.tv"


class TraktVerification:
    """Device activation pages."""

    URL = "https://trakt.tv/activate"

    @staticmethod
    def code(user_code: str) -> str:
        """Activation URL with the user code pre-filled."""
        return f"{TraktVerification.URL}/{user_code}"


class HttpMethod:
    """HTTP methods used by the endpoint registry."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class TraktApiExtended:
    """Values accepted by the ``extended`` query parameter."""

    FULL = "full"
    METADATA = "metadata"
    EPISODES = "episodes"
    NO_SEASONS = "noseasons"
    GUEST_STARS = "guest_stars"
    VIP = "vip"
    COMMENTS = "comments"


class TraktGrantType:
    """OAuth grant types."""

    AUTHORIZATION_CODE = "authorization_code"
    REFRESH_TOKEN = "refresh_token"  # noqa: S105  # nosec B105 - grant type constant


class RedirectMode:
    """Transport redirect modes."""

    FOLLOW = "follow"
    MANUAL = "manual"


class ResponseType:
    """Response types reported by transports."""

    BASIC = "basic"
    OPAQUE_REDIRECT = "opaqueredirect"


class ClientDefaults:
    """Default client values."""

    USER_AGENT = "traktkit"
    TIMEOUT = 30
