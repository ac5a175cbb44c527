"""Authentication state and OAuth payload models."""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass, replace
from typing import Any, Callable, Union

from pydantic import BaseModel, ConfigDict


def now_ms() -> int:
    """Current epoch time in milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class TraktClientAuthentication:
    """Client authentication state.

    Attributes:
        access_token: OAuth access token
        refresh_token: OAuth refresh token
        expires: Absolute expiry, epoch milliseconds
        created: Token creation, epoch milliseconds
        state: CSRF state of the pending authorization redirect
    """

    access_token: str | None = None
    refresh_token: str | None = None
    expires: int | None = None
    created: int | None = None
    state: str | None = None

    def is_expired(self, now: int | None = None) -> bool:
        """Whether ``expires`` is set and not in the future."""
        if self.expires is None:
            return False
        return self.expires <= (now if now is not None else now_ms())

    def update(self, **changes: Any) -> TraktClientAuthentication:
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def __repr__(self) -> str:
        return (
            f"TraktClientAuthentication(access_token={'****' if self.access_token else None}, "
            f"refresh_token={'****' if self.refresh_token else None}, "
            f"expires={self.expires}, created={self.created}, state={self.state!r})"
        )


AuthUpdater = Union[
    TraktClientAuthentication,
    Callable[[TraktClientAuthentication], TraktClientAuthentication],
]


class TraktAuthentication(BaseModel):
    """Token endpoint payload."""

    model_config = ConfigDict(extra="allow")

    access_token: str
    token_type: str = "bearer"
    expires_in: int
    refresh_token: str | None = None
    scope: str | None = None
    created_at: int


class TraktDeviceAuthentication(BaseModel):
    """Device code endpoint payload.

    ``expires_in`` and ``interval`` are durations in seconds.
    """

    model_config = ConfigDict(extra="allow")

    device_code: str
    user_code: str
    verification_url: str
    expires_in: int
    interval: float


def parse_auth_response(
    response: TraktAuthentication,
    auth: TraktClientAuthentication | None = None,
) -> TraktClientAuthentication:
    """Merge a token payload into the authentication state.

    Expiry is computed once, as an absolute time.
    """
    return (auth or TraktClientAuthentication()).update(
        access_token=response.access_token,
        refresh_token=response.refresh_token,
        created=response.created_at * 1000,
        expires=(response.created_at + response.expires_in) * 1000,
    )
