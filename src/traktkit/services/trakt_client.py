"""Trakt client with OAuth and device authentication.

``TraktClient`` adds the authentication lifecycle on top of
``BaseTraktClient``: authorization redirect, code and refresh-token
exchange, import, revocation and cancellable device-code polling.
"""

from __future__ import annotations

import logging
import secrets
from collections.abc import Mapping, MutableMapping
from typing import Any, Union

from traktkit.api.endpoints import TRAKT_API
from traktkit.api.template import TraktApiTemplate
from traktkit.config.models.client_settings import TraktClientSettings
from traktkit.config.models.settings import Settings
from traktkit.services.auth_models import (
    TraktAuthentication,
    TraktClientAuthentication,
    TraktDeviceAuthentication,
    now_ms,
    parse_auth_response,
)
from traktkit.services.base_client import BaseTraktClient
from traktkit.services.cache import CacheEntry
from traktkit.services.polling import CancellablePolling
from traktkit.services.response import TraktApiResponse
from traktkit.services.transport import RequestInit, Transport
from traktkit.shared.constants import TraktApiHeaders, TraktGrantType
from traktkit.shared.errors import (
    ErrorContext,
    TraktApiResponseError,
    TraktInvalidCsrfError,
    TraktInvalidParameterError,
    TraktPollingExpiredError,
    TraktRateLimitError,
    TraktUnauthorizedError,
)
from traktkit.shared.logging import (
    log_operation_error,
    log_operation_success,
    setup_structured_logger,
)

logger = logging.getLogger(__name__)

DevicePollInput = Union[TraktDeviceAuthentication, Mapping[str, Any], None]


def handle_error(error: TraktApiResponseError) -> TraktApiResponseError:
    """Translate 401 and 429 API errors raised during an OAuth exchange.

    Errors with any other status are returned unchanged.
    """
    if isinstance(error, (TraktUnauthorizedError, TraktRateLimitError)):
        return error

    response = error.response
    if response.status == 401:
        return TraktUnauthorizedError(
            response.headers.get(TraktApiHeaders.AUTHENTICATE) or response.reason,
            response,
        )
    if response.status == 429:
        return TraktRateLimitError(
            response.headers.get(TraktApiHeaders.X_RATELIMIT) or response.reason,
            response,
        )
    return error


class TraktClient(BaseTraktClient):
    """Trakt API client with authentication state management.

    Example:
        >>> client = TraktClient(TraktClientSettings(client_id="...", client_secret="..."))
        >>> codes = await client.get_device_code()
        >>> print(codes.verification_url, codes.user_code)
        >>> auth = await client.poll_with_device_code()
    """

    def __init__(
        self,
        settings: TraktClientSettings,
        authentication: TraktClientAuthentication | None = None,
        api: Mapping[str, TraktApiTemplate] = TRAKT_API,
        transport: Transport | None = None,
        cache_store: MutableMapping[str, CacheEntry[TraktApiResponse]] | None = None,
        cache_retention: float | None = None,
    ) -> None:
        super().__init__(settings, authentication, api, transport, cache_store, cache_retention)
        self._polling: CancellablePolling[TraktClientAuthentication] | None = None
        self._poll: TraktDeviceAuthentication | None = None

    @classmethod
    def from_settings(cls, settings: Settings, *, configure_logging: bool = False, **kwargs: Any) -> TraktClient:
        """Build a client from loaded configuration.

        Args:
            settings: Loaded settings
            configure_logging: Also set up the package logger from ``settings.logging``
            **kwargs: Extra client arguments (transport, auth, cache_store, ...)
        """
        if configure_logging:
            setup_structured_logger(
                "traktkit",
                level=settings.logging.level,
                log_file=settings.logging.file,
                use_rich_console=settings.logging.use_rich_console,
            )
        kwargs.setdefault("cache_retention", settings.cache.retention)
        return cls(settings.client, **kwargs)

    @property
    def is_staging(self) -> bool:
        return self.settings.is_staging

    @property
    def redirect_uri(self) -> str:
        return self.settings.redirect_uri

    @property
    def polling(self) -> CancellablePolling[TraktClientAuthentication] | None:
        """Active device polling handle, if any."""
        return self._polling

    @property
    def poll(self) -> TraktDeviceAuthentication | None:
        """Device codes of the pending device authentication, if any."""
        return self._poll

    async def _exchange(self, *, code: str | None = None, refresh_token: str | None = None) -> TraktClientAuthentication:
        """Exchange an authorization code or a refresh token for tokens.

        Raises:
            TraktUnauthorizedError: On 401
            TraktRateLimitError: On 429
        """
        request: dict[str, Any] = {
            "client_id": self.settings.client_id,
            "client_secret": self.settings.client_secret,
            "redirect_uri": self.settings.redirect_uri,
        }
        try:
            if code is not None:
                request.update(grant_type=TraktGrantType.AUTHORIZATION_CODE, code=code)
                response = await self.api.authentication.oauth.token.code(request)
            else:
                request.update(grant_type=TraktGrantType.REFRESH_TOKEN, refresh_token=refresh_token)
                response = await self.api.authentication.oauth.token.refresh(request)
            body = TraktAuthentication.model_validate(await response.json())
        except TraktApiResponseError as e:
            error = handle_error(e)
            if error is e:
                raise
            log_operation_error(logger, error, operation="exchange")
            raise error from e

        return self.update_auth(lambda auth: parse_auth_response(body, auth))

    def _new_state(self, state: str | None) -> str:
        new_state = state or secrets.token_hex(8)
        self.update_auth(lambda auth: auth.update(state=new_state))
        return new_state

    def _authorize_params(self, redirect_uri: str | None, state: str | None, request: dict[str, Any]) -> dict[str, Any]:
        return {
            "response_type": "code",
            "client_id": self.settings.client_id,
            "redirect_uri": redirect_uri or self.settings.redirect_uri,
            "state": self._new_state(state),
            **request,
        }

    async def redirect_to_authentication(
        self,
        redirect: str | None = None,
        redirect_uri: str | None = None,
        state: str | None = None,
        **request: Any,
    ) -> TraktApiResponse:
        """Request the authorization page, storing a new CSRF state.

        The redirect is not followed by default: the response is an opaque
        redirect whose target must be opened by the user.

        Args:
            redirect: Transport redirect mode override
            redirect_uri: Defaults to the configured redirect URI
            state: CSRF state, generated when omitted
            **request: Extra query parameters (signup, prompt)
        """
        init: RequestInit = {"credentials": "omit"}
        if redirect:
            init["redirect"] = redirect
        params = self._authorize_params(redirect_uri, state, request)
        return await self.api.authentication.oauth.authorize(params, init)

    def redirect_to_authentication_url(
        self,
        redirect_uri: str | None = None,
        state: str | None = None,
        **request: Any,
    ) -> str:
        """Build the authorization page URL, storing a new CSRF state."""
        params = self._authorize_params(redirect_uri, state, request)
        return self.api.authentication.oauth.authorize.resolve(params)

    async def exchange_code_for_token(self, code: str, state: str | None = None) -> TraktClientAuthentication:
        """Exchange the code received on the redirect URI for tokens.

        Raises:
            TraktInvalidCsrfError: If ``state`` does not match the stored state
        """
        if state and state != self.auth.state:
            raise TraktInvalidCsrfError(state=state, expected=self.auth.state)
        return await self._exchange(code=code)

    async def refresh_token(self, refresh_token: str | None = None) -> TraktClientAuthentication:
        """Refresh the tokens with the stored or supplied refresh token."""
        refresh_token = refresh_token or self.auth.refresh_token
        if not refresh_token:
            raise TraktInvalidParameterError(
                "No refresh token found.",
                ErrorContext(operation="refresh_token"),
            )
        return await self._exchange(refresh_token=refresh_token)

    async def import_authentication(
        self,
        auth: TraktClientAuthentication | Mapping[str, Any] | None = None,
    ) -> TraktClientAuthentication:
        """Import authentication state, refreshing it if already expired."""
        if auth is None:
            auth = TraktClientAuthentication()
        elif not isinstance(auth, TraktClientAuthentication):
            auth = TraktClientAuthentication(**auth)

        if auth.is_expired():
            logger.info("Imported access token has expired, refreshing")
            return await self.refresh_token(auth.refresh_token)

        return self.update_auth(auth)

    async def _revoke(self) -> TraktApiResponse:
        return await self.api.authentication.oauth.revoke(
            {
                "token": self.auth.access_token,
                "client_id": self.settings.client_id,
                "client_secret": self.settings.client_secret,
            }
        )

    async def revoke_authentication(self) -> None:
        """Revoke the access token and clear the authentication state.

        An already expired token is not sent, only cleared.
        """
        if not self.auth.access_token:
            raise TraktInvalidParameterError(
                "No access token found.",
                ErrorContext(operation="revoke_authentication"),
            )

        if not self.auth.is_expired():
            await self._revoke()

        self.update_auth(TraktClientAuthentication())

    async def _device_code(self) -> TraktDeviceAuthentication:
        try:
            response = await self.api.authentication.device.code({"client_id": self.settings.client_id})
        except TraktApiResponseError as e:
            error = handle_error(e)
            if error is e:
                raise
            raise error from e
        return TraktDeviceAuthentication.model_validate(await response.json())

    async def _device_token(self, code: str) -> TraktAuthentication:
        try:
            response = await self.api.authentication.device.token(
                {
                    "client_id": self.settings.client_id,
                    "client_secret": self.settings.client_secret,
                    "code": code,
                }
            )
        except TraktApiResponseError as e:
            error = handle_error(e)
            if error is e:
                raise
            raise error from e
        return TraktAuthentication.model_validate(await response.json())

    async def get_device_code(self) -> TraktDeviceAuthentication:
        """Request device and user codes.

        The user code is entered by the user on the verification URL while
        ``poll_with_device_code`` waits for approval.
        """
        try:
            self._poll = await self._device_code()
        except Exception:
            self._poll = None
            raise
        return self._poll

    def _on_polling_done(self, polling: CancellablePolling[TraktClientAuthentication]) -> None:
        if self._polling is polling:
            self._polling = None
            self._poll = None

    def poll_with_device_code(self, poll: DevicePollInput = None) -> CancellablePolling[TraktClientAuthentication]:
        """Poll for device approval every ``poll.interval`` seconds.

        Must be called with a running event loop. A poll already in progress
        is cancelled first.

        Args:
            poll: Device codes, defaults to those from ``get_device_code``

        Returns:
            Awaitable handle resolving to the new authentication state. 400
            (pending) and 429 (slow down) answers keep polling; any other
            error, or reaching ``expires_in``, rejects it.

        Raises:
            TraktInvalidParameterError: No device code available
        """
        if poll is not None and not isinstance(poll, TraktDeviceAuthentication):
            poll = TraktDeviceAuthentication.model_validate(poll)
        poll = poll or self._poll
        if poll is None or not poll.device_code:
            raise TraktInvalidParameterError(
                "No device code found.",
                ErrorContext(operation="poll_with_device_code"),
            )

        if self._polling is not None and not self._polling.done:
            logger.warning("Polling already in progress, cancelling previous one...")
            self._polling.cancel()

        device = poll
        deadline = now_ms() + device.expires_in * 1000
        started = now_ms()

        async def tick() -> TraktClientAuthentication | None:
            if not device.device_code:
                raise TraktInvalidParameterError(
                    "No device code found.",
                    ErrorContext(operation="poll_with_device_code"),
                )
            if deadline <= now_ms():
                raise TraktPollingExpiredError()
            try:
                body = await self._device_token(device.device_code)
            except TraktApiResponseError as e:
                # 400: pending, waiting for the user to authorize the app
                if e.status == 400:
                    logger.info("Polling in progress...")
                    return None
                # 429: slow down, polling too quickly
                if e.status == 429:
                    logger.warning("Polling too quickly, rate limit exceeded")
                    return None
                raise
            auth = self.update_auth(lambda current: parse_auth_response(body, current))
            log_operation_success(logger, "poll_with_device_code", float(now_ms() - started))
            return auth

        polling: CancellablePolling[TraktClientAuthentication] = CancellablePolling(
            tick,
            interval=device.interval,
            on_done=self._on_polling_done,
        )
        self._polling = polling
        self._poll = device
        return polling.start()
