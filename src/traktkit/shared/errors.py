"""traktkit Error Handling Module

This module defines the error handling system for traktkit, providing
structured error classes with context information and user-friendly messages.

The error hierarchy follows these principles:
- One Source of Truth: All error codes are defined in ErrorCode enum
- Structured Context: ErrorContext provides additional information
- Response Preservation: API errors keep the response that caused them
- Proper Exception Chaining: Original exceptions are preserved
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from traktkit.services.transport import RawResponse

# Type alias for primitive context values (str, int, float, bool only)
PrimitiveContextValue = Union[str, int, float, bool]

# Default keys to mask in safe_dict
SAFE_DICT_MASK_KEYS: tuple[str, ...] = ("access_token", "refresh_token", "client_secret")


class ErrorCode(str, Enum):
    """Error codes for traktkit.

    This enum serves as the single source of truth for all error codes
    used throughout the client.
    """

    # Parameter and template errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    FILTER_ERROR = "FILTER_ERROR"
    INVALID_PARAMETER = "INVALID_PARAMETER"

    # Authentication errors
    TOKEN_EXPIRED = "TOKEN_EXPIRED"  # noqa: S105  # nosec B105 - Error code constant
    API_AUTHENTICATION_FAILED = "API_AUTHENTICATION_FAILED"
    INVALID_CSRF = "INVALID_CSRF"

    # Network and API errors
    API_RESPONSE_ERROR = "API_RESPONSE_ERROR"
    API_RATE_LIMIT = "API_RATE_LIMIT"
    NETWORK_ERROR = "NETWORK_ERROR"

    # Device polling errors
    POLLING_EXPIRED = "POLLING_EXPIRED"
    POLLING_CANCELLED = "POLLING_CANCELLED"

    # Configuration errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    CONFIG_MISSING = "CONFIG_MISSING"


def _coerce_primitives(value: Any | None) -> dict[str, PrimitiveContextValue] | None:
    """Coerce additional_data values to primitives.

    Args:
        value: Input dictionary or None

    Returns:
        Dictionary with primitive values only, or None

    Raises:
        TypeError: If value is not a dict or contains unconvertible types
    """
    if value is None:
        return None

    if not isinstance(value, dict):
        error_msg = f"additional_data must be dict, got {type(value).__name__}"
        raise TypeError(error_msg)

    coerced: dict[str, PrimitiveContextValue] = {}
    for key, val in value.items():
        if isinstance(val, (str, int, float, bool)):
            coerced[key] = val
        elif isinstance(val, Enum):
            coerced[key] = val.value
        elif isinstance(val, (list, tuple)):
            coerced[key] = ",".join(str(v) for v in val)
        else:
            error_msg = (
                f"Cannot coerce {type(val).__name__} to primitive type. "
                f"Only str, int, float, bool, Enum, list and tuple are allowed."
            )
            raise TypeError(error_msg)

    return coerced


@dataclass(frozen=True)
class ErrorContext:
    """Context information for errors.

    Only primitive types (str, int, float, bool) are allowed in
    additional_data to ensure safe serialization.

    Attributes:
        operation: Optional operation name that caused the error
        additional_data: Optional dict with primitive values only
    """

    operation: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        """Post-initialization validation and coercion."""
        if self.additional_data is not None:
            coerced = _coerce_primitives(self.additional_data)
            object.__setattr__(self, "additional_data", coerced)

    def safe_dict(self, *, mask_keys: tuple[str, ...] | None = None) -> dict[str, Any]:
        """Export context as dict with credential masking.

        Args:
            mask_keys: Keys of additional_data to mask. Defaults to SAFE_DICT_MASK_KEYS.

        Returns:
            Dictionary with masked sensitive values and guaranteed additional_data key.

        Example:
            >>> context = ErrorContext(operation="refresh", additional_data={"refresh_token": "abc"})
            >>> context.safe_dict()
            {'operation': 'refresh', 'additional_data': {'refresh_token': '****'}}
        """
        if mask_keys is None:
            mask_keys = SAFE_DICT_MASK_KEYS

        data: dict[str, Any] = {}
        if self.operation is not None:
            data["operation"] = self.operation

        additional: dict[str, Any] = {}
        for key, val in (self.additional_data or {}).items():
            additional[key] = "****" if key in mask_keys else val
        data["additional_data"] = additional

        return data


class TraktError(Exception):
    """Base exception class for all traktkit errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize TraktError.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            context: Additional context information
            original_error: Original exception that caused this error
        """
        self.code = code
        self.message = message
        self.context = context or ErrorContext()
        self.original_error = original_error

        super().__init__(f"{code.value}: {message}")

    def __str__(self) -> str:
        """Return string representation of the error."""
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging with credential masking."""
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class DomainError(TraktError):
    """Errors raised before any network I/O.

    Examples:
    - Missing mandatory parameters
    - Unsupported filters or extended values
    - Malformed dates
    """


class InfrastructureError(TraktError):
    """Errors raised while talking to the remote API.

    Examples:
    - Non-success HTTP status
    - Rate limiting
    - Rejected credentials
    """


class ApplicationError(TraktError):
    """Client-state and configuration errors.

    Examples:
    - Expired access token
    - Device polling expired or cancelled
    - Invalid configuration file
    """


class TraktValidationError(DomainError):
    """Malformed input value against a required format."""

    def __init__(self, message: str, context: ErrorContext | None = None) -> None:
        super().__init__(ErrorCode.VALIDATION_ERROR, message, context)


class TraktFilterError(DomainError):
    """Unsupported filter name for the requested endpoint."""

    def __init__(self, message: str, context: ErrorContext | None = None) -> None:
        super().__init__(ErrorCode.FILTER_ERROR, message, context)


class TraktInvalidParameterError(DomainError):
    """Missing or invalid request parameter, token or device code."""

    def __init__(self, message: str, context: ErrorContext | None = None) -> None:
        super().__init__(ErrorCode.INVALID_PARAMETER, message, context)


class TraktInvalidCsrfError(DomainError):
    """OAuth state returned by the redirect does not match the stored one."""

    def __init__(self, state: str | None = None, expected: str | None = None) -> None:
        super().__init__(
            ErrorCode.INVALID_CSRF,
            f"Invalid CSRF (State): expected '{expected}', but received '{state}'",
            ErrorContext(operation="exchange_code_for_token"),
        )
        self.state = state
        self.expected = expected


class TraktExpiredTokenError(ApplicationError):
    """Stored access token is past its expiry."""

    def __init__(self, message: str, context: ErrorContext | None = None) -> None:
        super().__init__(ErrorCode.TOKEN_EXPIRED, message, context)


class TraktPollingExpiredError(ApplicationError):
    """Device code expired before the user authorized the application."""

    def __init__(self, message: str = "Device code polling expired.") -> None:
        super().__init__(
            ErrorCode.POLLING_EXPIRED,
            message,
            ErrorContext(operation="poll_with_device_code"),
        )


class TraktPollingCancelledError(ApplicationError):
    """Device code polling was cancelled by the caller."""

    def __init__(self, message: str = "Device code polling cancelled.") -> None:
        super().__init__(
            ErrorCode.POLLING_CANCELLED,
            message,
            ErrorContext(operation="poll_with_device_code"),
        )


class TraktApiResponseError(InfrastructureError):
    """Non-success HTTP response returned by the API.

    Attributes:
        response: The raw response that caused the error
    """

    def __init__(
        self,
        message: str,
        response: RawResponse,
        code: ErrorCode = ErrorCode.API_RESPONSE_ERROR,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(
            code,
            message,
            context or ErrorContext(additional_data={"status": response.status}),
        )
        self.response = response

    @property
    def status(self) -> int:
        """HTTP status of the wrapped response."""
        return self.response.status


class TraktUnauthorizedError(TraktApiResponseError):
    """401 received while exchanging OAuth credentials."""

    def __init__(self, message: str, response: RawResponse) -> None:
        super().__init__(message, response, ErrorCode.API_AUTHENTICATION_FAILED)


class TraktRateLimitError(TraktApiResponseError):
    """429 received while exchanging OAuth credentials."""

    def __init__(self, message: str, response: RawResponse) -> None:
        super().__init__(message, response, ErrorCode.API_RATE_LIMIT)


def create_config_error(
    message: str,
    config_key: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> ApplicationError:
    """Create a configuration error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"config_key": config_key} if config_key else None
    )
    context = ErrorContext(
        operation=operation,
        additional_data=additional_data,
    )
    return ApplicationError(
        ErrorCode.CONFIGURATION_ERROR,
        message,
        context,
        original_error,
    )
