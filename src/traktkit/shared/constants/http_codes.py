"""HTTP Status Code Constants.

Status codes documented by the Trakt API and the human-readable messages
used when a request fails.
"""


class TraktResponseCode:
    """HTTP status codes returned by the Trakt API."""

    # 2xx Success
    SUCCESS = 200
    POST_SUCCESS = 201
    DELETE_SUCCESS = 204

    # 3xx Redirection
    FOUND = 302

    # 4xx Client Errors
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    METHOD_NOT_FOUND = 405
    CONFLICT = 409
    EXPIRED = 410
    PRECONDITION_FAILED = 412
    DENIED = 418
    ACCOUNT_LIMIT_EXCEEDED = 420
    UNPROCESSABLE_ENTITY = 422
    LOCKED_USER_ACCOUNT = 423
    VIP_ONLY = 426
    RATE_LIMIT_EXCEEDED = 429

    # 5xx Server Errors
    SERVER_ERROR = 500
    BAD_GATEWAY = 502
    SERVICE_UNAVAILABLE = 503
    GATEWAY_TIMEOUT = 504
    CLOUDFLARE_ERROR = 520
    WEB_SERVER_IS_DOWN = 521
    TCP_ERROR = 522

    @staticmethod
    def is_success(code: int) -> bool:
        """Check if status code indicates success (2xx)."""
        return 200 <= code < 300


TRAKT_RESPONSE_CODE_MESSAGES: dict[int, str] = {
    TraktResponseCode.SUCCESS: "Success",
    TraktResponseCode.POST_SUCCESS: "Success - new resource created (POST)",
    TraktResponseCode.DELETE_SUCCESS: "Success - no content to return (DELETE)",
    TraktResponseCode.BAD_REQUEST: "Bad Request - request couldn't be parsed",
    TraktResponseCode.UNAUTHORIZED: "Unauthorized - OAuth must be provided",
    TraktResponseCode.FORBIDDEN: "Forbidden - invalid API key or unapproved app",
    TraktResponseCode.NOT_FOUND: "Not Found - method exists, but no record found",
    TraktResponseCode.METHOD_NOT_FOUND: "Method Not Found - method doesn't exist",
    TraktResponseCode.CONFLICT: "Conflict - resource already created",
    TraktResponseCode.EXPIRED: "Expired - the tokens have expired, restart the process",
    TraktResponseCode.PRECONDITION_FAILED: "Precondition Failed - use application/json content type",
    TraktResponseCode.DENIED: "Denied - user explicitly denied this code",
    TraktResponseCode.ACCOUNT_LIMIT_EXCEEDED: "Account Limit Exceeded - list count, item count, etc",
    TraktResponseCode.UNPROCESSABLE_ENTITY: "Unprocessable Entity - validation errors",
    TraktResponseCode.LOCKED_USER_ACCOUNT: "Locked User Account - have the user contact support",
    TraktResponseCode.VIP_ONLY: "VIP Only - user must upgrade to VIP",
    TraktResponseCode.RATE_LIMIT_EXCEEDED: "Rate Limit Exceeded",
    TraktResponseCode.SERVER_ERROR: "Server Error - please open a support ticket",
    TraktResponseCode.BAD_GATEWAY: "Service Unavailable - Bad Gateway - server overloaded (try again in 30s)",
    TraktResponseCode.SERVICE_UNAVAILABLE: "Service Unavailable - server overloaded (try again in 30s)",
    TraktResponseCode.GATEWAY_TIMEOUT: "Service Unavailable - Gateway Timeout - server overloaded (try again in 30s)",
    TraktResponseCode.CLOUDFLARE_ERROR: "Service Unavailable - Cloudflare error",
    TraktResponseCode.WEB_SERVER_IS_DOWN: "Service Unavailable - Web server is down - Cloudflare error",
    TraktResponseCode.TCP_ERROR: "Service Unavailable - Cloudflare error",
}
