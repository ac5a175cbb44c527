"""HTTP header names consumed and produced by the client."""


class TraktApiHeaders:
    """Request and response header names (matched case-insensitively)."""

    # Request
    USER_AGENT = "User-Agent"
    CONTENT_TYPE = "Content-Type"
    TRAKT_API_VERSION = "trakt-api-version"
    TRAKT_API_KEY = "trakt-api-key"
    AUTHORIZATION = "Authorization"

    # Response
    AUTHENTICATE = "WWW-Authenticate"
    X_PAGINATION_ITEM_COUNT = "X-Pagination-Item-Count"
    X_PAGINATION_PAGE_COUNT = "X-Pagination-Page-Count"
    X_PAGINATION_LIMIT = "X-Pagination-Limit"
    X_PAGINATION_PAGE = "X-Pagination-Page"
    X_SORT_BY = "X-Sort-By"
    X_SORT_HOW = "X-Sort-How"
    X_APPLIED_SORT_BY = "X-Applied-Sort-By"
    X_APPLIED_SORT_HOW = "X-Applied-Sort-How"
    X_START_DATE = "X-Start-Date"
    X_END_DATE = "X-End-Date"
    X_UPGRADE_URL = "X-Upgrade-URL"
    X_VIP_USER = "X-VIP-User"
    X_ACCOUNT_LIMIT = "X-Account-Limit"
    X_RATELIMIT = "X-Ratelimit"
    RETRY_AFTER = "Retry-After"


class ContentType:
    """Content type values."""

    JSON = "application/json"


TRAKT_API_VERSION = "2"
