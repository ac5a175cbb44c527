"""Validate and transform hooks for endpoint templates."""

from __future__ import annotations

import re
from datetime import date, datetime, timezone

from traktkit.api.template import ParamsTransform, ParamsValidator, TraktApiParams
from traktkit.shared.errors import ErrorContext, TraktValidationError

DATE_ISO8601 = re.compile(
    r"^\d{4}-\d{2}-\d{2}(T\d{2}:\d{2}(:\d{2}(\.\d+)?)?(Z|[+-]\d{2}:?\d{2})?)?$"
)
DATE_ISO8601_SHORT = re.compile(r"^\d{4}-\d{2}-\d{2}$")

_HOUR_PREFIX = re.compile(r"^(\d{4}-\d{2}-\d{2}T\d{2})")


def _to_iso(value: str | int | float | date | datetime) -> str:
    """Render a date-like value as an ISO 8601 UTC string."""
    if isinstance(value, str):
        return value
    if isinstance(value, datetime):
        moment = value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    elif isinstance(value, date):
        return value.isoformat()
    else:
        # Epoch milliseconds
        moment = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def drop_minutes(value: str) -> str:
    """Truncate a full ISO timestamp to the hour.

    Short dates are returned unchanged.

    Example:
        >>> drop_minutes("2024-03-01T10:42:17.123Z")
        '2024-03-01T10:00:00.000Z'
    """
    match = _HOUR_PREFIX.match(value)
    if match is None:
        return value
    return f"{match.group(1)}:00:00.000Z"


class TraktApiValidators:
    """Format checks raising TraktValidationError."""

    @staticmethod
    def date(value: str, regex: re.Pattern[str] = DATE_ISO8601, prop: str = "start_date") -> bool:
        if not regex.match(value):
            raise TraktValidationError(
                f"Invalid '{prop}' format, found '{value}', expected '{regex.pattern}'",
                ErrorContext(operation="validate", additional_data={"parameter": prop}),
            )
        return True


def get_date_validate(prop: str, regex: re.Pattern[str] = DATE_ISO8601) -> ParamsValidator:
    """Build a hook checking the format of a string date parameter.

    Non-string values (datetime, epoch millis) are left to the transform hook.
    """

    def validate(params: TraktApiParams) -> bool:
        value = params.get(prop)
        if isinstance(value, str):
            return TraktApiValidators.date(value, regex, prop)
        return True

    return validate


def get_date_transform(prop: str, short: bool = False) -> ParamsTransform:
    """Build a hook normalizing a date parameter to ISO 8601.

    Args:
        prop: Parameter name
        short: Keep only the ``YYYY-MM-DD`` part
    """

    def transform(params: TraktApiParams) -> TraktApiParams:
        value = params.get(prop)
        if value is None or value == "":
            return params
        text = _to_iso(value)
        if short and "T" in text:
            text = text.split("T", 1)[0]
        return params.with_values(**{prop: drop_minutes(text)})

    return transform

