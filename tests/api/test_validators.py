"""Tests for date validate and transform hooks."""

from datetime import date, datetime, timezone

import pytest

from traktkit.api.template import TraktApiParams
from traktkit.api.validators import (
    DATE_ISO8601,
    DATE_ISO8601_SHORT,
    TraktApiValidators,
    drop_minutes,
    get_date_transform,
    get_date_validate,
)
from traktkit.shared.errors import ErrorCode, TraktValidationError

to_short_date = get_date_transform("start_date", short=True)


class TestTraktApiValidators:
    """Test TraktApiValidators.date."""

    @pytest.mark.parametrize(
        "value",
        ["2024-03-01", "2024-03-01T10:42", "2024-03-01T10:42:17.123Z", "2024-03-01T10:42:17+02:00"],
    )
    def test_full_format_accepts(self, value):
        """Test dates and timestamps against the full format."""
        assert TraktApiValidators.date(value, DATE_ISO8601)

    def test_short_format_rejects_timestamp(self):
        """Test that the short format only accepts plain dates."""
        with pytest.raises(TraktValidationError):
            TraktApiValidators.date("2024-03-01T10:42:17.123Z", DATE_ISO8601_SHORT)

    def test_error_message(self):
        """Test the message naming the property, the value and the format."""
        with pytest.raises(TraktValidationError) as exc_info:
            TraktApiValidators.date("2024-3-1", DATE_ISO8601_SHORT, "start_date")

        error = exc_info.value
        assert error.code == ErrorCode.VALIDATION_ERROR
        assert error.message == (
            f"Invalid 'start_date' format, found '2024-3-1', expected '{DATE_ISO8601_SHORT.pattern}'"
        )


class TestDropMinutes:
    """Test drop_minutes."""

    def test_truncates_to_hour(self):
        """Test that minutes, seconds and milliseconds are zeroed."""
        assert drop_minutes("2024-03-01T10:42:17.123Z") == "2024-03-01T10:00:00.000Z"

    def test_short_date_unchanged(self):
        """Test that dates without a time are returned as is."""
        assert drop_minutes("2024-03-01") == "2024-03-01"


class TestDateHooks:
    """Test the hook factories used by endpoint templates."""

    def test_validate_ignores_missing_value(self):
        """Test that an absent date is valid."""
        assert get_date_validate("start_date")(TraktApiParams())

    def test_validate_ignores_non_string(self):
        """Test that datetime values are left to the transform."""
        validate = get_date_validate("start_date", DATE_ISO8601_SHORT)
        assert validate(TraktApiParams.coerce({"start_date": datetime(2024, 3, 1, tzinfo=timezone.utc)}))

    def test_validate_rejects_malformed(self):
        """Test that a malformed string raises."""
        validate = get_date_validate("start_at")
        with pytest.raises(TraktValidationError, match="Invalid 'start_at' format"):
            validate(TraktApiParams.coerce({"start_at": "yesterday"}))

    def test_transform_datetime_full(self):
        """Test that a datetime becomes a UTC timestamp truncated to the hour."""
        transform = get_date_transform("start_at")
        moment = datetime(2024, 3, 1, 10, 42, 17, 123000, tzinfo=timezone.utc)
        params = transform(TraktApiParams.coerce({"start_at": moment}))
        assert params.get("start_at") == "2024-03-01T10:00:00.000Z"

    def test_transform_datetime_short(self):
        """Test that the short transform keeps only the date."""
        moment = datetime(2024, 3, 1, 23, 59, tzinfo=timezone.utc)
        params = to_short_date(TraktApiParams.coerce({"start_date": moment}))
        assert params.get("start_date") == "2024-03-01"

    def test_transform_date(self):
        """Test that a date is rendered as YYYY-MM-DD."""
        params = to_short_date(TraktApiParams.coerce({"start_date": date(2024, 3, 1)}))
        assert params.get("start_date") == "2024-03-01"

    def test_transform_epoch_millis(self):
        """Test that numbers are epoch milliseconds."""
        transform = get_date_transform("start_at")
        params = transform(TraktApiParams.coerce({"start_at": 0}))
        assert params.get("start_at") == "1970-01-01T00:00:00.000Z"

    def test_transform_skips_absent(self):
        """Test that absent values are untouched."""
        params = TraktApiParams.coerce({"start_date": ""})
        assert to_short_date(params) is params

    def test_transform_keeps_other_values(self):
        """Test that only the date parameter changes."""
        params = TraktApiParams.coerce({"start_date": date(2024, 3, 1), "days": 7, "extended": "full"})
        result = to_short_date(params)
        assert result.get("days") == 7
        assert result.extended == "full"
