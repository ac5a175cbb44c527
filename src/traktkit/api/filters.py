"""Query filters supported by the Trakt API.

Filters narrow list endpoints (trending, popular, calendars, search...) and
are sent as plain query parameters. Each known filter has a rule describing
whether it accepts multiple comma-separated values and which values are
valid.

See https://trakt.docs.apiary.io/#introduction/filters
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Union

FilterPrimitive = Union[str, int, float, bool]
FilterValue = Union[FilterPrimitive, Sequence[FilterPrimitive]]

_RANGE_PATTERN = re.compile(r"^(\d+(?:\.\d+)?)(?:-(\d+(?:\.\d+)?))?$")
_YEARS_PATTERN = re.compile(r"^(\d{4})(?:-(\d{4}))?$")


class TraktApiFilters:
    """Known filter names."""

    # Common
    QUERY = "query"
    YEARS = "years"
    GENRES = "genres"
    LANGUAGES = "languages"
    COUNTRIES = "countries"
    RUNTIMES = "runtimes"
    STUDIO_IDS = "studio_ids"

    # Ratings
    RATINGS = "ratings"
    VOTES = "votes"
    TMDB_RATINGS = "tmdb_ratings"
    TMDB_VOTES = "tmdb_votes"
    IMDB_RATINGS = "imdb_ratings"
    IMDB_VOTES = "imdb_votes"
    RT_METERS = "rt_meters"
    RT_USER_METERS = "rt_user_meters"
    METASCORES = "metascores"

    # Movies & shows
    CERTIFICATIONS = "certifications"

    # Shows
    NETWORK_IDS = "network_ids"
    STATUS = "status"


class TraktShowStatus:
    """Values accepted by the ``status`` filter."""

    RETURNING_SERIES = "returning series"
    CONTINUING = "continuing"
    IN_PRODUCTION = "in production"
    PLANNED = "planned"
    UPCOMING = "upcoming"
    PILOT = "pilot"
    CANCELED = "canceled"
    ENDED = "ended"

    ALL = (
        RETURNING_SERIES,
        CONTINUING,
        IN_PRODUCTION,
        PLANNED,
        UPCOMING,
        PILOT,
        CANCELED,
        ENDED,
    )


@dataclass(frozen=True)
class FilterRule:
    """Validation rule of a single filter.

    Attributes:
        multiple: Whether the filter accepts several values
        choices: Allowed values, if the filter is an enumeration
        minimum: Lower bound for numeric range filters
        maximum: Upper bound for numeric range filters (None = unbounded)
        years: Value must be a year or a ``YYYY-YYYY`` span
    """

    multiple: bool = False
    choices: tuple[str, ...] | None = None
    minimum: float | None = None
    maximum: float | None = None
    years: bool = False

    @property
    def is_range(self) -> bool:
        return self.minimum is not None

    def accepts(self, value: FilterPrimitive) -> bool:
        """Check a single (non-array) value against the rule."""
        if isinstance(value, bool):
            return self.choices is None and not self.is_range and not self.years
        text = str(value).strip()
        if not text:
            return False
        if self.choices is not None:
            return text in self.choices
        if self.years:
            return _YEARS_PATTERN.match(text) is not None
        if self.is_range:
            return self._accepts_range(text)
        return True

    def _accepts_range(self, text: str) -> bool:
        match = _RANGE_PATTERN.match(text)
        if match is None:
            return False
        low = float(match.group(1))
        high = float(match.group(2)) if match.group(2) is not None else low
        if low > high:
            return False
        if self.minimum is not None and low < self.minimum:
            return False
        return self.maximum is None or high <= self.maximum


TRAKT_API_FILTER_RULES: dict[str, FilterRule] = {
    TraktApiFilters.QUERY: FilterRule(),
    TraktApiFilters.YEARS: FilterRule(years=True),
    TraktApiFilters.GENRES: FilterRule(multiple=True),
    TraktApiFilters.LANGUAGES: FilterRule(multiple=True),
    TraktApiFilters.COUNTRIES: FilterRule(multiple=True),
    TraktApiFilters.RUNTIMES: FilterRule(minimum=0),
    TraktApiFilters.STUDIO_IDS: FilterRule(multiple=True),
    TraktApiFilters.RATINGS: FilterRule(minimum=0, maximum=100),
    TraktApiFilters.VOTES: FilterRule(minimum=0, maximum=100000),
    TraktApiFilters.TMDB_RATINGS: FilterRule(minimum=0, maximum=10),
    TraktApiFilters.TMDB_VOTES: FilterRule(minimum=0, maximum=100000),
    TraktApiFilters.IMDB_RATINGS: FilterRule(minimum=0, maximum=10),
    TraktApiFilters.IMDB_VOTES: FilterRule(minimum=0, maximum=3000000),
    TraktApiFilters.RT_METERS: FilterRule(minimum=0, maximum=100),
    TraktApiFilters.RT_USER_METERS: FilterRule(minimum=0, maximum=100),
    TraktApiFilters.METASCORES: FilterRule(minimum=0, maximum=100),
    TraktApiFilters.CERTIFICATIONS: FilterRule(multiple=True),
    TraktApiFilters.NETWORK_IDS: FilterRule(multiple=True),
    TraktApiFilters.STATUS: FilterRule(multiple=True, choices=TraktShowStatus.ALL),
}

TraktApiCommonFilterValues: tuple[str, ...] = (
    TraktApiFilters.QUERY,
    TraktApiFilters.YEARS,
    TraktApiFilters.GENRES,
    TraktApiFilters.LANGUAGES,
    TraktApiFilters.COUNTRIES,
    TraktApiFilters.RUNTIMES,
    TraktApiFilters.STUDIO_IDS,
    TraktApiFilters.RATINGS,
    TraktApiFilters.VOTES,
    TraktApiFilters.TMDB_RATINGS,
    TraktApiFilters.TMDB_VOTES,
    TraktApiFilters.IMDB_RATINGS,
    TraktApiFilters.IMDB_VOTES,
    TraktApiFilters.RT_METERS,
    TraktApiFilters.RT_USER_METERS,
    TraktApiFilters.METASCORES,
)

TraktApiMovieFilterValues: tuple[str, ...] = (
    *TraktApiCommonFilterValues,
    TraktApiFilters.CERTIFICATIONS,
)

TraktApiShowFilterValues: tuple[str, ...] = (
    *TraktApiCommonFilterValues,
    TraktApiFilters.CERTIFICATIONS,
    TraktApiFilters.NETWORK_IDS,
    TraktApiFilters.STATUS,
)


def is_filter(name: str) -> bool:
    """Check whether ``name`` is a known filter."""
    return name in TRAKT_API_FILTER_RULES


def is_array_value(value: object) -> bool:
    """Check whether a filter value holds several values."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


class TraktApiFilterValidator:
    """Pure predicates over filter values."""

    @staticmethod
    def supports_multiple(name: str) -> bool:
        rule = TRAKT_API_FILTER_RULES.get(name)
        return rule is not None and rule.multiple

    @staticmethod
    def validate(name: str, value: FilterValue, allow_array: bool = False) -> bool:
        """Validate a filter value.

        Args:
            name: Filter name
            value: Scalar value, or a sequence of values for multi-valued filters
            allow_array: Whether sequences are acceptable at all

        Returns:
            True if the filter is known and the value satisfies its rule
        """
        rule = TRAKT_API_FILTER_RULES.get(name)
        if rule is None:
            return False

        if is_array_value(value):
            values = list(value)  # type: ignore[arg-type]
            if not allow_array or not rule.multiple or not values:
                return False
            return all(rule.accepts(v) for v in values)

        return rule.accepts(value)  # type: ignore[arg-type]
