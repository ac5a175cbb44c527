"""Endpoint templates and call parameters.

A template is the static description of one API operation: method, URL
pattern, declared path/query/body parameters, supported filters, extended
modes, pagination and authentication requirements. Call parameters are the
per-call values validated against it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Literal, Union

from traktkit.api.filters import FilterValue

AuthRequirement = Union[bool, Literal["optional"], None]
PaginationSupport = Union[bool, Literal["optional"]]

RESERVED_PARAMS = ("filters", "pagination", "extended")


@dataclass(frozen=True)
class TraktApiPagination:
    """Requested page and page size."""

    page: int | None = None
    limit: int | None = None


@dataclass(frozen=True)
class TraktApiParams:
    """Parameters of a single call.

    Attributes:
        values: Flat mapping of path, query and body values
        filters: Filter name to scalar or list of values
        pagination: Requested page and limit
        extended: Extended mode or list of modes
    """

    values: Mapping[str, Any] = field(default_factory=dict)
    filters: Mapping[str, FilterValue] | None = None
    pagination: TraktApiPagination | None = None
    extended: str | list[str] | tuple[str, ...] | None = None

    @classmethod
    def coerce(cls, params: TraktApiParams | Mapping[str, Any] | None = None, **kwargs: Any) -> TraktApiParams:
        """Build call parameters from a plain mapping.

        The reserved keys ``filters``, ``pagination`` and ``extended`` are
        split out; everything else becomes a flat value.

        Example:
            >>> TraktApiParams.coerce({"id": "tron", "extended": "full"}).extended
            'full'
        """
        if isinstance(params, TraktApiParams):
            return params.with_values(**kwargs) if kwargs else params

        merged: dict[str, Any] = {**(params or {}), **kwargs}
        pagination = merged.pop("pagination", None)
        if isinstance(pagination, Mapping):
            pagination = TraktApiPagination(
                page=pagination.get("page"),
                limit=pagination.get("limit"),
            )
        return cls(
            values=merged,
            filters=merged.pop("filters", None),
            pagination=pagination,
            extended=merged.pop("extended", None),
        )

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self.values

    def with_values(self, **values: Any) -> TraktApiParams:
        """Return a copy with some values replaced."""
        return replace(self, values={**self.values, **values})


ParamsValidator = Callable[[TraktApiParams], bool]
ParamsTransform = Callable[[TraktApiParams], TraktApiParams]


@dataclass(frozen=True)
class TraktApiTemplateParameters:
    """Declared path and query parameters (name -> required)."""

    path: Mapping[str, bool] = field(default_factory=dict)
    query: Mapping[str, bool] = field(default_factory=dict)


@dataclass(frozen=True)
class TraktApiTemplateOptions:
    """Template options.

    Attributes:
        auth: True if OAuth is required, "optional" if used when present
        pagination: Whether page/limit are supported
        extended: Supported extended modes
        filters: Supported filter names
        parameters: Declared path and query parameters
    """

    auth: AuthRequirement = None
    pagination: PaginationSupport = False
    extended: tuple[str, ...] = ()
    filters: tuple[str, ...] = ()
    parameters: TraktApiTemplateParameters = field(default_factory=TraktApiTemplateParameters)


@dataclass(frozen=True)
class TraktApiTemplate:
    """Static description of one API operation.

    Attributes:
        method: HTTP method
        url: Path with ``:name`` placeholders and an optional ``?a=&b=``
            declaration of query parameters
        opts: Template options
        body: Declared body fields (name -> required), None for no body
        init: Default transport options (e.g. redirect mode)
        validate: Hook raising on malformed values, run first
        transform: Hook normalizing values, run before URL construction
    """

    method: str
    url: str
    opts: TraktApiTemplateOptions = field(default_factory=TraktApiTemplateOptions)
    body: Mapping[str, bool] | None = None
    init: Mapping[str, Any] | None = None
    validate: ParamsValidator | None = None
    transform: ParamsTransform | None = None

    def with_options(self, **options: Any) -> TraktApiTemplate:
        """Return a copy with some options replaced."""
        return replace(self, opts=replace(self.opts, **options))


@dataclass(frozen=True)
class TraktApiRequest:
    """A built request: absolute URL and serialized body."""

    url: str
    body: str | None = None
