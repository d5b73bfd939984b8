"""Mount-level configuration for the send pipeline."""

from __future__ import annotations

import math
import os
import re
from enum import Enum
from typing import Any, Mapping

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

# One year in milliseconds; larger max-age values are clamped.
MAX_MAX_AGE = 60 * 60 * 24 * 365 * 1000

_DURATION_RE = re.compile(
    r"^(?P<value>-?(?:\d+)?\.?\d+) *(?P<unit>"
    r"milliseconds?|msecs?|ms|seconds?|secs?|s|minutes?|mins?|m|"
    r"hours?|hrs?|h|days?|d|weeks?|w|years?|yrs?|y)?$",
    re.IGNORECASE,
)

_UNIT_MS = {
    "ms": 1,
    "s": 1000,
    "m": 60 * 1000,
    "h": 60 * 60 * 1000,
    "d": 24 * 60 * 60 * 1000,
    "w": 7 * 24 * 60 * 60 * 1000,
    "y": 365.25 * 24 * 60 * 60 * 1000,
}


class DotfilesPolicy(str, Enum):
    """How path segments starting with a dot are treated."""

    ALLOW = "allow"
    IGNORE = "ignore"
    DENY = "deny"


def _unit_key(unit: str) -> str:
    unit = unit.lower()
    if unit.startswith(("ms", "msec", "milli")):
        return "ms"
    if unit.startswith("mi"):
        return "m"
    return unit[0]


def parse_duration(raw: str) -> float | None:
    """Convert a duration such as ``"1h"`` or ``"2 days"`` to milliseconds.

    A bare number is taken as milliseconds. Returns ``None`` when ``raw`` is
    not a recognised duration.
    """

    match = _DURATION_RE.match(raw.strip())
    if match is None:
        return None
    value = float(match.group("value"))
    unit = match.group("unit")
    if unit is None:
        return value
    return value * _UNIT_MS[_unit_key(unit)]


def parse_max_age(value: Any) -> int:
    """Return ``value`` as a max-age in milliseconds clamped to one year."""

    if value is None or value is False:
        return 0
    if isinstance(value, str):
        parsed = parse_duration(value)
    else:
        try:
            parsed = float(value)
        except (TypeError, ValueError):
            parsed = None
    if parsed is None or math.isnan(parsed):
        return 0
    return int(min(max(0.0, parsed), MAX_MAX_AGE))


def normalize_list(value: Any, name: str) -> list[str]:
    """Coerce ``False``/``None``, a string, or a list of strings into a list."""

    if not value:
        return []
    if isinstance(value, str):
        return [value]
    items = list(value) if isinstance(value, (list, tuple)) else [value]
    for item in items:
        if not isinstance(item, str):
            raise ValueError(f"{name} must be array of strings or false")
    return items


class SendOptions(BaseModel):
    """Immutable options shared by every request served from one mount."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    accept_ranges: bool = Field(
        default=True, validation_alias=AliasChoices("acceptRanges", "accept_ranges")
    )
    cache_control: bool = Field(
        default=True, validation_alias=AliasChoices("cacheControl", "cache_control")
    )
    etag: bool = True
    dotfiles: DotfilesPolicy = DotfilesPolicy.IGNORE
    extensions: tuple[str, ...] = ()
    immutable: bool = True
    index: tuple[str, ...] = ("index.html",)
    last_modified: bool = Field(
        default=True, validation_alias=AliasChoices("lastModified", "last_modified")
    )
    max_age: int = Field(
        default=0, validation_alias=AliasChoices("maxAge", "maxage", "max_age")
    )
    root: str | None = None
    start: int = Field(default=0, ge=0)
    end: int | None = Field(default=None, ge=0)

    @model_validator(mode="before")
    @classmethod
    def _fall_back_to_lowercase_maxage(cls, data: Any) -> Any:
        # A falsy maxAge defers to maxage.
        if isinstance(data, Mapping) and not data.get("maxAge") and "maxage" in data:
            data = {key: value for key, value in data.items() if key != "maxAge"}
        return data

    @field_validator("accept_ranges", "cache_control", "etag", "immutable", "last_modified", mode="before")
    @classmethod
    def _none_is_false(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("dotfiles", mode="before")
    @classmethod
    def _validate_dotfiles(cls, value: Any) -> Any:
        if isinstance(value, DotfilesPolicy):
            return value
        if not isinstance(value, str) or value not in {policy.value for policy in DotfilesPolicy}:
            raise ValueError('dotfiles option must be "allow", "deny", or "ignore"')
        return value

    @field_validator("extensions", mode="before")
    @classmethod
    def _validate_extensions(cls, value: Any) -> tuple[str, ...]:
        return tuple(normalize_list(value, "extensions option"))

    @field_validator("index", mode="before")
    @classmethod
    def _validate_index(cls, value: Any) -> tuple[str, ...]:
        return tuple(normalize_list(value, "index option"))

    @field_validator("max_age", mode="before")
    @classmethod
    def _validate_max_age(cls, value: Any) -> int:
        return parse_max_age(value)

    @field_validator("root", mode="before")
    @classmethod
    def _validate_root(cls, value: Any) -> str | None:
        if not value:
            return None
        return os.path.abspath(os.fspath(value))

    @field_validator("start", mode="before")
    @classmethod
    def _validate_start(cls, value: Any) -> Any:
        return value or 0

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any] | None = None) -> "SendOptions":
        """Build options from a mapping using either camelCase or snake_case keys."""

        return cls.model_validate(dict(raw or {}))


__all__ = [
    "DotfilesPolicy",
    "MAX_MAX_AGE",
    "SendOptions",
    "normalize_list",
    "parse_duration",
    "parse_max_age",
]
