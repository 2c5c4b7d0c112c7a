"""Message templates and the default English bundle.

A constraint's ``message`` is a template. ``{temporal_constraints.X.message}``
references a bundle entry; ``{moment}``, ``{duration}``, ``{zone_id}``,
``{value}`` and ``{modulo}`` reference the constraint's attributes.
Unknown references are left untouched.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

BUNDLE_PREFIX = "temporal_constraints"
FOR_MONTH = "for_month"
FOR_DAY_OF_WEEK = "for_day_of_week"

_REFERENCE_RE = re.compile(r"\{([A-Za-z_][\w.]*)\}")


def bundle_key(constraint: str, variant: str | None = None) -> str:
    key = f"{BUNDLE_PREFIX}.{constraint}.message"
    return f"{key}.{variant}" if variant else key


def default_template(constraint: str, variant: str | None = None) -> str:
    """The default ``message`` of *constraint*, e.g. ``{temporal_constraints.Before.message}``."""
    return "{" + bundle_key(constraint, variant) + "}"


_COMPARISONS = {
    "Before": "must be before {moment}",
    "After": "must be after {moment}",
    "NotBefore": "must not be before {moment}",
    "NotAfter": "must not be after {moment}",
    "MinAfter": "must be at least {duration} after {moment}",
    "MaxAfter": "must be at most {duration} after {moment}",
    "MinBefore": "must be at least {duration} before {moment}",
    "MaxBefore": "must be at most {duration} before {moment}",
}

_MEMBERSHIPS = {
    "Is": "must be {value}",
    "In": "must be one of {value}",
    "NotIn": "must not be one of {value}",
    "Before": "must be before {value}",
    "After": "must be after {value}",
    "NotBefore": "must not be before {value}",
    "NotAfter": "must not be after {value}",
}


def _build_english() -> dict[str, str]:
    bundle: dict[str, str] = {}
    for name, text in _COMPARISONS.items():
        bundle[bundle_key(name)] = text
        bundle[bundle_key(f"Year{name}")] = f"year {text}"
        bundle[bundle_key(f"YearMonth{name}")] = f"year-month {text}"
        bundle[bundle_key(f"Date{name}")] = f"date {text}"
        bundle[bundle_key(f"Time{name}")] = f"time {text}"
    for name, text in _MEMBERSHIPS.items():
        bundle[bundle_key(f"Month{name}")] = f"month {text}"
        bundle[bundle_key(f"Month{name}", FOR_MONTH)] = text
        bundle[bundle_key(f"DayOfWeek{name}")] = f"day of week {text}"
        bundle[bundle_key(f"DayOfWeek{name}", FOR_DAY_OF_WEEK)] = text
    for field, label in (("DayOfMonth", "day of month"), ("Hour", "hour"), ("Minute", "minute")):
        for name in ("Is", "In", "NotIn"):
            bundle[bundle_key(f"{field}{name}")] = f"{label} {_MEMBERSHIPS[name]}"
    bundle[bundle_key("MinuteModulo")] = "minute must be {value} modulo {modulo}"
    bundle[bundle_key("LastDayOfMonth")] = "must be the last day of the month"
    bundle[bundle_key("MinutePrecision")] = "must not have seconds or fractions of seconds"
    bundle[bundle_key("SecondPrecision")] = "must not have fractions of seconds"
    bundle[bundle_key("MillisecondPrecision")] = "must not have fractions of milliseconds"
    return bundle


ENGLISH: dict[str, str] = _build_english()


def format_attribute(value: Any) -> str:
    """Render an attribute for a message: enums by name, lists comma-separated."""
    if value is None:
        return ""
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, str):
        return value
    if isinstance(value, Iterable):
        return ", ".join(format_attribute(item) for item in value)
    return str(value)


def interpolate(
    template: str,
    attributes: Mapping[str, Any],
    overrides: Mapping[str, str] | None = None,
) -> str:
    """Resolve bundle references, then attribute references, in *template*.

    Args:
        template: The message template.
        attributes: Constraint attributes available as ``{name}``.
        overrides: Bundle entries that take precedence over the English bundle.
    """
    bundle = {**ENGLISH, **(overrides or {})}

    def resolve_key(match: re.Match[str]) -> str:
        return bundle.get(match.group(1), match.group(0))

    def resolve_attribute(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in attributes:
            return format_attribute(attributes[name])
        return match.group(0)

    return _REFERENCE_RE.sub(resolve_attribute, _REFERENCE_RE.sub(resolve_key, template))
