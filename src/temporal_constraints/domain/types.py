"""Temporal kinds and classification enums.

``TemporalKind`` is the closed set of value kinds every constraint is
implemented against. ``Month`` and ``DayOfWeek`` are ordered so that
enum-range constraints can be computed by comparison.
"""

from __future__ import annotations

from enum import IntEnum, StrEnum


class TemporalKind(StrEnum):
    """Supported target kinds."""

    TIMESTAMP = "timestamp"
    CALENDAR = "calendar"
    INSTANT = "instant"
    LOCAL_DATE = "local_date"
    LOCAL_DATE_TIME = "local_date_time"
    LOCAL_TIME = "local_time"
    OFFSET_DATE_TIME = "offset_date_time"
    OFFSET_TIME = "offset_time"
    ZONED_DATE_TIME = "zoned_date_time"
    YEAR = "year"
    YEAR_MONTH = "year_month"
    MONTH_DAY = "month_day"
    MONTH = "month"
    DAY_OF_WEEK = "day_of_week"


class ZoneCapability(StrEnum):
    """What a kind allows for its ``zone_id`` attribute."""

    OWN_ZONE = "own_zone"  # "provided" reads the value's own zone
    ZONE_REQUIRED = "zone_required"  # no zone of its own; "provided" is illegal
    SYSTEM_ONLY = "system_only"  # zone-naive; only "system" is legal


class Part(StrEnum):
    """Narrower views that can be extracted from a fuller value."""

    YEAR = "year"
    YEAR_MONTH = "year_month"
    DATE = "date"
    TIME = "time"
    MONTH = "month"
    DAY_OF_WEEK = "day_of_week"
    DAY_OF_MONTH = "day_of_month"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"
    MICROSECOND = "microsecond"


class Comparison(StrEnum):
    """Whole-value or part comparisons against a moment."""

    BEFORE = "before"
    AFTER = "after"
    NOT_BEFORE = "not_before"
    NOT_AFTER = "not_after"
    MIN_AFTER = "min_after"
    MAX_AFTER = "max_after"
    MIN_BEFORE = "min_before"
    MAX_BEFORE = "max_before"


class Direction(StrEnum):
    """How an allowed set is derived from a boundary value or list."""

    AFTER = "after"
    NOT_AFTER = "not_after"
    BEFORE = "before"
    NOT_BEFORE = "not_before"
    IS = "is"
    IN = "in"
    NOT_IN = "not_in"


class Month(IntEnum):
    """Months of the year, January first."""

    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12


class DayOfWeek(IntEnum):
    """ISO days of the week, Monday first (matches ``date.isoweekday()``)."""

    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7
