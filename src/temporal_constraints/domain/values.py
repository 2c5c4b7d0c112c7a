"""Partial date values the standard library has no type for.

``Year``, ``YearMonth`` and ``MonthDay`` are frozen, totally ordered
value objects with ISO-8601 parsing (``2007``, ``2007-12``, ``--12-03``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from temporal_constraints.domain.types import Month

_YEAR_RE = re.compile(r"^([-+]?\d{4,9})$")
_YEAR_MONTH_RE = re.compile(r"^([-+]?\d{4,9})-(\d{2})$")
_MONTH_DAY_RE = re.compile(r"^--(\d{2})-(\d{2})$")

# February 29 is a valid month-day; the year decides later.
_MAX_DAYS = (31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


@dataclass(frozen=True, order=True)
class Year:
    """A proleptic ISO year."""

    value: int

    @classmethod
    def parse(cls, text: str) -> Year:
        match = _YEAR_RE.match(text)
        if match is None:
            msg = f"Text {text!r} could not be parsed as a year"
            raise ValueError(msg)
        return cls(int(match.group(1)))

    def plus_years(self, years: int) -> Year:
        return Year(self.value + years)

    def __str__(self) -> str:
        return f"{self.value:04d}"


@dataclass(frozen=True, order=True)
class YearMonth:
    """A year and month, e.g. ``2007-12``."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            msg = f"Invalid month: {self.month}"
            raise ValueError(msg)

    @classmethod
    def parse(cls, text: str) -> YearMonth:
        match = _YEAR_MONTH_RE.match(text)
        if match is None:
            msg = f"Text {text!r} could not be parsed as a year-month"
            raise ValueError(msg)
        return cls(int(match.group(1)), int(match.group(2)))

    @property
    def month_of_year(self) -> Month:
        return Month(self.month)

    def plus_months(self, months: int) -> YearMonth:
        total = self.year * 12 + (self.month - 1) + months
        year, month_index = divmod(total, 12)
        return YearMonth(year, month_index + 1)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True, order=True)
class MonthDay:
    """A month and day of month without a year, e.g. ``--12-03``."""

    month: int
    day: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            msg = f"Invalid month: {self.month}"
            raise ValueError(msg)
        if not 1 <= self.day <= _MAX_DAYS[self.month - 1]:
            msg = f"Invalid day of month {self.day} for month {self.month}"
            raise ValueError(msg)

    @classmethod
    def parse(cls, text: str) -> MonthDay:
        match = _MONTH_DAY_RE.match(text)
        if match is None:
            msg = f"Text {text!r} could not be parsed as a month-day"
            raise ValueError(msg)
        return cls(int(match.group(1)), int(match.group(2)))

    @property
    def month_of_year(self) -> Month:
        return Month(self.month)

    def __str__(self) -> str:
        return f"--{self.month:02d}-{self.day:02d}"
