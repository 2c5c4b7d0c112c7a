"""ISO-8601 durations and their application to each temporal kind.

A duration has a calendar part (years, months, weeks folded into days)
and an exact part (hours, minutes, seconds). Applying a duration adds
the exact part first and the calendar part second, on the value's own
wall clock. Calendar arithmetic uses ``dateutil.relativedelta`` so that
month ends clamp (``2020-01-31 + P1M == 2020-02-29``).

Kinds reject the units they cannot represent: a local date has no time
part, a local time has no date part, a year has neither months nor days.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, time, timedelta, tzinfo
from typing import Any

from dateutil.relativedelta import relativedelta

from temporal_constraints.domain.errors import ConfigurationError, DurationParseError
from temporal_constraints.domain.types import TemporalKind
from temporal_constraints.domain.values import Year, YearMonth
from temporal_constraints.domain.zones import system_default_zone

_DURATION_RE = re.compile(
    r"^(?P<sign>[-+]?)P"
    r"(?:(?P<years>[-+]?\d+)Y)?"
    r"(?:(?P<months>[-+]?\d+)M)?"
    r"(?:(?P<weeks>[-+]?\d+)W)?"
    r"(?:(?P<days>[-+]?\d+)D)?"
    r"(?P<time>T"
    r"(?:(?P<hours>[-+]?\d+)H)?"
    r"(?:(?P<minutes>[-+]?\d+)M)?"
    r"(?:(?P<seconds>[-+]?\d+)(?:[.,](?P<fraction>\d{0,9}))?S)?"
    r")?$",
    re.IGNORECASE,
)

_DATE_FIELDS = ("years", "months", "weeks", "days")
_TIME_FIELDS = ("hours", "minutes", "seconds")

# Anchor date for wrapping time-of-day arithmetic around midnight.
_ANCHOR = date(2000, 1, 1)


@dataclass(frozen=True)
class IsoDuration:
    """A parsed ISO-8601 duration."""

    years: int = 0
    months: int = 0
    days: int = 0
    exact: timedelta = timedelta(0)
    text: str = field(default="", compare=False)

    @property
    def has_period(self) -> bool:
        return bool(self.years or self.months or self.days)

    @property
    def has_exact(self) -> bool:
        return self.exact != timedelta(0)

    def period(self, sign: int = 1) -> relativedelta:
        """The calendar part as a relativedelta, multiplied by *sign*."""
        return relativedelta(
            years=sign * self.years,
            months=sign * self.months,
            days=sign * self.days,
        )

    def __str__(self) -> str:
        return self.text


def parse_duration(text: str) -> IsoDuration:
    """Parse ``PnYnMnWnDTnHnMn.nS`` (signs allowed per field and in front).

    Raises:
        DurationParseError: If *text* is not a valid ISO-8601 duration.
    """
    match = _DURATION_RE.match(text.strip())
    if match is None:
        msg = f"Text {text!r} cannot be parsed to a duration"
        raise DurationParseError(msg)
    groups = match.groupdict()
    has_date = any(groups[name] is not None for name in _DATE_FIELDS)
    has_time = any(groups[name] is not None for name in _TIME_FIELDS)
    if groups["time"] is not None and not has_time:
        msg = f"Text {text!r} cannot be parsed to a duration: empty time section"
        raise DurationParseError(msg)
    if not has_date and not has_time:
        msg = f"Text {text!r} cannot be parsed to a duration: no fields"
        raise DurationParseError(msg)

    def number(name: str) -> int:
        raw = groups[name]
        return int(raw) if raw is not None else 0

    microseconds = 0
    if groups["fraction"]:
        # Nanosecond digits beyond microsecond resolution are dropped.
        microseconds = int(groups["fraction"].ljust(6, "0")[:6])
        if (groups["seconds"] or "").startswith("-"):
            microseconds = -microseconds

    sign = -1 if groups["sign"] == "-" else 1
    exact = timedelta(
        hours=number("hours"),
        minutes=number("minutes"),
        seconds=number("seconds"),
        microseconds=microseconds,
    )
    return IsoDuration(
        years=sign * number("years"),
        months=sign * number("months"),
        days=sign * (number("weeks") * 7 + number("days")),
        exact=sign * exact,
        text=text,
    )


def apply_duration(
    value: Any,
    kind: TemporalKind,
    duration: IsoDuration,
    sign: int = 1,
    *,
    system_zone: tzinfo | None = None,
) -> Any:
    """Add (``sign=1``) or subtract (``sign=-1``) *duration* to *value*.

    *value* is in the kind's comparable form: an aware UTC datetime for
    timestamps and instants, an aware datetime for calendars.

    Raises:
        ConfigurationError: If the kind cannot represent a unit of the duration.
    """
    if kind in (TemporalKind.TIMESTAMP, TemporalKind.INSTANT):
        return _instant_plus(value, duration, sign, system_zone)
    if kind in (
        TemporalKind.CALENDAR,
        TemporalKind.OFFSET_DATE_TIME,
        TemporalKind.ZONED_DATE_TIME,
    ):
        return _zoned_plus(value, duration, sign)
    if kind is TemporalKind.LOCAL_DATE_TIME:
        return value + sign * duration.exact + duration.period(sign)
    if kind is TemporalKind.LOCAL_DATE:
        _reject(duration.has_exact, duration, kind, "time units")
        result: date = value + duration.period(sign)
        return result
    if kind in (TemporalKind.LOCAL_TIME, TemporalKind.OFFSET_TIME):
        _reject(duration.has_period, duration, kind, "date units")
        return _time_plus(value, sign * duration.exact)
    if kind is TemporalKind.YEAR:
        _reject(duration.has_exact, duration, kind, "time units")
        _reject(bool(duration.months or duration.days), duration, kind, "months or days")
        year: Year = value
        return year.plus_years(sign * duration.years)
    if kind is TemporalKind.YEAR_MONTH:
        _reject(duration.has_exact, duration, kind, "time units")
        _reject(bool(duration.days), duration, kind, "days")
        year_month: YearMonth = value
        return year_month.plus_months(sign * (duration.years * 12 + duration.months))
    msg = f"Durations cannot be applied to {kind}"
    raise ConfigurationError(msg)


def _instant_plus(
    value: datetime,
    duration: IsoDuration,
    sign: int,
    system_zone: tzinfo | None,
) -> datetime:
    result = value.astimezone(UTC) + sign * duration.exact
    if duration.has_period:
        zone = system_zone if system_zone is not None else system_default_zone()
        local = result.astimezone(zone) + duration.period(sign)
        result = local.astimezone(UTC)
    return result


def _zoned_plus(value: datetime, duration: IsoDuration, sign: int) -> datetime:
    zone = value.tzinfo
    result = value
    if duration.has_exact:
        result = (value.astimezone(UTC) + sign * duration.exact).astimezone(zone)
    if duration.has_period:
        result = result + duration.period(sign)
    return result


def _time_plus(value: time, delta: timedelta) -> time:
    # Time of day wraps around midnight.
    return (datetime.combine(_ANCHOR, value) + delta).timetz()


def _reject(condition: bool, duration: IsoDuration, kind: TemporalKind, units: str) -> None:
    if condition:
        msg = f"Duration {duration.text!r} uses {units}, which {kind} does not support"
        raise ConfigurationError(msg)
