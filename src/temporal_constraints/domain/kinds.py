"""Per-kind capability records.

Every ``TemporalKind`` has one ``KindProfile`` describing how a value of
that kind is recognised, parsed from an ISO-8601 moment literal, derived
from a clock, and ordered. Engines look profiles up instead of branching
on Python types.

Comparable forms:

- ``timestamp`` and ``instant`` compare as aware UTC datetimes;
- ``calendar`` compares as an aware datetime in its own zone;
- every other kind compares as itself.
"""

from __future__ import annotations

import re
import time as _time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta, timezone, tzinfo
from typing import Any

from dateutil import tz

from temporal_constraints.domain.clock import Clock
from temporal_constraints.domain.errors import UnsupportedKindError
from temporal_constraints.domain.types import (
    DayOfWeek,
    Month,
    Part,
    TemporalKind,
    ZoneCapability,
)
from temporal_constraints.domain.values import MonthDay, Year, YearMonth
from temporal_constraints.domain.zones import parse_zone_id

_ZONED_RE = re.compile(r"^(?P<base>[^\[]+)(?:\[(?P<zone>[^\]]+)\])?$")

_DATE_PARTS = frozenset({
    Part.YEAR, Part.YEAR_MONTH, Part.DATE, Part.MONTH, Part.DAY_OF_WEEK, Part.DAY_OF_MONTH,
})
_TIME_PARTS = frozenset({Part.TIME, Part.HOUR, Part.MINUTE, Part.SECOND, Part.MICROSECOND})
_ALL_PARTS = _DATE_PARTS | _TIME_PARTS


@dataclass(frozen=True)
class KindProfile:
    """What the engines need to know about one temporal kind."""

    kind: TemporalKind
    expected: str
    accepts: Callable[[Any], bool]
    zone_capability: ZoneCapability
    parse: Callable[[str], Any] | None
    now: Callable[[Clock], Any]
    comparable: Callable[[Any], Any]
    parts: frozenset[Part]

    @property
    def supports_moments(self) -> bool:
        return self.parse is not None

    def check_type(self, value: Any) -> None:
        """Raise ``TypeError`` if *value* is not of this kind."""
        if not self.accepts(value):
            msg = f"{self.kind} expects {self.expected}, got {type(value).__name__}"
            raise TypeError(msg)


# --- calendars (time.struct_time) ---


def calendar_to_datetime(value: _time.struct_time) -> datetime:
    """The instant of a ``struct_time`` in its own zone.

    A struct_time without ``tm_gmtoff`` is local time, read as ``time.mktime`` does.
    A leap second (``tm_sec == 60``) is held at the 59th second.
    """
    if value.tm_gmtoff is None:
        return datetime.fromtimestamp(_time.mktime(value), tz.tzlocal())
    offset = timedelta(seconds=value.tm_gmtoff)
    zone = timezone(offset, value.tm_zone) if value.tm_zone else timezone(offset)
    return datetime(*value[:5], min(value.tm_sec, 59), tzinfo=zone)


def calendar_from_datetime(value: datetime) -> _time.struct_time:
    """Build a ``struct_time`` that records the zone of an aware datetime."""
    offset = value.utcoffset()
    if offset is None:
        msg = "calendar values require an aware datetime"
        raise ValueError(msg)
    fields = tuple(value.timetuple())
    return _time.struct_time((*fields, value.tzname(), int(offset.total_seconds())))


# --- parsers ---


def _parse_aware(text: str) -> datetime:
    parsed = datetime.fromisoformat(text)
    if parsed.utcoffset() is None:
        msg = f"Text {text!r} has no offset"
        raise ValueError(msg)
    return parsed


def _parse_instant(text: str) -> datetime:
    return _parse_aware(text).astimezone(UTC)


def _parse_zoned(text: str) -> datetime:
    match = _ZONED_RE.match(text.strip())
    if match is None:
        msg = f"Text {text!r} could not be parsed as a zoned date-time"
        raise ValueError(msg)
    parsed = _parse_aware(match.group("base"))
    if match.group("zone"):
        return parsed.astimezone(parse_zone_id(match.group("zone")))
    return parsed


def _parse_naive_datetime(text: str) -> datetime:
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        msg = f"Text {text!r} must not have an offset"
        raise ValueError(msg)
    return parsed


def _parse_naive_time(text: str) -> time:
    parsed = time.fromisoformat(text)
    if parsed.tzinfo is not None:
        msg = f"Text {text!r} must not have an offset"
        raise ValueError(msg)
    return parsed


def _parse_offset_time(text: str) -> time:
    parsed = time.fromisoformat(text)
    if parsed.utcoffset() is None:
        msg = f"Text {text!r} has no offset"
        raise ValueError(msg)
    return parsed


def _parse_local_date(text: str) -> date:
    return date.fromisoformat(text)


# --- clocks ---


def _fixed_offset(value: datetime) -> tzinfo:
    offset = value.utcoffset()
    return timezone(offset) if offset else UTC


def _offset_now(clock: Clock) -> datetime:
    now = clock.now()
    return now.replace(tzinfo=_fixed_offset(now))


# --- type checks ---


def _is_timestamp(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _is_aware_datetime(value: Any) -> bool:
    return isinstance(value, datetime) and value.utcoffset() is not None


def _is_naive_datetime(value: Any) -> bool:
    return isinstance(value, datetime) and value.tzinfo is None


def _is_date(value: Any) -> bool:
    return isinstance(value, date) and not isinstance(value, datetime)


def _is_naive_time(value: Any) -> bool:
    return isinstance(value, time) and value.tzinfo is None


def _is_offset_time(value: Any) -> bool:
    return isinstance(value, time) and value.utcoffset() is not None


def _identity(value: Any) -> Any:
    return value


def _timestamp_to_datetime(value: float) -> datetime:
    return datetime.fromtimestamp(value, UTC)


def _instant_to_utc(value: datetime) -> datetime:
    return value.astimezone(UTC)


PROFILES: dict[TemporalKind, KindProfile] = {
    profile.kind: profile
    for profile in (
        KindProfile(
            kind=TemporalKind.TIMESTAMP,
            expected="int or float POSIX seconds",
            accepts=_is_timestamp,
            zone_capability=ZoneCapability.ZONE_REQUIRED,
            parse=_parse_instant,
            now=lambda clock: clock.instant(),
            comparable=_timestamp_to_datetime,
            parts=_ALL_PARTS,
        ),
        KindProfile(
            kind=TemporalKind.CALENDAR,
            expected="time.struct_time",
            accepts=lambda value: isinstance(value, _time.struct_time),
            zone_capability=ZoneCapability.OWN_ZONE,
            parse=_parse_zoned,
            now=lambda clock: clock.now(),
            comparable=calendar_to_datetime,
            parts=_ALL_PARTS,
        ),
        KindProfile(
            kind=TemporalKind.INSTANT,
            expected="aware datetime",
            accepts=_is_aware_datetime,
            zone_capability=ZoneCapability.ZONE_REQUIRED,
            parse=_parse_instant,
            now=lambda clock: clock.instant(),
            comparable=_instant_to_utc,
            parts=_ALL_PARTS,
        ),
        KindProfile(
            kind=TemporalKind.LOCAL_DATE,
            expected="date",
            accepts=_is_date,
            zone_capability=ZoneCapability.SYSTEM_ONLY,
            parse=_parse_local_date,
            now=lambda clock: clock.now().date(),
            comparable=_identity,
            parts=_DATE_PARTS,
        ),
        KindProfile(
            kind=TemporalKind.LOCAL_DATE_TIME,
            expected="naive datetime",
            accepts=_is_naive_datetime,
            zone_capability=ZoneCapability.SYSTEM_ONLY,
            parse=_parse_naive_datetime,
            now=lambda clock: clock.now().replace(tzinfo=None),
            comparable=_identity,
            parts=_ALL_PARTS,
        ),
        KindProfile(
            kind=TemporalKind.LOCAL_TIME,
            expected="naive time",
            accepts=_is_naive_time,
            zone_capability=ZoneCapability.SYSTEM_ONLY,
            parse=_parse_naive_time,
            now=lambda clock: clock.now().time(),
            comparable=_identity,
            parts=_TIME_PARTS,
        ),
        KindProfile(
            kind=TemporalKind.OFFSET_DATE_TIME,
            expected="aware datetime",
            accepts=_is_aware_datetime,
            zone_capability=ZoneCapability.OWN_ZONE,
            parse=_parse_aware,
            now=_offset_now,
            comparable=_identity,
            parts=_ALL_PARTS,
        ),
        KindProfile(
            kind=TemporalKind.OFFSET_TIME,
            expected="aware time",
            accepts=_is_offset_time,
            zone_capability=ZoneCapability.OWN_ZONE,
            parse=_parse_offset_time,
            now=lambda clock: _offset_now(clock).timetz(),
            comparable=_identity,
            parts=_TIME_PARTS,
        ),
        KindProfile(
            kind=TemporalKind.ZONED_DATE_TIME,
            expected="aware datetime",
            accepts=_is_aware_datetime,
            zone_capability=ZoneCapability.OWN_ZONE,
            parse=_parse_zoned,
            now=lambda clock: clock.now(),
            comparable=_identity,
            parts=_ALL_PARTS,
        ),
        KindProfile(
            kind=TemporalKind.YEAR,
            expected="Year",
            accepts=lambda value: isinstance(value, Year),
            zone_capability=ZoneCapability.SYSTEM_ONLY,
            parse=Year.parse,
            now=lambda clock: Year(clock.now().year),
            comparable=_identity,
            parts=frozenset(),
        ),
        KindProfile(
            kind=TemporalKind.YEAR_MONTH,
            expected="YearMonth",
            accepts=lambda value: isinstance(value, YearMonth),
            zone_capability=ZoneCapability.SYSTEM_ONLY,
            parse=YearMonth.parse,
            now=lambda clock: YearMonth(clock.now().year, clock.now().month),
            comparable=_identity,
            parts=frozenset({Part.YEAR, Part.MONTH}),
        ),
        KindProfile(
            kind=TemporalKind.MONTH_DAY,
            expected="MonthDay",
            accepts=lambda value: isinstance(value, MonthDay),
            zone_capability=ZoneCapability.SYSTEM_ONLY,
            parse=MonthDay.parse,
            now=lambda clock: MonthDay(clock.now().month, clock.now().day),
            comparable=_identity,
            parts=frozenset({Part.MONTH, Part.DAY_OF_MONTH}),
        ),
        KindProfile(
            kind=TemporalKind.MONTH,
            expected="Month",
            accepts=lambda value: isinstance(value, Month),
            zone_capability=ZoneCapability.SYSTEM_ONLY,
            parse=None,
            now=lambda clock: Month(clock.now().month),
            comparable=_identity,
            parts=frozenset({Part.MONTH}),
        ),
        KindProfile(
            kind=TemporalKind.DAY_OF_WEEK,
            expected="DayOfWeek",
            accepts=lambda value: isinstance(value, DayOfWeek),
            zone_capability=ZoneCapability.SYSTEM_ONLY,
            parse=None,
            now=lambda clock: DayOfWeek(clock.now().isoweekday()),
            comparable=_identity,
            parts=frozenset({Part.DAY_OF_WEEK}),
        ),
    )
}


def get_profile(kind: TemporalKind | str) -> KindProfile:
    """Look up the profile of *kind* (enum member or its string value)."""
    try:
        return PROFILES[TemporalKind(kind)]
    except ValueError as exc:
        msg = f"Unknown temporal kind: {kind!r}"
        raise UnsupportedKindError(msg) from exc
