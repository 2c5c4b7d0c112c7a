"""Zone-aware normalization and part extraction.

``to_zoned`` turns a value of any datetime-like kind into an aware
datetime under a zone policy. ``extract_part`` reads one field (year,
date, time of day, month, ...) from that view.

- Own-zone kinds (calendar, offset, zoned) are converted to the policy's
  zone, keeping the instant; ``ValueOwnZone`` reads them unconverted.
- Zone-required kinds (timestamp, instant) get the policy's zone attached.
- System-only kinds are read directly.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, date, datetime, time, timezone
from typing import Any

from temporal_constraints.domain.errors import UnsupportedKindError
from temporal_constraints.domain.kinds import calendar_to_datetime, get_profile
from temporal_constraints.domain.types import DayOfWeek, Month, Part, TemporalKind
from temporal_constraints.domain.values import MonthDay, Year, YearMonth
from temporal_constraints.domain.zones import ValueOwnZone, ZonePolicy


def to_zoned(value: Any, kind: TemporalKind, policy: ZonePolicy) -> datetime:
    """An aware datetime view of *value* under *policy*.

    Raises:
        UnsupportedKindError: If *kind* has no time line (year, month, ...).
    """
    own_zone = isinstance(policy, ValueOwnZone)
    zone = policy.zone

    if kind is TemporalKind.TIMESTAMP:
        return datetime.fromtimestamp(value, UTC).astimezone(zone)
    if kind is TemporalKind.INSTANT:
        return value.astimezone(zone)
    if kind is TemporalKind.CALENDAR:
        own = calendar_to_datetime(value)
        return own if own_zone else own.astimezone(zone)
    if kind in (TemporalKind.OFFSET_DATE_TIME, TemporalKind.ZONED_DATE_TIME):
        return value if own_zone else value.astimezone(zone)
    if kind is TemporalKind.OFFSET_TIME:
        own = datetime.combine(date.today(), value)
        if own_zone:
            return own
        converted = own.astimezone(zone)
        return converted.replace(tzinfo=timezone(converted.utcoffset()))
    if kind is TemporalKind.LOCAL_DATE_TIME:
        return value.replace(tzinfo=zone)
    if kind is TemporalKind.LOCAL_DATE:
        return datetime.combine(value, time(), zone)
    if kind is TemporalKind.LOCAL_TIME:
        return datetime.combine(date.today(), value, zone)
    msg = f"{kind} values have no zoned representation"
    raise UnsupportedKindError(msg)


def _date_of(view: date | datetime) -> date:
    return view.date() if isinstance(view, datetime) else view


def _time_of(view: time | datetime) -> time:
    return view.time() if isinstance(view, datetime) else view


_PART_READERS: dict[Part, Callable[[Any], Any]] = {
    Part.YEAR: lambda view: Year(view.year),
    Part.YEAR_MONTH: lambda view: YearMonth(view.year, view.month),
    Part.DATE: _date_of,
    Part.TIME: _time_of,
    Part.MONTH: lambda view: Month(view.month),
    Part.DAY_OF_WEEK: lambda view: DayOfWeek(view.isoweekday()),
    Part.DAY_OF_MONTH: lambda view: view.day,
    Part.HOUR: lambda view: view.hour,
    Part.MINUTE: lambda view: view.minute,
    Part.SECOND: lambda view: view.second,
    Part.MICROSECOND: lambda view: view.microsecond,
}


def _wall_view(value: Any, kind: TemporalKind, policy: ZonePolicy) -> Any:
    # The wall-clock reading every part is taken from.
    if kind in (TemporalKind.LOCAL_DATE, TemporalKind.LOCAL_TIME):
        return value
    if kind is TemporalKind.OFFSET_TIME:
        if isinstance(policy, ValueOwnZone):
            return value.replace(tzinfo=None)
        return to_zoned(value, kind, policy).time()
    return to_zoned(value, kind, policy)


def extract_part(value: Any, kind: TemporalKind, policy: ZonePolicy, part: Part) -> Any:
    """Read *part* from *value* after applying *policy*.

    ``Part.TIME`` yields a naive time of day; ``Part.YEAR`` and
    ``Part.YEAR_MONTH`` yield ``Year`` and ``YearMonth`` values; ``Part.MONTH``
    and ``Part.DAY_OF_WEEK`` yield ``Month`` and ``DayOfWeek`` members.

    Raises:
        UnsupportedKindError: If *kind* does not carry *part*.
    """
    profile = get_profile(kind)
    if part not in profile.parts:
        msg = f"{kind} values have no {part} part"
        raise UnsupportedKindError(msg)

    if kind is TemporalKind.MONTH:
        return Month(value)
    if kind is TemporalKind.DAY_OF_WEEK:
        return DayOfWeek(value)
    if kind is TemporalKind.YEAR_MONTH:
        year_month: YearMonth = value
        return Year(year_month.year) if part is Part.YEAR else year_month.month_of_year
    if kind is TemporalKind.MONTH_DAY:
        month_day: MonthDay = value
        return month_day.month_of_year if part is Part.MONTH else month_day.day

    return _PART_READERS[part](_wall_view(value, kind, policy))
