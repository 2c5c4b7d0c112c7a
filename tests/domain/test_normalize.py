"""Tests for zone-aware normalization and part extraction."""

from __future__ import annotations

from datetime import UTC, date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from temporal_constraints.domain.errors import UnsupportedKindError
from temporal_constraints.domain.kinds import calendar_from_datetime
from temporal_constraints.domain.normalize import extract_part, to_zoned
from temporal_constraints.domain.types import DayOfWeek, Month, Part, TemporalKind
from temporal_constraints.domain.values import MonthDay, Year, YearMonth
from temporal_constraints.domain.zones import Explicit, SystemDefault, ValueOwnZone

AUCKLAND = ZoneInfo("Pacific/Auckland")
IN_AUCKLAND = Explicit(AUCKLAND, "Pacific/Auckland")
IN_UTC = Explicit(UTC, "UTC")
K = TemporalKind


class TestToZoned:
    def test_instant_takes_policy_zone(self) -> None:
        value = datetime(2024, 5, 1, 23, 30, tzinfo=UTC)
        zoned = to_zoned(value, K.INSTANT, IN_AUCKLAND)
        assert (zoned.date(), zoned.hour) == (date(2024, 5, 2), 11)

    def test_timestamp(self) -> None:
        zoned = to_zoned(0, K.TIMESTAMP, SystemDefault(UTC))
        assert zoned == datetime(1970, 1, 1, tzinfo=UTC)

    def test_local_date_time_gets_zone_attached(self) -> None:
        zoned = to_zoned(datetime(2024, 5, 1, 10, 0), K.LOCAL_DATE_TIME, SystemDefault(AUCKLAND))
        assert zoned.hour == 10
        assert zoned.tzinfo is AUCKLAND

    def test_year_has_no_zoned_view(self) -> None:
        with pytest.raises(UnsupportedKindError):
            to_zoned(Year(2024), K.YEAR, SystemDefault(UTC))


class TestOwnZoneIdempotence:
    @pytest.mark.parametrize(
        "value",
        [
            datetime(2024, 5, 1, 10, 15, 30, tzinfo=AUCKLAND),
            datetime(2024, 12, 31, 23, 59, 59, 999, tzinfo=timezone(timedelta(hours=-5))),
        ],
    )
    @pytest.mark.parametrize("kind", [K.ZONED_DATE_TIME, K.OFFSET_DATE_TIME])
    def test_wall_clock_unchanged(self, kind: TemporalKind, value: datetime) -> None:
        zoned = to_zoned(value, kind, ValueOwnZone())
        assert zoned.timetuple()[:6] == value.timetuple()[:6]
        assert zoned.microsecond == value.microsecond
        assert zoned.utcoffset() == value.utcoffset()

    def test_calendar_wall_clock_unchanged(self) -> None:
        value = datetime(2024, 5, 1, 10, 15, 30, tzinfo=AUCKLAND)
        zoned = to_zoned(calendar_from_datetime(value), K.CALENDAR, ValueOwnZone())
        assert zoned.timetuple()[:6] == value.timetuple()[:6]

    def test_offset_time_wall_clock_unchanged(self) -> None:
        value = time(10, 15, tzinfo=timezone(timedelta(hours=2)))
        assert extract_part(value, K.OFFSET_TIME, ValueOwnZone(), Part.TIME) == time(10, 15)


class TestExtractPart:
    def test_date_and_day_of_week_after_conversion(self) -> None:
        value = datetime(2024, 5, 1, 23, 30, tzinfo=UTC)
        assert extract_part(value, K.INSTANT, IN_AUCKLAND, Part.DATE) == date(2024, 5, 2)
        assert extract_part(value, K.INSTANT, IN_AUCKLAND, Part.DAY_OF_WEEK) is DayOfWeek.THURSDAY
        assert extract_part(value, K.INSTANT, IN_UTC, Part.DAY_OF_WEEK) is DayOfWeek.WEDNESDAY

    def test_zoned_converted_unless_own_zone(self) -> None:
        value = datetime(2024, 5, 2, 1, 0, tzinfo=AUCKLAND)
        assert extract_part(value, K.ZONED_DATE_TIME, ValueOwnZone(), Part.DATE) == date(2024, 5, 2)
        assert extract_part(value, K.ZONED_DATE_TIME, IN_UTC, Part.DATE) == date(2024, 5, 1)

    def test_calendar_hour(self) -> None:
        cal = calendar_from_datetime(datetime(2024, 5, 1, 14, 0, tzinfo=AUCKLAND))
        assert extract_part(cal, K.CALENDAR, ValueOwnZone(), Part.HOUR) == 14
        assert extract_part(cal, K.CALENDAR, IN_UTC, Part.HOUR) == 2

    def test_offset_time_converted(self) -> None:
        value = time(10, 0, tzinfo=timezone(timedelta(hours=2)))
        assert extract_part(value, K.OFFSET_TIME, IN_UTC, Part.HOUR) == 8

    def test_time_part_is_naive(self) -> None:
        value = datetime(2024, 5, 1, 10, 15, tzinfo=UTC)
        assert extract_part(value, K.INSTANT, IN_UTC, Part.TIME) == time(10, 15)

    def test_local_values_read_directly(self) -> None:
        policy = SystemDefault(AUCKLAND)
        assert extract_part(date(2024, 2, 29), K.LOCAL_DATE, policy, Part.DAY_OF_MONTH) == 29
        assert extract_part(time(7, 45), K.LOCAL_TIME, policy, Part.MINUTE) == 45

    def test_partial_dates(self) -> None:
        policy = SystemDefault(UTC)
        assert extract_part(YearMonth(2020, 6), K.YEAR_MONTH, policy, Part.MONTH) is Month.JUNE
        assert extract_part(MonthDay(12, 3), K.MONTH_DAY, policy, Part.MONTH) is Month.DECEMBER
        assert extract_part(MonthDay(12, 3), K.MONTH_DAY, policy, Part.DAY_OF_MONTH) == 3

    def test_year_and_year_month(self) -> None:
        policy = SystemDefault(UTC)
        assert extract_part(YearMonth(2020, 6), K.YEAR_MONTH, policy, Part.YEAR) == Year(2020)
        end_of_june = date(2020, 6, 30)
        june = extract_part(end_of_june, K.LOCAL_DATE, policy, Part.YEAR_MONTH)
        assert june == YearMonth(2020, 6)
        new_year = datetime(2024, 12, 31, 12, 0, tzinfo=UTC)  # 2025-01-01 01:00 in Auckland
        assert extract_part(new_year, K.INSTANT, IN_AUCKLAND, Part.YEAR) == Year(2025)
        assert extract_part(new_year, K.INSTANT, IN_UTC, Part.YEAR_MONTH) == YearMonth(2024, 12)

    def test_enum_values(self) -> None:
        policy = SystemDefault(UTC)
        assert extract_part(Month.MAY, K.MONTH, policy, Part.MONTH) is Month.MAY
        assert (
            extract_part(DayOfWeek.SUNDAY, K.DAY_OF_WEEK, policy, Part.DAY_OF_WEEK)
            is DayOfWeek.SUNDAY
        )

    @pytest.mark.parametrize(
        "value,kind,part",
        [
            (date(2024, 1, 1), K.LOCAL_DATE, Part.HOUR),
            (time(10, 0), K.LOCAL_TIME, Part.DATE),
            (Year(2024), K.YEAR, Part.MONTH),
            (YearMonth(2024, 1), K.YEAR_MONTH, Part.YEAR_MONTH),
            (time(10, 0), K.LOCAL_TIME, Part.YEAR),
            (Month.MAY, K.MONTH, Part.DAY_OF_MONTH),
        ],
    )
    def test_missing_part(self, value: object, kind: TemporalKind, part: Part) -> None:
        with pytest.raises(UnsupportedKindError, match="no"):
            extract_part(value, kind, SystemDefault(UTC), part)
