"""Tests for ISO-8601 duration parsing and per-kind application."""

from __future__ import annotations

from datetime import UTC, date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from temporal_constraints.domain.durations import apply_duration, parse_duration
from temporal_constraints.domain.errors import ConfigurationError, DurationParseError
from temporal_constraints.domain.types import TemporalKind
from temporal_constraints.domain.values import MonthDay, Year, YearMonth

PARIS = ZoneInfo("Europe/Paris")


class TestParseDuration:
    def test_all_fields(self) -> None:
        d = parse_duration("P1Y2M3W4DT5H6M7.5S")
        assert (d.years, d.months, d.days) == (1, 2, 25)
        assert d.exact == timedelta(hours=5, minutes=6, seconds=7, microseconds=500_000)
        assert d.has_period and d.has_exact
        assert str(d) == "P1Y2M3W4DT5H6M7.5S"

    def test_leading_sign_negates(self) -> None:
        d = parse_duration("-P1DT1H")
        assert d.days == -1
        assert d.exact == timedelta(hours=-1)

    def test_field_sign(self) -> None:
        d = parse_duration("PT-30M")
        assert d.exact == timedelta(minutes=-30)
        assert not d.has_period

    def test_lowercase(self) -> None:
        assert parse_duration("pt1h").exact == timedelta(hours=1)

    def test_nanoseconds_truncated(self) -> None:
        assert parse_duration("PT0.123456789S").exact == timedelta(microseconds=123456)

    @pytest.mark.parametrize("text", ["", "P", "PT", "1D", "P1H", "P1DT", "PT1D", "one day"])
    def test_invalid(self, text: str) -> None:
        with pytest.raises(DurationParseError):
            parse_duration(text)

    def test_parse_error_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_duration("nope")


class TestApplyDuration:
    def test_exact_part_applied_before_period(self) -> None:
        value = datetime(2020, 1, 30, 23, 0)
        result = apply_duration(value, TemporalKind.LOCAL_DATE_TIME, parse_duration("P1MT1H"))
        assert result == datetime(2020, 2, 29, 0, 0)

    def test_month_end_clamps(self) -> None:
        result = apply_duration(date(2020, 1, 31), TemporalKind.LOCAL_DATE, parse_duration("P1M"))
        assert result == date(2020, 2, 29)

    def test_subtract(self) -> None:
        result = apply_duration(
            date(2020, 3, 1), TemporalKind.LOCAL_DATE, parse_duration("P1D"), sign=-1
        )
        assert result == date(2020, 2, 29)

    def test_local_date_rejects_time_units(self) -> None:
        with pytest.raises(ConfigurationError, match="time units"):
            apply_duration(date(2020, 1, 1), TemporalKind.LOCAL_DATE, parse_duration("PT1H"))

    def test_local_time_wraps_midnight(self) -> None:
        result = apply_duration(time(23, 30), TemporalKind.LOCAL_TIME, parse_duration("PT1H"))
        assert result == time(0, 30)

    def test_offset_time_keeps_offset(self) -> None:
        plus_two = timezone(timedelta(hours=2))
        result = apply_duration(
            time(10, 0, tzinfo=plus_two), TemporalKind.OFFSET_TIME, parse_duration("PT15M")
        )
        assert result == time(10, 15, tzinfo=plus_two)
        assert result.utcoffset() == timedelta(hours=2)

    def test_local_time_rejects_date_units(self) -> None:
        with pytest.raises(ConfigurationError, match="date units"):
            apply_duration(time(10, 0), TemporalKind.LOCAL_TIME, parse_duration("P1D"))

    def test_year(self) -> None:
        result = apply_duration(Year(2020), TemporalKind.YEAR, parse_duration("P2Y"), sign=-1)
        assert result == Year(2018)

    @pytest.mark.parametrize("text", ["P1M", "P1D", "PT1H"])
    def test_year_rejects_finer_units(self, text: str) -> None:
        with pytest.raises(ConfigurationError):
            apply_duration(Year(2020), TemporalKind.YEAR, parse_duration(text))

    def test_year_month(self) -> None:
        kind = TemporalKind.YEAR_MONTH
        assert apply_duration(YearMonth(2020, 12), kind, parse_duration("P1M")) == YearMonth(
            2021, 1
        )
        assert apply_duration(
            YearMonth(2020, 12), kind, parse_duration("P1Y2M"), sign=-1
        ) == YearMonth(2019, 10)

    def test_year_month_rejects_days(self) -> None:
        with pytest.raises(ConfigurationError, match="days"):
            apply_duration(YearMonth(2020, 1), TemporalKind.YEAR_MONTH, parse_duration("P1W"))

    def test_instant_period_in_system_zone(self) -> None:
        value = datetime(2020, 1, 31, tzinfo=UTC)
        result = apply_duration(
            value, TemporalKind.INSTANT, parse_duration("P1M"), system_zone=UTC
        )
        assert result == datetime(2020, 2, 29, tzinfo=UTC)

    def test_zoned_period_keeps_wall_clock_across_dst(self) -> None:
        value = datetime(2024, 3, 30, 12, 0, tzinfo=PARIS)
        result = apply_duration(value, TemporalKind.ZONED_DATE_TIME, parse_duration("P1D"))
        assert (result.day, result.hour) == (31, 12)
        assert result.utcoffset() == timedelta(hours=2)

    def test_zoned_exact_is_elapsed_time_across_dst(self) -> None:
        value = datetime(2024, 3, 30, 12, 0, tzinfo=PARIS)
        result = apply_duration(value, TemporalKind.ZONED_DATE_TIME, parse_duration("PT24H"))
        assert (result.day, result.hour) == (31, 13)

    def test_month_day_has_no_durations(self) -> None:
        with pytest.raises(ConfigurationError, match="cannot be applied"):
            apply_duration(MonthDay(1, 1), TemporalKind.MONTH_DAY, parse_duration("P1D"))
