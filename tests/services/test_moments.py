"""Tests for moment initialization and per-call resolution."""

from __future__ import annotations

from datetime import UTC, date, datetime, time

import pytest

from temporal_constraints.domain.clock import FixedClock
from temporal_constraints.domain.errors import (
    ConfigurationError,
    DurationParseError,
    MomentParseError,
)
from temporal_constraints.domain.kinds import get_profile
from temporal_constraints.domain.types import TemporalKind
from temporal_constraints.domain.values import YearMonth
from temporal_constraints.services.moments import initialize_moment, resolve_moment

CLOCK = FixedClock(datetime(2024, 5, 1, 12, 0, tzinfo=UTC))


class TestInitializeMoment:
    def test_literal(self) -> None:
        spec = initialize_moment(get_profile("local_date"), "2007-12-03")
        assert spec.value == date(2007, 12, 3)
        assert not spec.is_now
        assert spec.duration is None

    def test_literal_duration_folded_once(self) -> None:
        spec = initialize_moment(get_profile("local_date"), "2024-01-31", "P1M")
        assert spec.value == date(2024, 2, 29)
        assert spec.duration is None

    def test_literal_duration_subtracted(self) -> None:
        spec = initialize_moment(get_profile("year_month"), "2024-01", "P1M", sign=-1)
        assert spec.value == YearMonth(2023, 12)

    def test_now_keeps_duration(self) -> None:
        spec = initialize_moment(get_profile("local_time"), "now", "PT1H", sign=-1)
        assert spec.is_now
        assert spec.value is None
        assert spec.duration is not None
        assert spec.sign == -1

    def test_missing_moment(self) -> None:
        with pytest.raises(ConfigurationError, match="moment is required"):
            initialize_moment(get_profile("instant"), None)

    def test_bad_literal(self) -> None:
        with pytest.raises(MomentParseError, match="Invalid moment 'yesterday'"):
            initialize_moment(get_profile("instant"), "yesterday")

    def test_bad_duration(self) -> None:
        with pytest.raises(DurationParseError):
            initialize_moment(get_profile("instant"), "now", "1 day")

    def test_duration_unit_checked_even_for_now(self) -> None:
        with pytest.raises(ConfigurationError, match="time units"):
            initialize_moment(get_profile("local_date"), "now", "PT1H")

    @pytest.mark.parametrize("moment,sign", [("9999-12-31", 1), ("0001-01-01", -1)])
    def test_folding_out_of_range(self, moment: str, sign: int) -> None:
        with pytest.raises(ConfigurationError, match="cannot be applied to moment"):
            initialize_moment(get_profile("local_date"), moment, "P1D", sign=sign)

    @pytest.mark.parametrize("kind", [TemporalKind.MONTH, TemporalKind.DAY_OF_WEEK])
    def test_enum_kinds_have_no_moments(self, kind: TemporalKind) -> None:
        with pytest.raises(ConfigurationError, match="cannot be compared"):
            initialize_moment(get_profile(kind), "now")


class TestResolveMoment:
    def test_literal_ignores_clock(self) -> None:
        profile = get_profile("local_date")
        spec = initialize_moment(profile, "2007-12-03")
        assert resolve_moment(spec, profile, CLOCK) == date(2007, 12, 3)

    def test_now_from_clock(self) -> None:
        profile = get_profile("instant")
        spec = initialize_moment(profile, "now")
        assert resolve_moment(spec, profile, CLOCK) == datetime(2024, 5, 1, 12, 0, tzinfo=UTC)

    def test_now_with_duration_applied_per_call(self) -> None:
        profile = get_profile("local_time")
        spec = initialize_moment(profile, "now", "PT1H", sign=-1)
        assert resolve_moment(spec, profile, CLOCK) == time(11, 0)
        later = FixedClock(datetime(2024, 5, 1, 18, 30, tzinfo=UTC))
        assert resolve_moment(spec, profile, later) == time(17, 30)
