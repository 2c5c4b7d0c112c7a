"""Tests for integer field predicates."""

from __future__ import annotations

from datetime import date

import pytest

from temporal_constraints.domain.errors import ConfigurationError
from temporal_constraints.domain.types import Direction, Part
from temporal_constraints.services.fields import (
    allowed_numbers,
    has_precision,
    is_last_day_of_month,
    modulo_remainder,
)


class TestAllowedNumbers:
    def test_is(self) -> None:
        assert allowed_numbers(Part.HOUR, Direction.IS, 9) == {9}

    def test_in_scalar_and_list(self) -> None:
        assert allowed_numbers(Part.MINUTE, Direction.IN, 30) == {30}
        assert allowed_numbers(Part.MINUTE, Direction.IN, [0, 30]) == {0, 30}

    def test_not_in(self) -> None:
        allowed = allowed_numbers(Part.DAY_OF_MONTH, Direction.NOT_IN, [31])
        assert 31 not in allowed
        assert allowed == set(range(1, 31))

    @pytest.mark.parametrize(
        "part,value",
        [(Part.HOUR, 24), (Part.MINUTE, -1), (Part.DAY_OF_MONTH, 0), (Part.HOUR, "9")],
    )
    def test_out_of_range(self, part: Part, value: object) -> None:
        with pytest.raises(ConfigurationError, match="not a valid"):
            allowed_numbers(part, Direction.IS, value)

    def test_missing_value(self) -> None:
        with pytest.raises(ConfigurationError, match="value is required"):
            allowed_numbers(Part.HOUR, Direction.IN, None)

    def test_unsupported_direction(self) -> None:
        with pytest.raises(ConfigurationError, match="not supported"):
            allowed_numbers(Part.HOUR, Direction.AFTER, [1])


class TestModulo:
    def test_remainder(self) -> None:
        assert modulo_remainder(20, 15) == (15, 5)

    @pytest.mark.parametrize("modulo", [0, -5, None, True])
    def test_invalid_modulo(self, modulo: object) -> None:
        with pytest.raises(ConfigurationError, match="modulo"):
            modulo_remainder(0, modulo)

    def test_invalid_value(self) -> None:
        with pytest.raises(ConfigurationError, match="value"):
            modulo_remainder(None, 15)


@pytest.mark.parametrize(
    "day,expected",
    [
        (date(2024, 2, 29), True),
        (date(2023, 2, 28), True),
        (date(2024, 2, 28), False),
        (date(2024, 4, 30), True),
        (date(2024, 12, 31), True),
        (date(2024, 1, 30), False),
    ],
)
def test_last_day_of_month(day: date, expected: bool) -> None:
    assert is_last_day_of_month(day) is expected


@pytest.mark.parametrize(
    "precision,second,microsecond,expected",
    [
        ("minute", 0, 0, True),
        ("minute", 1, 0, False),
        ("minute", 0, 1, False),
        ("second", 59, 0, True),
        ("second", 0, 1, False),
        ("millisecond", 5, 123_000, True),
        ("millisecond", 5, 123_400, False),
    ],
)
def test_has_precision(precision: str, second: int, microsecond: int, expected: bool) -> None:
    assert has_precision(precision, second, microsecond) is expected
