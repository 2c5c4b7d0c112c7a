"""Integer field predicates, last-day-of-month, and precision checks."""

from __future__ import annotations

import calendar
from collections.abc import Iterable
from datetime import date
from typing import Any

from temporal_constraints.domain.errors import ConfigurationError
from temporal_constraints.domain.types import Direction, Part

FIELD_RANGES: dict[Part, tuple[int, int]] = {
    Part.DAY_OF_MONTH: (1, 31),
    Part.HOUR: (0, 23),
    Part.MINUTE: (0, 59),
}

# Precision name -> (seconds must be zero, microsecond granularity)
PRECISIONS: dict[str, tuple[bool, int]] = {
    "minute": (True, 1_000_000),
    "second": (False, 1_000_000),
    "millisecond": (False, 1000),
}


def _check_range(part: Part, number: Any) -> int:
    minimum, maximum = FIELD_RANGES[part]
    if isinstance(number, bool) or not isinstance(number, int) or not minimum <= number <= maximum:
        msg = f"{number!r} is not a valid {part} (expected {minimum}..{maximum})"
        raise ConfigurationError(msg)
    return number


def allowed_numbers(part: Part, direction: Direction, value: Any) -> frozenset[int]:
    """Values of *part* allowed by ``is``, ``in`` or ``not_in``.

    Raises:
        ConfigurationError: If *value* is missing or out of range.
    """
    if value is None:
        msg = f"value is required for {part} constraints"
        raise ConfigurationError(msg)
    if direction is Direction.IS:
        return frozenset({_check_range(part, value)})
    items = [value] if isinstance(value, int) else value
    if not isinstance(items, Iterable) or isinstance(items, str):
        msg = f"{value!r} is not a list of {part} values"
        raise ConfigurationError(msg)
    listed = frozenset(_check_range(part, item) for item in items)
    if direction is Direction.IN:
        return listed
    if direction is Direction.NOT_IN:
        minimum, maximum = FIELD_RANGES[part]
        return frozenset(range(minimum, maximum + 1)) - listed
    msg = f"{direction} is not supported for {part}"
    raise ConfigurationError(msg)


def modulo_remainder(value: Any, modulo: Any) -> tuple[int, int]:
    """Validate ``MinuteModulo`` attributes; returns ``(modulo, remainder)``."""
    if isinstance(modulo, bool) or not isinstance(modulo, int) or modulo <= 0:
        msg = f"modulo must be a positive integer, is {modulo!r}"
        raise ConfigurationError(msg)
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"value must be an integer, is {value!r}"
        raise ConfigurationError(msg)
    return modulo, value % modulo


def is_last_day_of_month(day: date) -> bool:
    return day.day == calendar.monthrange(day.year, day.month)[1]


def has_precision(precision: str, second: int, microsecond: int) -> bool:
    """Whether a reading with *second* and *microsecond* has no finer component."""
    seconds_zero, divisor = PRECISIONS[precision]
    if seconds_zero and second != 0:
        return False
    return microsecond % divisor == 0
