"""Allowed sets for month and day-of-week constraints.

The set is computed once from a boundary (or list) and a direction;
validation is a frozenset lookup.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum, IntEnum
from typing import Any, TypeVar

from temporal_constraints.domain.errors import ConfigurationError
from temporal_constraints.domain.types import Direction

E = TypeVar("E", bound=IntEnum)


def coerce_member(enum_cls: type[E], raw: Any) -> E:
    """Accept a member, its integer value, or its name in any case.

    Raises:
        ConfigurationError: If *raw* names no member of *enum_cls*.
    """
    if isinstance(raw, enum_cls):
        return raw
    if isinstance(raw, Enum):
        msg = f"{raw!r} is not a {enum_cls.__name__}"
        raise ConfigurationError(msg)
    if isinstance(raw, int) and not isinstance(raw, bool):
        try:
            return enum_cls(raw)
        except ValueError as exc:
            msg = f"{raw} is not a valid {enum_cls.__name__}"
            raise ConfigurationError(msg) from exc
    if isinstance(raw, str):
        try:
            return enum_cls[raw.strip().upper()]
        except KeyError as exc:
            msg = f"{raw!r} is not a valid {enum_cls.__name__}"
            raise ConfigurationError(msg) from exc
    msg = f"{raw!r} is not a valid {enum_cls.__name__}"
    raise ConfigurationError(msg)


def _coerce_list(enum_cls: type[E], raw: Any) -> list[E]:
    if isinstance(raw, str | int):
        return [coerce_member(enum_cls, raw)]
    if isinstance(raw, Iterable):
        return [coerce_member(enum_cls, item) for item in raw]
    msg = f"{raw!r} is not a list of {enum_cls.__name__}"
    raise ConfigurationError(msg)


def allowed_set(enum_cls: type[E], direction: Direction, value: Any) -> frozenset[E]:
    """Members of *enum_cls* allowed by *direction* relative to *value*.

    For ``in``/``not_in`` *value* is a list (an empty ``in`` list allows
    nothing); otherwise it is a single boundary.

    Raises:
        ConfigurationError: If *value* is missing or malformed.
    """
    if value is None:
        msg = f"value is required for {enum_cls.__name__} constraints"
        raise ConfigurationError(msg)
    if direction is Direction.IN:
        return frozenset(_coerce_list(enum_cls, value))
    if direction is Direction.NOT_IN:
        excluded = set(_coerce_list(enum_cls, value))
        return frozenset(member for member in enum_cls if member not in excluded)

    boundary = coerce_member(enum_cls, value)
    if direction is Direction.IS:
        return frozenset({boundary})
    if direction is Direction.AFTER:
        return frozenset(member for member in enum_cls if member > boundary)
    if direction is Direction.NOT_AFTER:
        return frozenset(member for member in enum_cls if member <= boundary)
    if direction is Direction.BEFORE:
        return frozenset(member for member in enum_cls if member < boundary)
    return frozenset(member for member in enum_cls if member >= boundary)


def is_member(value: Any, allowed: frozenset[Any]) -> bool:
    """``None`` is always a member."""
    return value is None or value in allowed
