"""Comparisons of a value against a resolved moment.

The Min/Max variants reduce to a base comparison against ``moment ± duration``:

=============  ==========  ===============
comparison     duration    base
=============  ==========  ===============
min_after      added       not_before
max_after      added       not_after
min_before     subtracted  not_after
max_before     subtracted  not_before
=============  ==========  ===============
"""

from __future__ import annotations

from typing import Any

from temporal_constraints.domain.types import Comparison

_DERIVED: dict[Comparison, tuple[int, Comparison]] = {
    Comparison.MIN_AFTER: (1, Comparison.NOT_BEFORE),
    Comparison.MAX_AFTER: (1, Comparison.NOT_AFTER),
    Comparison.MIN_BEFORE: (-1, Comparison.NOT_AFTER),
    Comparison.MAX_BEFORE: (-1, Comparison.NOT_BEFORE),
}


def requires_duration(comparison: Comparison) -> bool:
    return comparison in _DERIVED


def duration_sign(comparison: Comparison) -> int:
    """``1`` when the duration is added to the moment, ``-1`` when subtracted."""
    return _DERIVED.get(comparison, (1, comparison))[0]


def base_comparison(comparison: Comparison) -> Comparison:
    return _DERIVED.get(comparison, (1, comparison))[1]


def compare(value: Any, target: Any, comparison: Comparison) -> bool:
    """Apply *comparison* between *value* and an already offset *target*.

    ``None`` is always valid.
    """
    if value is None:
        return True
    base = base_comparison(comparison)
    if base is Comparison.BEFORE:
        return bool(value < target)
    if base is Comparison.AFTER:
        return bool(value > target)
    if base is Comparison.NOT_BEFORE:
        return not value < target
    return not value > target
