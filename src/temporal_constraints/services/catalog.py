"""The constraint catalog: which engine serves each (constraint, kind) pair.

``CATALOG`` maps a constraint name to a ``ConstraintSpec``; the spec
lists the kinds the constraint is implemented for and builds the
validator. ``create_validator`` is the single entry point.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import tzinfo
from typing import Any

from temporal_constraints.domain.errors import UnknownConstraintError, UnsupportedKindError
from temporal_constraints.domain.kinds import get_profile
from temporal_constraints.domain.messages import FOR_DAY_OF_WEEK, FOR_MONTH
from temporal_constraints.domain.types import (
    Comparison,
    DayOfWeek,
    Direction,
    Month,
    Part,
    TemporalKind,
)
from temporal_constraints.services.contracts import ConstraintConfig
from temporal_constraints.services.validators import (
    ConstraintValidator,
    EnumValidator,
    FieldValidator,
    LastDayOfMonthValidator,
    ModuloValidator,
    MomentValidator,
    PartMomentValidator,
    PrecisionValidator,
)

logger = logging.getLogger(__name__)

K = TemporalKind

# ---------------------------------------------------------------------------
# Kind sets per family
# ---------------------------------------------------------------------------

WHOLE_VALUE_KINDS = frozenset({
    K.TIMESTAMP, K.CALENDAR, K.INSTANT, K.LOCAL_DATE, K.LOCAL_DATE_TIME, K.LOCAL_TIME,
    K.MONTH_DAY, K.OFFSET_DATE_TIME, K.OFFSET_TIME, K.YEAR, K.YEAR_MONTH, K.ZONED_DATE_TIME,
})
DURATION_KINDS = WHOLE_VALUE_KINDS - {K.MONTH_DAY}
DATE_TIME_PART_KINDS = frozenset({
    K.TIMESTAMP, K.CALENDAR, K.INSTANT, K.LOCAL_DATE_TIME, K.OFFSET_DATE_TIME, K.ZONED_DATE_TIME,
})
YEAR_MONTH_PART_KINDS = DATE_TIME_PART_KINDS | {K.LOCAL_DATE}
YEAR_PART_KINDS = YEAR_MONTH_PART_KINDS | {K.YEAR_MONTH}
PART_MOMENT_FAMILIES = (
    (Part.YEAR, YEAR_PART_KINDS),
    (Part.YEAR_MONTH, YEAR_MONTH_PART_KINDS),
    (Part.DATE, DATE_TIME_PART_KINDS),
    (Part.TIME, DATE_TIME_PART_KINDS),
)
MONTH_KINDS = frozenset({
    K.TIMESTAMP, K.CALENDAR, K.INSTANT, K.LOCAL_DATE, K.LOCAL_DATE_TIME, K.MONTH,
    K.MONTH_DAY, K.OFFSET_DATE_TIME, K.YEAR_MONTH, K.ZONED_DATE_TIME,
})
DAY_OF_WEEK_KINDS = frozenset({
    K.TIMESTAMP, K.CALENDAR, K.DAY_OF_WEEK, K.INSTANT, K.LOCAL_DATE, K.LOCAL_DATE_TIME,
    K.OFFSET_DATE_TIME, K.ZONED_DATE_TIME,
})
DAY_OF_MONTH_KINDS = frozenset({
    K.TIMESTAMP, K.CALENDAR, K.INSTANT, K.LOCAL_DATE, K.LOCAL_DATE_TIME, K.MONTH_DAY,
    K.OFFSET_DATE_TIME, K.ZONED_DATE_TIME,
})
LAST_DAY_OF_MONTH_KINDS = DAY_OF_MONTH_KINDS - {K.MONTH_DAY}
TIME_FIELD_KINDS = frozenset({
    K.TIMESTAMP, K.CALENDAR, K.INSTANT, K.LOCAL_DATE_TIME, K.LOCAL_TIME, K.OFFSET_DATE_TIME,
    K.OFFSET_TIME, K.ZONED_DATE_TIME,
})
PRECISION_KINDS = TIME_FIELD_KINDS

Factory = Callable[[str, TemporalKind, tzinfo | None], ConstraintValidator]


@dataclass(frozen=True)
class ConstraintSpec:
    """One catalog entry.

    Attributes:
        name: Constraint name.
        family: Grouping shown by ``constraints`` (e.g. ``"month"``).
        kinds: Kinds the constraint is implemented for.
        attributes: Attributes the constraint reads besides ``message``.
        factory: Builds an uninitialized validator for a kind.
    """

    name: str
    family: str
    kinds: frozenset[TemporalKind]
    attributes: tuple[str, ...]
    factory: Factory


CATALOG: dict[str, ConstraintSpec] = {}


def _register(spec: ConstraintSpec) -> None:
    CATALOG[spec.name] = spec


def _pascal(value: str) -> str:
    return "".join(word.capitalize() for word in value.split("_"))


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


def _moment_factory(comparison: Comparison) -> Factory:
    def build(name: str, kind: TemporalKind, system_zone: tzinfo | None) -> ConstraintValidator:
        return MomentValidator(name, kind, comparison, system_zone=system_zone)

    return build


def _part_moment_factory(part: Part, comparison: Comparison) -> Factory:
    def build(name: str, kind: TemporalKind, system_zone: tzinfo | None) -> ConstraintValidator:
        return PartMomentValidator(name, kind, part, comparison, system_zone=system_zone)

    return build


def _enum_factory(
    enum_cls: type[Month] | type[DayOfWeek], part: Part, direction: Direction
) -> Factory:
    bare_kind, variant = (
        (K.MONTH, FOR_MONTH) if enum_cls is Month else (K.DAY_OF_WEEK, FOR_DAY_OF_WEEK)
    )

    def build(name: str, kind: TemporalKind, system_zone: tzinfo | None) -> ConstraintValidator:
        return EnumValidator(
            name,
            kind,
            enum_cls,
            part,
            direction,
            system_zone=system_zone,
            bare_variant=variant if kind is bare_kind else None,
        )

    return build


def _field_factory(part: Part, direction: Direction) -> Factory:
    def build(name: str, kind: TemporalKind, system_zone: tzinfo | None) -> ConstraintValidator:
        return FieldValidator(name, kind, part, direction, system_zone=system_zone)

    return build


def _precision_factory(precision: str) -> Factory:
    def build(name: str, kind: TemporalKind, system_zone: tzinfo | None) -> ConstraintValidator:
        return PrecisionValidator(name, kind, precision, system_zone=system_zone)

    return build


def _build_catalog() -> None:
    for comparison in Comparison:
        derived = comparison.value.startswith(("min_", "max_"))
        moment_attributes = ("moment", "duration") if derived else ("moment",)
        name = _pascal(comparison.value)
        _register(
            ConstraintSpec(
                name=name,
                family="moment",
                kinds=DURATION_KINDS if derived else WHOLE_VALUE_KINDS,
                attributes=moment_attributes,
                factory=_moment_factory(comparison),
            )
        )
        for part, kinds in PART_MOMENT_FAMILIES:
            _register(
                ConstraintSpec(
                    name=f"{_pascal(part.value)}{name}",
                    family=part.value,
                    kinds=kinds,
                    attributes=(*moment_attributes, "zone_id"),
                    factory=_part_moment_factory(part, comparison),
                )
            )

    enum_families = (
        (Month, Part.MONTH, MONTH_KINDS),
        (DayOfWeek, Part.DAY_OF_WEEK, DAY_OF_WEEK_KINDS),
    )
    for enum_cls, part, kinds in enum_families:
        for direction in Direction:
            _register(
                ConstraintSpec(
                    name=f"{_pascal(part.value)}{_pascal(direction.value)}",
                    family=part.value,
                    kinds=kinds,
                    attributes=("value", "zone_id"),
                    factory=_enum_factory(enum_cls, part, direction),
                )
            )

    field_families = (
        (Part.DAY_OF_MONTH, DAY_OF_MONTH_KINDS),
        (Part.HOUR, TIME_FIELD_KINDS),
        (Part.MINUTE, TIME_FIELD_KINDS),
    )
    for part, kinds in field_families:
        for direction in (Direction.IS, Direction.IN, Direction.NOT_IN):
            _register(
                ConstraintSpec(
                    name=f"{_pascal(part.value)}{_pascal(direction.value)}",
                    family=part.value,
                    kinds=kinds,
                    attributes=("value", "zone_id"),
                    factory=_field_factory(part, direction),
                )
            )

    _register(
        ConstraintSpec(
            name="MinuteModulo",
            family="minute",
            kinds=TIME_FIELD_KINDS,
            attributes=("value", "modulo", "zone_id"),
            factory=lambda name, kind, zone: ModuloValidator(name, kind, system_zone=zone),
        )
    )
    _register(
        ConstraintSpec(
            name="LastDayOfMonth",
            family="day_of_month",
            kinds=LAST_DAY_OF_MONTH_KINDS,
            attributes=("zone_id",),
            factory=lambda name, kind, zone: LastDayOfMonthValidator(
                name, kind, system_zone=zone
            ),
        )
    )
    for precision in ("minute", "second", "millisecond"):
        _register(
            ConstraintSpec(
                name=f"{_pascal(precision)}Precision",
                family="precision",
                kinds=PRECISION_KINDS,
                attributes=(),
                factory=_precision_factory(precision),
            )
        )


_build_catalog()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_constraint(name: str) -> ConstraintSpec:
    """Look up a catalog entry.

    Raises:
        UnknownConstraintError: If *name* is not registered.
    """
    spec = CATALOG.get(name)
    if spec is None:
        msg = f"Unknown constraint: {name!r}"
        raise UnknownConstraintError(msg)
    return spec


def create_validator(
    constraint: str,
    kind: TemporalKind | str,
    config: ConstraintConfig | None = None,
    *,
    system_zone: tzinfo | None = None,
) -> ConstraintValidator:
    """Build and initialize the validator for *constraint* on *kind*.

    Raises:
        UnknownConstraintError: If the constraint is not registered.
        UnsupportedKindError: If the constraint is not implemented for *kind*.
        ConfigurationError: If an attribute in *config* is invalid.
    """
    spec = get_constraint(constraint)
    resolved = get_profile(kind).kind
    if resolved not in spec.kinds:
        msg = f"{constraint} is not supported for {resolved}"
        raise UnsupportedKindError(msg)
    validator = spec.factory(constraint, resolved, system_zone)
    validator.initialize(config if config is not None else ConstraintConfig())
    logger.debug("Initialized %s for %s", constraint, resolved)
    return validator


def supported_pairs() -> list[tuple[str, TemporalKind]]:
    """Every (constraint, kind) pair in the catalog, sorted."""
    return sorted(
        (name, kind) for name, spec in CATALOG.items() for kind in spec.kinds
    )


def describe(spec: ConstraintSpec) -> dict[str, Any]:
    """A catalog entry as a plain dict."""
    return {
        "name": spec.name,
        "family": spec.family,
        "attributes": list(spec.attributes),
        "kinds": sorted(kind.value for kind in spec.kinds),
    }
