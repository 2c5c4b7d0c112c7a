"""Validator engines.

A validator is built for one (constraint, kind) pair, initialized once
from a ``ConstraintConfig`` and then only read. Every engine treats
``None`` as valid and raises ``TypeError`` for values of another kind.

- ``MomentValidator``: whole-value comparison against a moment.
- ``PartMomentValidator``: date or time-of-day comparison after zone
  conversion.
- ``EnumValidator``: month or day-of-week membership.
- ``FieldValidator``, ``ModuloValidator``, ``LastDayOfMonthValidator``,
  ``PrecisionValidator``: integer field checks.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from datetime import tzinfo
from enum import IntEnum
from typing import Any

from temporal_constraints.domain.clock import Clock
from temporal_constraints.domain.errors import ConfigurationError
from temporal_constraints.domain.kinds import KindProfile, get_profile
from temporal_constraints.domain.messages import default_template, interpolate
from temporal_constraints.domain.normalize import extract_part
from temporal_constraints.domain.types import (
    Comparison,
    Direction,
    Part,
    TemporalKind,
    ZoneCapability,
)
from temporal_constraints.domain.zones import (
    SYSTEM_ZONE_ID,
    SystemDefault,
    ValueOwnZone,
    ZonePolicy,
    resolve_zone_policy,
    system_default_zone,
)
from temporal_constraints.services.comparison import compare, duration_sign, requires_duration
from temporal_constraints.services.context import ValidationContext
from temporal_constraints.services.contracts import ConstraintConfig
from temporal_constraints.services.fields import (
    allowed_numbers,
    has_precision,
    is_last_day_of_month,
    modulo_remainder,
)
from temporal_constraints.services.membership import allowed_set, is_member
from temporal_constraints.services.moments import MomentSpec, initialize_moment, resolve_moment
from temporal_constraints.services.result import ValidationResult
from temporal_constraints.services.telemetry import annotate

logger = logging.getLogger(__name__)

# The kind a Date* or Time* moment is parsed as.
PART_KINDS: dict[Part, TemporalKind] = {
    Part.YEAR: TemporalKind.YEAR,
    Part.YEAR_MONTH: TemporalKind.YEAR_MONTH,
    Part.DATE: TemporalKind.LOCAL_DATE,
    Part.TIME: TemporalKind.LOCAL_TIME,
}


class ConstraintValidator(ABC):
    """Base class for all engines.

    Args:
        name: Constraint name, e.g. ``"MonthIn"``.
        kind: Kind of the values this validator accepts.
        system_zone: Override for the system zone.
        bare_variant: Message variant used when the default message is
            unchanged (``Month*`` on months, ``DayOfWeek*`` on days of week).
    """

    def __init__(
        self,
        name: str,
        kind: TemporalKind,
        *,
        system_zone: tzinfo | None = None,
        bare_variant: str | None = None,
    ) -> None:
        self.name = name
        self.kind = kind
        self.profile: KindProfile = get_profile(kind)
        self._system_zone = system_zone
        self._bare_variant = bare_variant
        self._config: ConstraintConfig | None = None
        self._replacement: str | None = None
        self.message_template = default_template(name)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self, config: ConstraintConfig) -> None:
        """Read attributes once. Raises ``ConfigurationError`` on bad attributes."""
        default = default_template(self.name)
        self.message_template = config.message if config.message is not None else default
        if self._bare_variant is not None and self.message_template == default:
            self._replacement = default_template(self.name, self._bare_variant)
        self._initialize(config)
        self._config = config

    @abstractmethod
    def _initialize(self, config: ConstraintConfig) -> None: ...

    @abstractmethod
    def _check(self, value: Any, context: ValidationContext) -> bool: ...

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def is_valid(self, value: Any, context: ValidationContext) -> bool:
        if self._config is None:
            msg = f"{self.name} validator for {self.kind} is not initialized"
            raise RuntimeError(msg)
        if value is None:
            return True
        self.profile.check_type(value)
        valid = self._check(value, context)
        if not valid and self._replacement is not None:
            context.disable_default_violation()
            context.add_violation(self._replacement)
        return valid

    def validate(
        self,
        value: Any,
        clock: Clock | None = None,
        *,
        overrides: Mapping[str, str] | None = None,
    ) -> ValidationResult:
        """Validate *value* and render the violation message, if any."""
        context = ValidationContext(clock)
        if self.is_valid(value, context):
            return ValidationResult(valid=True, constraint=self.name, kind=self.kind.value)
        templates = list(context.violations)
        if context.default_violation_enabled:
            templates.insert(0, self.message_template)
        template = templates[0]
        assert self._config is not None
        return ValidationResult(
            valid=False,
            constraint=self.name,
            kind=self.kind.value,
            message_template=template,
            message=interpolate(template, self._config.attributes(), overrides),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve_policy(self, zone_text: str) -> ZonePolicy:
        policy = resolve_zone_policy(
            zone_text, self.profile.zone_capability, system_zone=self._system_zone
        )
        logger.debug("%s[%s]: zone %r resolved to %r", self.name, self.kind, zone_text, policy)
        annotate("zone_policy", policy)
        return policy

    def _initialize_moment(
        self, profile: KindProfile, config: ConstraintConfig, comparison: Comparison
    ) -> MomentSpec:
        if requires_duration(comparison):
            if config.duration is None:
                msg = f"duration is required for {self.name}"
                raise ConfigurationError(msg)
        elif config.duration is not None:
            msg = f"{self.name} does not take a duration"
            raise ConfigurationError(msg)
        return initialize_moment(
            profile,
            config.moment,
            config.duration,
            duration_sign(comparison),
            system_zone=self._system_zone,
        )


class MomentValidator(ConstraintValidator):
    """Compare the whole value against a moment."""

    def __init__(self, name: str, kind: TemporalKind, comparison: Comparison, **kwargs: Any) -> None:
        super().__init__(name, kind, **kwargs)
        self.comparison = comparison
        self._moment: MomentSpec | None = None

    def _initialize(self, config: ConstraintConfig) -> None:
        self._moment = self._initialize_moment(self.profile, config, self.comparison)

    def _check(self, value: Any, context: ValidationContext) -> bool:
        assert self._moment is not None
        target = resolve_moment(self._moment, self.profile, context.clock)
        return compare(self.profile.comparable(value), target, self.comparison)


class PartMomentValidator(ConstraintValidator):
    """Compare the year, year-month, date or time-of-day part of a value against a moment."""

    def __init__(
        self, name: str, kind: TemporalKind, part: Part, comparison: Comparison, **kwargs: Any
    ) -> None:
        super().__init__(name, kind, **kwargs)
        self.part = part
        self.comparison = comparison
        self.part_profile = get_profile(PART_KINDS[part])
        self._moment: MomentSpec | None = None
        self._policy: ZonePolicy | None = None

    def _initialize(self, config: ConstraintConfig) -> None:
        self._moment = self._initialize_moment(self.part_profile, config, self.comparison)
        self._policy = self._resolve_policy(config.zone_id)

    def _check(self, value: Any, context: ValidationContext) -> bool:
        assert self._moment is not None and self._policy is not None
        part = extract_part(value, self.kind, self._policy, self.part)
        target = resolve_moment(self._moment, self.part_profile, context.clock)
        return compare(part, target, self.comparison)


class EnumValidator(ConstraintValidator):
    """Check a month or day-of-week part against an allowed set."""

    def __init__(
        self,
        name: str,
        kind: TemporalKind,
        enum_cls: type[IntEnum],
        part: Part,
        direction: Direction,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, kind, **kwargs)
        self.enum_cls = enum_cls
        self.part = part
        self.direction = direction
        self.allowed: frozenset[IntEnum] = frozenset()
        self._policy: ZonePolicy | None = None

    def _initialize(self, config: ConstraintConfig) -> None:
        self.allowed = allowed_set(self.enum_cls, self.direction, config.value)
        self._policy = self._resolve_policy(config.zone_id)

    def _check(self, value: Any, context: ValidationContext) -> bool:
        assert self._policy is not None
        return is_member(extract_part(value, self.kind, self._policy, self.part), self.allowed)


class FieldValidator(ConstraintValidator):
    """Check an integer part (day of month, hour, minute) against allowed values."""

    def __init__(
        self, name: str, kind: TemporalKind, part: Part, direction: Direction, **kwargs: Any
    ) -> None:
        super().__init__(name, kind, **kwargs)
        self.part = part
        self.direction = direction
        self.allowed: frozenset[int] = frozenset()
        self._policy: ZonePolicy | None = None

    def _initialize(self, config: ConstraintConfig) -> None:
        self.allowed = allowed_numbers(self.part, self.direction, config.value)
        self._policy = self._resolve_policy(config.zone_id)

    def _check(self, value: Any, context: ValidationContext) -> bool:
        assert self._policy is not None
        return extract_part(value, self.kind, self._policy, self.part) in self.allowed


class ModuloValidator(ConstraintValidator):
    """``minute % modulo == value % modulo``."""

    def __init__(self, name: str, kind: TemporalKind, **kwargs: Any) -> None:
        super().__init__(name, kind, **kwargs)
        self.modulo = 1
        self.remainder = 0
        self._policy: ZonePolicy | None = None

    def _initialize(self, config: ConstraintConfig) -> None:
        self.modulo, self.remainder = modulo_remainder(config.value, config.modulo)
        self._policy = self._resolve_policy(config.zone_id)

    def _check(self, value: Any, context: ValidationContext) -> bool:
        assert self._policy is not None
        minute = extract_part(value, self.kind, self._policy, Part.MINUTE)
        return minute % self.modulo == self.remainder


class LastDayOfMonthValidator(ConstraintValidator):
    def __init__(self, name: str, kind: TemporalKind, **kwargs: Any) -> None:
        super().__init__(name, kind, **kwargs)
        self._policy: ZonePolicy | None = None

    def _initialize(self, config: ConstraintConfig) -> None:
        self._policy = self._resolve_policy(config.zone_id)

    def _check(self, value: Any, context: ValidationContext) -> bool:
        assert self._policy is not None
        return is_last_day_of_month(extract_part(value, self.kind, self._policy, Part.DATE))


class PrecisionValidator(ConstraintValidator):
    """No component finer than minutes, seconds or milliseconds.

    Precision does not depend on a zone; values are read in their own zone
    where they have one.
    """

    def __init__(self, name: str, kind: TemporalKind, precision: str, **kwargs: Any) -> None:
        super().__init__(name, kind, **kwargs)
        self.precision = precision
        self._policy: ZonePolicy | None = None

    def _initialize(self, config: ConstraintConfig) -> None:
        if config.zone_id != SYSTEM_ZONE_ID:
            msg = f"{self.name} does not take a zoneId"
            raise ConfigurationError(msg)
        if self.profile.zone_capability is ZoneCapability.OWN_ZONE:
            self._policy = ValueOwnZone()
        else:
            zone = self._system_zone if self._system_zone is not None else system_default_zone()
            self._policy = SystemDefault(zone)

    def _check(self, value: Any, context: ValidationContext) -> bool:
        assert self._policy is not None
        second = extract_part(value, self.kind, self._policy, Part.SECOND)
        microsecond = extract_part(value, self.kind, self._policy, Part.MICROSECOND)
        return has_precision(self.precision, second, microsecond)
