"""Moment resolution: a literal or "now", optionally offset by a duration.

A literal moment is parsed once. When a duration is also configured it
is folded into the literal immediately and discarded, so a validation
call never applies a duration to a literal. A ``"now"`` moment is taken
from the per-call clock, with the duration applied on every call.

Durations are checked at initialization by applying them to the kind's
current value on a UTC wall clock; a unit the kind cannot represent
fails there, not during validation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import tzinfo
from typing import Any

from temporal_constraints.domain.clock import Clock, utc_system_clock
from temporal_constraints.domain.durations import IsoDuration, apply_duration, parse_duration
from temporal_constraints.domain.errors import ConfigurationError, MomentParseError
from temporal_constraints.domain.kinds import KindProfile
from temporal_constraints.services.telemetry import annotate

logger = logging.getLogger(__name__)

NOW = "now"


@dataclass(frozen=True)
class MomentSpec:
    """A resolved moment: a concrete target, or "now" with an optional duration.

    Attributes:
        text: The configured moment literal.
        value: The concrete target in comparable form; ``None`` for "now".
        duration: Duration still to apply per call; only set for "now".
        sign: ``1`` to add the duration, ``-1`` to subtract it.
        system_zone: Zone used for calendar arithmetic on instants.
    """

    text: str
    value: Any = None
    duration: IsoDuration | None = None
    sign: int = 1
    system_zone: tzinfo | None = None

    @property
    def is_now(self) -> bool:
        return self.text == NOW


def initialize_moment(
    profile: KindProfile,
    moment_text: str | None,
    duration_text: str | None = None,
    sign: int = 1,
    *,
    system_zone: tzinfo | None = None,
) -> MomentSpec:
    """Parse and fold a moment for *profile*'s kind.

    Raises:
        ConfigurationError: If the moment is missing or the kind has no moments.
        MomentParseError: If the literal is not valid for the kind.
        DurationParseError: If the duration is malformed.
    """
    if profile.parse is None:
        msg = f"{profile.kind} values cannot be compared to a moment"
        raise ConfigurationError(msg)
    if moment_text is None:
        msg = "moment is required"
        raise ConfigurationError(msg)

    duration = None
    if duration_text is not None:
        duration = parse_duration(duration_text)
        _check_duration(profile, duration, sign, system_zone)

    if moment_text == NOW:
        return MomentSpec(text=moment_text, duration=duration, sign=sign, system_zone=system_zone)

    try:
        value = profile.parse(moment_text)
    except ValueError as exc:
        msg = f"Invalid moment {moment_text!r} for {profile.kind}: {exc}"
        raise MomentParseError(msg) from exc

    if duration is not None:
        try:
            folded = apply_duration(value, profile.kind, duration, sign, system_zone=system_zone)
        except ConfigurationError:
            raise
        except (OverflowError, ValueError) as exc:
            msg = f"Duration {duration.text!r} cannot be applied to moment {moment_text!r}: {exc}"
            raise ConfigurationError(msg) from exc
        logger.debug(
            "Folded duration %s into moment %s: %s", duration.text, moment_text, folded
        )
        annotate("folded_moment", folded)
        value = folded
    return MomentSpec(text=moment_text, value=value, sign=sign, system_zone=system_zone)


def _check_duration(
    profile: KindProfile,
    duration: IsoDuration,
    sign: int,
    system_zone: tzinfo | None,
) -> None:
    reference = profile.now(utc_system_clock())
    try:
        apply_duration(reference, profile.kind, duration, sign, system_zone=system_zone)
    except ConfigurationError:
        raise
    except (OverflowError, ValueError) as exc:
        msg = f"Duration {duration.text!r} cannot be applied to {profile.kind}: {exc}"
        raise ConfigurationError(msg) from exc


def resolve_moment(spec: MomentSpec, profile: KindProfile, clock: Clock) -> Any:
    """The comparison target for one validation call."""
    if not spec.is_now:
        return spec.value
    target = profile.now(clock)
    if spec.duration is not None:
        target = apply_duration(
            target, profile.kind, spec.duration, spec.sign, system_zone=spec.system_zone
        )
    return target
