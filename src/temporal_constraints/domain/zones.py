"""Zone policies and zone id parsing.

A constraint's ``zone_id`` attribute is symbolic:

- ``"system"``: the system default zone, fixed when the validator is initialized.
- ``"provided"``: the value's own zone (only for kinds that carry one).
- anything else: an explicit zone id (IANA name, ``Z``, ``UTC+01:00``, ``-05:00``).

INVARIANT: a policy is resolved once per validator and never changes.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import tz

from temporal_constraints.domain.errors import ConfigurationError
from temporal_constraints.domain.types import ZoneCapability

SYSTEM_ZONE_ID = "system"
PROVIDED_ZONE_ID = "provided"

_UTC_NAMES = frozenset({"Z", "UT", "UTC", "GMT"})
_PREFIXED_OFFSET_RE = re.compile(r"^(?:UTC|GMT|UT)([+-].+)$")
_OFFSET_RE = re.compile(r"^([+-])(\d{1,2})(?::?(\d{2}))?(?::?(\d{2}))?$")
_MAX_OFFSET = timedelta(hours=18)


@dataclass(frozen=True)
class SystemDefault:
    """Convert to the system zone captured at initialization."""

    zone: tzinfo

    def __str__(self) -> str:
        return f"{SYSTEM_ZONE_ID} ({self.zone})"


@dataclass(frozen=True)
class ValueOwnZone:
    """Read the value in its own zone, without conversion."""

    @property
    def zone(self) -> None:
        return None

    def __str__(self) -> str:
        return PROVIDED_ZONE_ID


@dataclass(frozen=True)
class Explicit:
    """Convert to an explicitly configured zone."""

    zone: tzinfo
    zone_id: str

    def __str__(self) -> str:
        return self.zone_id


ZonePolicy = SystemDefault | ValueOwnZone | Explicit


def system_default_zone() -> tzinfo:
    """The host's local zone, DST rules included."""
    return tz.tzlocal()


def parse_zone_id(text: str) -> tzinfo:
    """Parse an explicit zone id into a tzinfo.

    Raises:
        ConfigurationError: If *text* is not a known zone or a valid offset.
    """
    if text in _UTC_NAMES:
        return UTC
    prefixed = _PREFIXED_OFFSET_RE.match(text)
    if prefixed is not None:
        return _parse_offset(prefixed.group(1), text)
    if text[:1] in ("+", "-"):
        return _parse_offset(text, text)
    try:
        return ZoneInfo(text)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        msg = f"Invalid zone id: {text!r}"
        raise ConfigurationError(msg) from exc


def _parse_offset(offset_text: str, original: str) -> tzinfo:
    match = _OFFSET_RE.match(offset_text)
    if match is None:
        msg = f"Invalid zone id: {original!r}"
        raise ConfigurationError(msg)
    sign, hours, minutes, seconds = match.groups()
    offset = timedelta(hours=int(hours), minutes=int(minutes or 0), seconds=int(seconds or 0))
    if int(minutes or 0) > 59 or int(seconds or 0) > 59 or offset > _MAX_OFFSET:
        msg = f"Zone offset out of range: {original!r}"
        raise ConfigurationError(msg)
    if sign == "-":
        offset = -offset
    if not offset:
        return UTC
    return timezone(offset)


def resolve_zone_policy(
    zone_text: str,
    capability: ZoneCapability,
    *,
    system_zone: tzinfo | None = None,
) -> ZonePolicy:
    """Turn a ``zone_id`` attribute into a policy for a kind's capability.

    Args:
        zone_text: The configured ``zone_id``.
        capability: What the target kind allows.
        system_zone: Override for the system zone (settings ``zones.system``).

    Raises:
        ConfigurationError: If the zone id is illegal for the capability or
            cannot be parsed.
    """
    if capability is ZoneCapability.SYSTEM_ONLY and zone_text != SYSTEM_ZONE_ID:
        msg = f"zoneId should be '{SYSTEM_ZONE_ID}', is '{zone_text}'"
        raise ConfigurationError(msg)
    if zone_text == SYSTEM_ZONE_ID:
        return SystemDefault(system_zone if system_zone is not None else system_default_zone())
    if zone_text == PROVIDED_ZONE_ID:
        if capability is ZoneCapability.ZONE_REQUIRED:
            msg = f"zoneId should not be '{PROVIDED_ZONE_ID}'"
            raise ConfigurationError(msg)
        return ValueOwnZone()
    return Explicit(parse_zone_id(zone_text), zone_text)
