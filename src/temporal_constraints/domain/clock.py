"""Clock sources for "now" moments.

A clock yields the current instant (an aware UTC datetime) and the zone
in which local "now" values are derived. Validators never read the wall
clock directly; they ask the clock handed to them per call.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, datetime, tzinfo

from dateutil import tz


class Clock(ABC):
    """Source of the current instant and zone."""

    @property
    @abstractmethod
    def zone(self) -> tzinfo: ...

    @abstractmethod
    def instant(self) -> datetime:
        """The current instant as an aware UTC datetime."""
        ...

    def now(self) -> datetime:
        """The current instant expressed in the clock's zone."""
        return self.instant().astimezone(self.zone)


@dataclass(frozen=True)
class SystemClock(Clock):
    """The wall clock, in the given zone (default: the system zone)."""

    tz: tzinfo = field(default_factory=tz.tzlocal)

    @property
    def zone(self) -> tzinfo:
        return self.tz

    def instant(self) -> datetime:
        return datetime.now(UTC)


@dataclass(frozen=True)
class FixedClock(Clock):
    """A clock that always returns the same instant."""

    at: datetime
    tz: tzinfo = UTC

    def __post_init__(self) -> None:
        if self.at.tzinfo is None or self.at.utcoffset() is None:
            msg = "FixedClock requires an aware datetime"
            raise ValueError(msg)

    @property
    def zone(self) -> tzinfo:
        return self.tz

    def instant(self) -> datetime:
        return self.at.astimezone(UTC)


def utc_system_clock() -> Clock:
    """The wall clock in UTC; used to validate durations at configuration time."""
    return SystemClock(UTC)
