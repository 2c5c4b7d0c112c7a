"""BaseService — shared construction for temporal_constraints services.

Services receive plain values (system zone, message overrides), never
the settings object, so they stay usable without a config file.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, tzinfo

from temporal_constraints.domain.clock import Clock, FixedClock, SystemClock
from temporal_constraints.domain.zones import system_default_zone

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for service-layer classes.

    Args:
        system_zone: Zone used for ``"system"``; ``None`` uses the host zone.
        message_overrides: Bundle entries that replace the English messages.
    """

    def __init__(
        self,
        *,
        system_zone: tzinfo | None = None,
        message_overrides: Mapping[str, str] | None = None,
    ) -> None:
        self._system_zone = system_zone
        self._message_overrides = dict(message_overrides or {})

    @property
    def zone(self) -> tzinfo:
        return self._system_zone if self._system_zone is not None else system_default_zone()

    def _clock(self, now: datetime | None = None) -> Clock:
        """A wall clock, or a clock pinned to *now* (naive *now* is read in the system zone)."""
        if now is None:
            return SystemClock(self.zone)
        if now.tzinfo is None:
            now = now.replace(tzinfo=self.zone)
        logger.debug("Using fixed clock at %s", now.isoformat())
        return FixedClock(now, self.zone)
