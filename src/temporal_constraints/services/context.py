"""ValidationContext — per-call clock and violation sink."""

from __future__ import annotations

from temporal_constraints.domain.clock import Clock, SystemClock


class ValidationContext:
    """What a validator sees during one ``is_valid`` call.

    The context supplies the clock that "now" moments are derived from and
    collects violation templates. A fresh context is used per call.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self.clock: Clock = clock if clock is not None else SystemClock()
        self.default_violation_enabled = True
        self._violations: list[str] = []

    def disable_default_violation(self) -> None:
        self.default_violation_enabled = False

    def add_violation(self, template: str) -> None:
        self._violations.append(template)

    @property
    def violations(self) -> tuple[str, ...]:
        return tuple(self._violations)
