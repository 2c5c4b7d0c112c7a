"""CheckService — validate one textual value against one constraint.

Used by the ``check`` and ``constraints`` commands. Every failure is
returned as a ServiceResult with an error code; nothing is raised.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from temporal_constraints.domain.errors import ConfigurationError
from temporal_constraints.domain.kinds import calendar_from_datetime, get_profile
from temporal_constraints.domain.types import DayOfWeek, Month, TemporalKind
from temporal_constraints.services.base import BaseService
from temporal_constraints.services.catalog import CATALOG, create_validator, describe, get_constraint
from temporal_constraints.services.contracts import (
    CheckResultData,
    ConstraintConfig,
    ConstraintListData,
    dump_validated,
)
from temporal_constraints.services.membership import coerce_member
from temporal_constraints.services.result import ServiceError, ServiceResult
from temporal_constraints.services.telemetry import annotate, trace_span, traced

INVALID_VALUE = "INVALID_VALUE"
CONSTRAINT_VIOLATED = "CONSTRAINT_VIOLATED"


def parse_value(kind: TemporalKind | str, text: str) -> Any:
    """Parse a textual value into the Python value of *kind*.

    Timestamps accept POSIX seconds or an ISO instant; calendars accept a
    zoned date-time; months and days of week accept a name or a number.

    Raises:
        ValueError: If *text* is not a valid value of *kind*.
    """
    profile = get_profile(kind)
    text = text.strip()
    if profile.kind is TemporalKind.TIMESTAMP:
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return float(text)
        except ValueError:
            return profile.parse(text).timestamp()  # type: ignore[misc]
    if profile.kind is TemporalKind.CALENDAR:
        return calendar_from_datetime(profile.parse(text))  # type: ignore[misc]
    if profile.kind is TemporalKind.MONTH:
        return coerce_member(Month, int(text) if text.isdigit() else text)
    if profile.kind is TemporalKind.DAY_OF_WEEK:
        return coerce_member(DayOfWeek, int(text) if text.isdigit() else text)
    assert profile.parse is not None
    return profile.parse(text)


class CheckService(BaseService):
    """Runs constraints against values given as text."""

    @traced
    def check(
        self,
        constraint: str,
        kind: str,
        value_text: str,
        config: ConstraintConfig | None = None,
        *,
        now: datetime | None = None,
    ) -> ServiceResult:
        """Validate *value_text* (a *kind* literal) against *constraint*."""
        config = config if config is not None else ConstraintConfig()
        try:
            with trace_span("initialize"):
                validator = create_validator(
                    constraint, kind, config, system_zone=self._system_zone
                )
        except ConfigurationError as exc:
            return self._failure(exc.code, str(exc), constraint=constraint, kind=kind)

        try:
            with trace_span("parse_value"):
                value = parse_value(validator.kind, value_text)
        except ValueError as exc:
            return self._failure(
                INVALID_VALUE,
                f"Invalid {validator.kind} value {value_text!r}: {exc}",
                constraint=constraint,
                kind=kind,
            )

        clock = self._clock(now)
        with trace_span("validate"):
            try:
                result = validator.validate(value, clock, overrides=self._message_overrides)
            except (TypeError, ValueError, OverflowError) as exc:
                return self._failure(INVALID_VALUE, str(exc), constraint=constraint, kind=kind)
            annotate("clock", clock.instant().astimezone(UTC).isoformat())

        data = dump_validated(
            CheckResultData,
            {
                "constraint": constraint,
                "kind": validator.kind.value,
                "value": value_text,
                "valid": result.valid,
                "message": result.message,
                "message_template": result.message_template,
            },
        )
        if result.valid:
            return ServiceResult(ok=True, op="check", data=data)
        return ServiceResult(
            ok=False,
            op="check",
            data=data,
            error=ServiceError(
                code=CONSTRAINT_VIOLATED,
                message=result.message or constraint,
                detail={"constraint": constraint, "kind": validator.kind.value},
            ),
        )

    @traced
    def list_constraints(self, name: str | None = None) -> ServiceResult:
        """Catalog entries, or one entry when *name* is given."""
        if name is not None:
            try:
                specs = [get_constraint(name)]
            except ConfigurationError as exc:
                return ServiceResult(
                    ok=False,
                    op="constraints",
                    error=ServiceError(code=exc.code, message=str(exc)),
                )
        else:
            specs = [CATALOG[key] for key in sorted(CATALOG)]
        items = [describe(spec) for spec in specs]
        data = dump_validated(ConstraintListData, {"count": len(items), "items": items})
        return ServiceResult(ok=True, op="constraints", data=data)

    @staticmethod
    def _failure(code: str, message: str, **detail: Any) -> ServiceResult:
        return ServiceResult(
            ok=False,
            op="check",
            error=ServiceError(code=code, message=message, detail=detail),
        )
