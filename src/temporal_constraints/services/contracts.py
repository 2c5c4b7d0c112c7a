"""Typed contracts for constraint attributes and service payloads.

``ConstraintConfig`` is the attribute surface a validator reads once
during ``initialize``. The payload models validate what ``CheckService``
returns before it leaves the service layer.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T", bound=BaseModel)


def dump_validated(model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="python")


class ConstraintConfig(BaseModel):
    """Attributes of one declared constraint.

    Attributes:
        message: Violation template; ``None`` selects the constraint's default.
        moment: ISO-8601 literal of the target kind, or ``"now"``.
        duration: ISO-8601 duration offset for the Min/Max families.
        zone_id: ``"system"``, ``"provided"`` or an explicit zone id.
        value: Enum boundary, allowed list, or integer field value(s).
        modulo: Divisor for ``MinuteModulo``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    message: str | None = None
    moment: str | None = None
    duration: str | None = None
    zone_id: str = "system"
    value: Any = None
    modulo: int | None = None

    def attributes(self) -> dict[str, Any]:
        """Attributes available to message templates."""
        return {
            "moment": self.moment,
            "duration": self.duration,
            "zone_id": self.zone_id,
            "value": self.value,
            "modulo": self.modulo,
        }


class CheckResultData(BaseModel):
    """Payload contract for ``CheckService.check``."""

    constraint: str
    kind: str
    value: str
    valid: bool
    message: str | None = None
    message_template: str | None = None


class ConstraintEntry(BaseModel):
    """One catalog row."""

    name: str
    family: str
    attributes: list[str]
    kinds: list[str]


class ConstraintListData(BaseModel):
    """Payload contract for ``CheckService.list_constraints``."""

    count: int
    items: list[ConstraintEntry] = Field(default_factory=list)
