"""ServiceResult, ServiceError and ValidationResult.

INVARIANT: ``CheckService`` methods return ServiceResult; a validator's
``validate`` returns ValidationResult. The CLI consumes both.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Return type for service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"check"``).
        data: Operation-specific payload.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (telemetry spans).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None


class ValidationResult(BaseModel):
    """Outcome of validating one value against one configured constraint.

    Attributes:
        valid: Whether the value satisfies the constraint.
        constraint: Constraint name (e.g. ``"DateNotBefore"``).
        kind: Temporal kind the validator was built for.
        message_template: The violation template, ``None`` when valid.
        message: The interpolated violation message, ``None`` when valid.
    """

    model_config = {"frozen": True}

    valid: bool
    constraint: str
    kind: str
    message_template: str | None = None
    message: str | None = None
