"""temporal-constraints — declarative validation constraints for temporal values.

Typical use::

    from datetime import datetime

    from temporal_constraints import ConstraintConfig, create_validator

    validator = create_validator(
        "DateNotBefore", "local_date_time", ConstraintConfig(moment="2007-12-03")
    )
    validator.validate(datetime(2007, 12, 3)).valid  # True
"""

from __future__ import annotations

from temporal_constraints.domain.clock import Clock, FixedClock, SystemClock
from temporal_constraints.domain.errors import (
    ConfigurationError,
    DurationParseError,
    MomentParseError,
    UnknownConstraintError,
    UnsupportedKindError,
)
from temporal_constraints.domain.types import DayOfWeek, Month, TemporalKind
from temporal_constraints.domain.values import MonthDay, Year, YearMonth
from temporal_constraints.services.catalog import CATALOG, create_validator
from temporal_constraints.services.check import CheckService
from temporal_constraints.services.context import ValidationContext
from temporal_constraints.services.contracts import ConstraintConfig
from temporal_constraints.services.result import ValidationResult

__version__ = "0.1.0"

__all__ = [
    "CATALOG",
    "CheckService",
    "Clock",
    "ConfigurationError",
    "ConstraintConfig",
    "DayOfWeek",
    "DurationParseError",
    "FixedClock",
    "Month",
    "MomentParseError",
    "MonthDay",
    "SystemClock",
    "TemporalKind",
    "UnknownConstraintError",
    "UnsupportedKindError",
    "ValidationContext",
    "ValidationResult",
    "Year",
    "YearMonth",
    "__version__",
    "create_validator",
]
