"""Configuration errors raised while a validator is initialized.

INVARIANT: none of these are raised from ``is_valid``. A misconfigured
constraint fails before it validates anything.
"""

from __future__ import annotations


class ConfigurationError(ValueError):
    """A constraint attribute is invalid for the targeted kind."""

    code = "INVALID_CONFIGURATION"


class MomentParseError(ConfigurationError):
    """The ``moment`` attribute is not a valid literal for the kind."""


class DurationParseError(ConfigurationError):
    """The ``duration`` attribute is not a valid ISO-8601 duration."""


class UnknownConstraintError(ConfigurationError):
    """No constraint is registered under the requested name."""

    code = "UNKNOWN_CONSTRAINT"


class UnsupportedKindError(ConfigurationError):
    """The constraint is not implemented for the requested kind."""

    code = "UNSUPPORTED_KIND"
