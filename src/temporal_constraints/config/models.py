"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults are baked here and
``temporal-constraints.toml`` only contains overrides.
"""

from __future__ import annotations

from datetime import tzinfo

from pydantic import BaseModel, Field

from temporal_constraints.domain.zones import parse_zone_id

# --- temporal-constraints.toml sections ---


class ZonesConfig(BaseModel):
    """[zones] section.

    ``system`` replaces the host zone wherever a constraint says
    ``zone_id = "system"``; ``None`` keeps the host zone.
    """

    model_config = {"frozen": True}

    system: str | None = None

    def system_zone(self) -> tzinfo | None:
        """The configured system zone, or None for the host zone."""
        if self.system is None:
            return None
        return parse_zone_id(self.system)


class MessagesConfig(BaseModel):
    """[messages] section: bundle keys mapped to replacement texts."""

    model_config = {"frozen": True}

    overrides: dict[str, str] = Field(default_factory=dict)

