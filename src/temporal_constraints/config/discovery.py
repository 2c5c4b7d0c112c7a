"""Locate ``temporal-constraints.toml``."""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "temporal-constraints.toml"
CONFIG_ENV_VAR = "TEMPORAL_CONSTRAINTS_CONFIG"


def _from_env() -> Path | None:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if not env_path:
        return None
    # An explicit path that does not exist disables discovery.
    return Path(env_path)


def find_config(start: Path | None = None) -> Path | None:
    """Nearest config file at or above *start* (default: cwd)."""
    explicit = _from_env()
    if explicit is not None:
        return explicit if explicit.is_file() else None

    directory = (start or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None

