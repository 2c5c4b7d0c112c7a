"""Shared pytest fixtures for temporal-constraints tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Generator
from datetime import UTC, datetime
from pathlib import Path

import pytest
from click.testing import CliRunner

from temporal_constraints.domain.clock import FixedClock
from temporal_constraints.services.telemetry import _current_span, disable_telemetry

# 2024-05-01 is a Wednesday.
FIXED_INSTANT = datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def fixed_clock() -> FixedClock:
    """A UTC clock pinned to 2024-05-01T12:00:00Z."""
    return FixedClock(FIXED_INSTANT)


@pytest.fixture
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty temp dir with no TEMPORAL_CONSTRAINTS_* env vars.

    Use via ``@pytest.mark.usefixtures("_isolated_config")`` on command
    test classes so a developer's own config file is never picked up.
    """
    for name in list(os.environ):
        if name.startswith("TEMPORAL_CONSTRAINTS_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_global_state() -> Generator[None]:
    """The CLI installs root handlers and may enable telemetry; undo both."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    package = logging.getLogger("temporal_constraints")
    package_level = package.level
    yield
    disable_telemetry()
    _current_span.set(None)
    root.handlers = original_handlers
    root.setLevel(original_level)
    package.setLevel(package_level)
