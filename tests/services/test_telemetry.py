"""Tests for telemetry primitives: Span, trace_span, @traced."""

from __future__ import annotations

import time
from collections.abc import Generator
from datetime import UTC, datetime

import pytest

from temporal_constraints.services.check import CheckService
from temporal_constraints.services.contracts import ConstraintConfig
from temporal_constraints.services.result import ServiceResult
from temporal_constraints.services.telemetry import (
    Span,
    annotate,
    _current_span,
    disable_telemetry,
    enable_telemetry,
    trace_span,
    traced,
)


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    """Ensure clean telemetry state for every test."""
    yield
    disable_telemetry()
    _current_span.set(None)


# ── Span unit tests ──────────────────────────────────────────────────


class TestSpan:
    def test_duration_before_end_is_zero(self) -> None:
        span = Span(name="test")
        assert span.duration_ms == 0.0

    def test_duration_after_end(self) -> None:
        span = Span(name="test")
        time.sleep(0.005)
        span.end()
        assert span.duration_ms > 0

    def test_to_dict_minimal(self) -> None:
        span = Span(name="root")
        span.end()
        d = span.to_dict()
        assert d["name"] == "root"
        assert "duration_ms" in d
        assert "children" not in d
        assert "annotations" not in d

    def test_annotations_are_text(self) -> None:
        span = Span(name="initialize")
        span.annotate("folded_moment", 2024)
        assert span.to_dict()["annotations"] == {"folded_moment": "2024"}

    def test_annotate(self) -> None:
        span = Span(name="validate")
        span.annotate("clock", "2024-05-01T12:00:00+00:00")
        span.end()
        assert span.to_dict()["annotations"] == {"clock": "2024-05-01T12:00:00+00:00"}


# ── trace_span tests ─────────────────────────────────────────────────


class TestTraceSpan:
    def test_disabled_yields_none(self) -> None:
        with trace_span("test") as span:
            assert span is None

    def test_no_root_yields_none(self) -> None:
        enable_telemetry()
        with trace_span("test") as span:
            assert span is None

    def test_nested_spans(self) -> None:
        enable_telemetry()
        root = Span(name="root")
        token = _current_span.set(root)
        try:
            with trace_span("a"):
                with trace_span("b"):
                    pass
            assert [c.name for c in root.children] == ["a"]
            assert root.children[0].children[0].name == "b"
            assert root.children[0].finished is not None
        finally:
            _current_span.reset(token)


# ── @traced decorator tests ──────────────────────────────────────────


class TestTracedDecorator:
    def test_noop_when_disabled(self) -> None:
        @traced
        def my_func() -> ServiceResult:
            return ServiceResult(ok=True, op="test")

        assert my_func().meta is None

    def test_preserves_existing_meta(self) -> None:
        @traced
        def my_func() -> ServiceResult:
            return ServiceResult(ok=True, op="test", meta={"existing": "data"})

        enable_telemetry()
        result = my_func()
        assert result.meta is not None
        assert result.meta["existing"] == "data"
        assert "telemetry" in result.meta

    def test_exception_propagates_and_resets_span(self) -> None:
        @traced
        def boom() -> ServiceResult:
            raise RuntimeError("boom")

        enable_telemetry()
        with pytest.raises(RuntimeError):
            boom()
        assert _current_span.get() is None

    def test_annotate_reaches_root(self) -> None:
        @traced
        def my_func() -> ServiceResult:
            annotate("zone_policy", "UTC")
            return ServiceResult(ok=True, op="test")

        assert my_func().meta is None
        enable_telemetry()
        result = my_func()
        assert result.meta is not None
        assert result.meta["telemetry"]["annotations"] == {"zone_policy": "UTC"}

    def test_annotate_outside_traced_call_is_noop(self) -> None:
        enable_telemetry()
        annotate("zone_policy", "UTC")
        assert _current_span.get() is None


class TestCheckServiceTelemetry:
    def test_span_tree(self) -> None:
        enable_telemetry()
        result = CheckService(system_zone=UTC).check(
            "Before",
            "instant",
            "2024-04-30T12:00:00Z",
            ConstraintConfig(moment="now"),
            now=datetime(2024, 5, 1, 12, 0, tzinfo=UTC),
        )
        assert result.ok
        assert result.meta is not None
        tree = result.meta["telemetry"]
        assert tree["name"] == "CheckService.check"
        assert [c["name"] for c in tree["children"]] == ["initialize", "parse_value", "validate"]
        assert tree["children"][2]["annotations"]["clock"] == "2024-05-01T12:00:00+00:00"

    def test_initialize_records_zone_policy_and_folded_moment(self) -> None:
        enable_telemetry()
        result = CheckService(system_zone=UTC).check(
            "DateMaxAfter",
            "instant",
            "2024-01-02T12:00:00Z",
            ConstraintConfig(moment="2024-01-01", duration="P1D", zone_id="Europe/Brussels"),
        )
        assert result.meta is not None
        initialize = result.meta["telemetry"]["children"][0]
        assert initialize["name"] == "initialize"
        assert initialize["annotations"] == {
            "folded_moment": "2024-01-02",
            "zone_policy": "Europe/Brussels",
        }

    def test_system_policy_names_the_zone(self) -> None:
        enable_telemetry()
        result = CheckService(system_zone=UTC).check(
            "DateBefore", "instant", "2024-01-01T00:00:00Z", ConstraintConfig(moment="2024-06-01")
        )
        assert result.meta is not None
        annotations = result.meta["telemetry"]["children"][0]["annotations"]
        assert annotations == {"zone_policy": "system (UTC)"}

    def test_no_meta_when_disabled(self) -> None:
        result = CheckService().list_constraints()
        assert result.meta is None
