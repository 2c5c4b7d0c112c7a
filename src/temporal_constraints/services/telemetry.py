"""Span tracing for ``--verbose`` runs.

Off by default: every entry point costs one ``ContextVar.get``. When on,
``@traced`` opens a root span per service call, ``trace_span`` nests the
check phases (initialize, parse_value, validate) under it, and
``annotate`` records what a phase resolved, such as the zone policy or a
moment with its duration folded in. The finished tree lands in
``ServiceResult.meta["telemetry"]``.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Generator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from temporal_constraints.services.result import ServiceResult

_verbose_enabled: ContextVar[bool] = ContextVar("_verbose_enabled", default=False)
_current_span: ContextVar[Span | None] = ContextVar("_current_span", default=None)


@dataclass
class Span:
    """One timed phase of a service call."""

    name: str
    children: list[Span] = field(default_factory=list)
    annotations: dict[str, str] = field(default_factory=dict)
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None

    @property
    def duration_ms(self) -> float:
        if self.finished is None:
            return 0.0
        return (self.finished - self.started) * 1000

    def end(self) -> None:
        self.finished = time.perf_counter()

    def annotate(self, key: str, value: object) -> None:
        self.annotations[key] = str(value)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 3)}
        if self.annotations:
            data["annotations"] = dict(self.annotations)
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data


def _active_span() -> Span | None:
    if not _verbose_enabled.get():
        return None
    return _current_span.get()


def annotate(key: str, value: object) -> None:
    """Record *value* on the active span; a no-op when tracing is off."""
    span = _active_span()
    if span is not None:
        span.annotate(key, value)


@contextmanager
def trace_span(name: str) -> Generator[Span | None]:
    """Time a phase under the active span; yields None outside a traced call."""
    parent = _active_span()
    if parent is None:
        yield None
        return

    child = Span(name=name)
    parent.children.append(child)
    token = _current_span.set(child)
    try:
        yield child
    finally:
        child.end()
        _current_span.reset(token)


def _close_root(span: Span, token: Token[Span | None], *, ok: bool) -> None:
    span.end()
    _current_span.reset(token)
    structlog.get_logger("temporal_constraints.telemetry").debug(
        "span.complete",
        span_name=span.name,
        duration_ms=round(span.duration_ms, 3),
        ok=ok,
        phases=[child.name for child in span.children],
    )


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Trace a service method and attach the span tree to its ``ServiceResult``."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _verbose_enabled.get():
            return func(*args, **kwargs)

        root = Span(name=func.__qualname__)
        token = _current_span.set(root)
        try:
            result = func(*args, **kwargs)
        except Exception:
            _close_root(root, token, ok=False)
            raise

        ok = result.ok if isinstance(result, ServiceResult) else True
        _close_root(root, token, ok=ok)
        if isinstance(result, ServiceResult):
            meta = {**(result.meta or {}), "telemetry": root.to_dict()}
            return result.model_copy(update={"meta": meta})  # type: ignore[return-value]
        return result

    return wrapper


def enable_telemetry() -> None:
    """Turn tracing on for the current context (``--verbose``)."""
    _verbose_enabled.set(True)


def disable_telemetry() -> None:
    _verbose_enabled.set(False)
