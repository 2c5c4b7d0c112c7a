"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO); the caller
extracts the text via ``get_output(console)``. Renderers are dispatched
by ``result.op``; unknown ops fall through to a key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from temporal_constraints.output.console import create_console, get_output, style_for_family

if TYPE_CHECKING:
    from rich.console import Console

    from temporal_constraints.services.result import ServiceResult

CONSTRAINT_VIOLATED = "CONSTRAINT_VIOLATED"


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok or _is_violation(result):
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output for ``--quiet``: one word, or one name per line."""
    if _is_violation(result):
        return "invalid"
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    if result.op == "check":
        return "valid"
    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(str(item.get("name", "")) for item in items if isinstance(item, dict))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _is_violation(result: ServiceResult) -> bool:
    return result.error is not None and result.error.code == CONSTRAINT_VIOLATED


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="tc.key")
    if key == "constraint":
        v = Text(str(value), style="tc.constraint")
    elif key == "kind":
        v = Text(str(value), style="tc.kind")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block, including the telemetry span tree."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)
    style = "yellow" if duration > 100 else "dim"
    line = f"{prefix}[{style}]{duration:>8.3f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)
    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    code = f" [{err.code}]" if err else ""
    label = Text("ERROR", style="tc.error")
    op = Text(f"  {result.op}{code}", style="tc.op")
    console.print(label, op, Text(" — "), msg)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")
    if verbose:
        _render_meta(console, result)


# ── Operation renderers ───────────────────────────────────────────────


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """VALID / INVALID headline, then the value and violation message."""
    data = result.data
    if data.get("valid"):
        headline = Text("VALID", style="tc.valid")
    else:
        headline = Text("INVALID", style="tc.invalid")
    console.print(headline, Text(f"  {data.get('constraint', '')}", style="tc.constraint"), end="")
    console.print()
    _field(console, "kind", data.get("kind", ""))
    _field(console, "value", data.get("value", ""))
    if data.get("message"):
        _field(console, "message", data["message"])
    if verbose and data.get("message_template"):
        _field(console, "template", data["message_template"])
    if verbose:
        _render_meta(console, result)


def _render_constraints(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Catalog table: name, family, attributes, and (verbose) kinds."""
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Constraint", style="tc.constraint", no_wrap=True)
    table.add_column("Family")
    table.add_column("Attributes")
    table.add_column("Kinds", overflow="fold")

    for item in items:
        family = str(item.get("family", ""))
        kinds = item.get("kinds", [])
        table.add_row(
            str(item.get("name", "")),
            Text(family, style=style_for_family(family)),
            ", ".join(item.get("attributes", [])) or "-",
            ", ".join(kinds) if verbose or len(items) == 1 else str(len(kinds)),
        )
    console.print(table)
    console.print(f"{result.data.get('count', len(items))} constraints")
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    console.print(Text("OK", style="tc.ok"), Text(f"  {result.op}", style="tc.op"), end="")
    console.print()
    for key, value in result.data.items():
        if isinstance(value, dict | list):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "check": _render_check,
    "constraints": _render_constraints,
}
