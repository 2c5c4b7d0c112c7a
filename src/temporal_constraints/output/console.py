"""Rich Console factory and theme for temporal-constraints output.

Consoles render into a StringIO buffer so renderers return strings.
In non-TTY environments (tests, pipes) Rich disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

TC_THEME = Theme(
    {
        "tc.ok": "bold green",
        "tc.error": "bold red",
        "tc.valid": "bold green",
        "tc.invalid": "bold red",
        "tc.op": "bold cyan",
        "tc.key": "dim",
        "tc.constraint": "bold blue",
        "tc.kind": "magenta",
        "tc.family": "cyan",
    }
)

_FAMILY_STYLES: dict[str, str] = {
    "moment": "tc.family",
    "year": "tc.family",
    "year_month": "tc.family",
    "date": "tc.family",
    "time": "tc.family",
    "month": "tc.kind",
    "day_of_week": "tc.kind",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=TC_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_family(family: str) -> str:
    """Return the Rich style name for a constraint family."""
    return _FAMILY_STYLES.get(family, "")
