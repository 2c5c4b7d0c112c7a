"""Tests for Rich Console factory and theme."""

from io import StringIO

from temporal_constraints.output.console import (
    TC_THEME,
    create_console,
    get_output,
    style_for_family,
)


class TestCreateConsole:
    def test_returns_console_with_stringio(self) -> None:
        console = create_console()
        assert isinstance(console.file, StringIO)

    def test_no_color_disables_ansi(self) -> None:
        console = create_console(no_color=True)
        console.print("[tc.valid]VALID[/tc.valid]")
        output = get_output(console)
        assert "\x1b" not in output
        assert "VALID" in output

    def test_widths(self) -> None:
        assert create_console().width == 120
        assert create_console(width=80).width == 80


class TestTheme:
    def test_styles_defined(self) -> None:
        for name in ("tc.ok", "tc.error", "tc.valid", "tc.invalid", "tc.constraint", "tc.kind"):
            assert name in TC_THEME.styles

    def test_family_styles(self) -> None:
        assert style_for_family("month") == "tc.kind"
        assert style_for_family("moment") == "tc.family"
        assert style_for_family("precision") == ""
