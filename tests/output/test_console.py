"""Tests for the Rich console factory."""

from rich.text import Text

from orgkubectl.output.console import ORG_THEME, create_console, get_output


class TestConsole:
    def test_renders_to_buffer(self) -> None:
        console = create_console()
        console.print("hello")
        assert get_output(console) == "hello\n"

    def test_no_ansi_without_terminal(self) -> None:
        console = create_console()
        console.print(Text("OK", style="org.ok"))
        assert "\x1b[" not in get_output(console)

    def test_default_width(self) -> None:
        assert create_console().width == 120
        assert create_console(width=60).width == 60

    def test_theme_styles(self) -> None:
        for name in ("org.ok", "org.error", "org.project", "org.ancestor"):
            assert name in ORG_THEME.styles
