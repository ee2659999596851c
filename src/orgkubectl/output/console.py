"""Rich console factory and the org-kubectl colour theme.

Renderers draw into an in-memory console and hand back a string, so
``format_result`` stays a pure ``ServiceResult -> str`` function. Rich
drops colour codes on its own when stdout is not a terminal.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

ORG_THEME = Theme(
    {
        "org.ok": "bold green",
        "org.error": "bold red",
        "org.op": "bold cyan",
        "org.key": "dim",
        "org.path": "dim",
        "org.project": "bold blue",
        "org.ancestor": "magenta",
    }
)

DEFAULT_WIDTH = 120


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Console writing to a fresh StringIO buffer.

    Args:
        no_color: Strip ANSI styling regardless of terminal detection.
        width: Fixed line width; defaults to :data:`DEFAULT_WIDTH`.
    """
    return Console(
        file=StringIO(),
        theme=ORG_THEME,
        no_color=no_color,
        highlight=False,
        width=width or DEFAULT_WIDTH,
    )


def get_output(console: Console) -> str:
    """Everything rendered into *console* so far."""
    buffer = console.file
    assert isinstance(buffer, StringIO)
    return buffer.getvalue()
