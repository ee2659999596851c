"""Human-readable rendering of ServiceResult, one renderer per op.

Renderers draw into a StringIO-backed console from
:mod:`orgkubectl.output.console`; :func:`render_result` looks the renderer
up by ``result.op`` and returns the captured text. Ops without a dedicated
renderer get a plain key/value dump.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from orgkubectl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from orgkubectl.services.result import ServiceResult

Renderer = Callable[["ServiceResult", "Console", bool], None]

_ARROW = " → "


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render *result* for a terminal.

    Output is plain text when stdout is not a TTY (pipes, CliRunner).
    """
    console = create_console()
    if result.ok:
        _OP_RENDERERS.get(result.op, _render_generic)(result, console, verbose)
    else:
        _render_error(result, console, verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Bare output for ``--quiet``.

    Listings become one project id per line, ready for ``xargs`` or a
    shell loop. Other ops print a one-word status.
    """
    if not result.ok:
        message = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {message}"

    items = result.data.get("items")
    if not isinstance(items, list):
        return f"OK: {result.op}"
    ids = [str(item["id"]) for item in items if isinstance(item, dict) and "id" in item]
    return "\n".join(ids)


# ── Building blocks ───────────────────────────────────────────────────


def _header(console: Console, result: ServiceResult, message: str | None = None) -> None:
    """``OK  op`` or ``ERROR  op — message``."""
    line = Text()
    if result.ok:
        line.append("OK", style="org.ok")
    else:
        line.append("ERROR", style="org.error")
    line.append(f"  {result.op}", style="org.op")
    if message:
        line.append(f" — {message}")
    console.print(line)


_VALUE_STYLES = {"target": "org.project", "path": "org.path"}


def _field(console: Console, key: str, value: Any) -> None:
    line = Text(f"  {key}: ", style="org.key")
    line.append(str(value), style=_VALUE_STYLES.get(key, ""))
    console.print(line)


def _block(console: Console, title: str, values: Mapping[str, Any]) -> None:
    """Dimmed, indented ``title:`` section of key/value lines."""
    if not values:
        return
    console.print(Text(f"  {title}:", style="dim"))
    for key, value in values.items():
        console.print(Text(f"    {key}: {value}"))


def _table(*columns: tuple[str, str]) -> Table:
    table = Table(show_header=True, pad_edge=False, expand=False)
    for name, style in columns:
        table.add_column(name, style=style, no_wrap=name == "Project")
    return table


# ── Renderers ─────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, verbose: bool) -> None:
    err = result.error
    _header(console, result, err.message if err else "Unknown error")
    if verbose and err:
        _block(console, "detail", err.detail)


def _render_projects(result: ServiceResult, console: Console, verbose: bool) -> None:
    """find_projects and list_projects: a single Project column."""
    data = result.data
    items = data.get("items", [])
    _header(console, result)
    if "target" in data:
        _field(console, "target", data["target"])

    if items:
        table = _table(("Project", "org.project"))
        for item in items:
            table.add_row(str(item.get("id", "")))
        console.print(table)
    console.print(f"\n{data.get('count', len(items))} projects")

    if verbose:
        _block(console, "cache", data.get("cache") or {})
        _block(console, "meta", result.meta)


def _render_cache_entries(result: ServiceResult, console: Console, verbose: bool) -> None:
    """cache_show: each project with its ancestor chain, nearest first."""
    data = result.data
    items = data.get("items", [])
    _header(console, result)
    _field(console, "path", data.get("path", ""))
    _field(console, "status", data.get("status", ""))

    if items:
        table = _table(("Project", "org.project"), ("Ancestors", "org.ancestor"))
        for item in items:
            table.add_row(str(item["id"]), _ARROW.join(item.get("ancestors", [])) or "-")
        console.print(table)
    console.print(f"\n{data.get('count', len(items))} cached")


def _render_generic(result: ServiceResult, console: Console, verbose: bool) -> None:
    _header(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            value = json.dumps(value, separators=(",", ":"))
        _field(console, key, value)
    if verbose:
        _block(console, "meta", result.meta)


_OP_RENDERERS: dict[str, Renderer] = {
    "find_projects": _render_projects,
    "list_projects": _render_projects,
    "cache_show": _render_cache_entries,
}
