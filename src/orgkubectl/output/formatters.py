"""Output mode dispatch for ServiceResult.

JSON (``--json``) serializes the whole result, quiet (``-q``) prints bare
project ids one per line, and the default hands off to the Rich renderers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from orgkubectl.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from orgkubectl.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Display flags resolved from the global CLI options."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
