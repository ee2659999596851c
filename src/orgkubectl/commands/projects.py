"""Commands: projects beneath an ancestor, and the full project list."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from orgkubectl.commands._base import OrgCommand

if TYPE_CHECKING:
    from orgkubectl.commands._context import AppContext


@click.command(
    cls=OrgCommand,
    examples="""\
  org-kubectl projects 123456789012
  org-kubectl -q projects 123456789012
  org-kubectl projects 123456789012 --no-cache
  org-kubectl projects 123456789012 --max-workers 16 --timeout 60
  org-kubectl --json projects 123456789012""",
)
@click.argument("target")
@click.option("--no-cache", is_flag=True, help="Ignore and do not update the ancestry cache.")
@click.option(
    "--max-workers",
    type=click.IntRange(min=0),
    default=None,
    help="Cap on concurrent ancestry lookups (0 = one per uncached project).",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0),
    default=None,
    help="Seconds before ancestry resolution is abandoned (0 = no limit).",
)
@click.pass_obj
def projects(
    app: AppContext,
    target: str,
    no_cache: bool,
    max_workers: int | None,
    timeout: float | None,
) -> None:
    """List projects whose ancestry contains TARGET (an organization or folder id)."""
    from orgkubectl.services.projects import ProjectService

    settings = app.settings.with_overrides(
        no_cache=no_cache,
        max_workers=max_workers,
        timeout=timeout,
    )
    app.emit(ProjectService(settings).find_child_projects(target))


@click.command(
    "list-projects",
    cls=OrgCommand,
    examples="""\
  org-kubectl list-projects
  org-kubectl -q list-projects""",
)
@click.pass_obj
def list_projects(app: AppContext) -> None:
    """List every project visible to the current credentials."""
    from orgkubectl.services.projects import ProjectService

    app.emit(ProjectService(app.settings).list_projects())
