"""Command group: inspect and reset the ancestry cache."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from orgkubectl.commands._base import OrgGroup

if TYPE_CHECKING:
    from orgkubectl.commands._context import AppContext

_CACHE_EXAMPLES = """\
  org-kubectl cache show
  org-kubectl cache show my-project
  org-kubectl --json cache show
  org-kubectl cache clear"""


@click.group(cls=OrgGroup, examples=_CACHE_EXAMPLES)
@click.pass_obj
def cache(app: AppContext) -> None:
    """Inspect or reset the project ancestry cache."""


@cache.command(
    examples="""\
  org-kubectl cache show
  org-kubectl cache show my-project"""
)
@click.argument("project", required=False)
@click.pass_obj
def show(app: AppContext, project: str | None) -> None:
    """Show cached ancestor chains (all projects, or just PROJECT)."""
    from orgkubectl.services.cache import CacheService

    app.emit(CacheService(app.settings).show(project))


@cache.command(examples="  org-kubectl cache clear")
@click.pass_obj
def clear(app: AppContext) -> None:
    """Delete the cache file; the next run looks up every project again."""
    from orgkubectl.services.cache import CacheService

    app.emit(CacheService(app.settings).clear())
