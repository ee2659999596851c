"""Subcommand modules for org-kubectl.

Provides register_commands() which uses deferred imports so the Google
client libraries are only loaded when a command actually runs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the command group and standalone commands on the root CLI group."""
    # --- Groups ---
    from orgkubectl.commands.cache import cache

    cli.add_command(cache)

    # --- Standalone commands ---
    from orgkubectl.commands.projects import list_projects, projects

    cli.add_command(projects)
    cli.add_command(list_projects)
