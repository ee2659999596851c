"""Root CLI group for org-kubectl with global flags and command registration."""

from __future__ import annotations

import click

from orgkubectl import __version__
from orgkubectl.commands import register_commands
from orgkubectl.commands._context import AppContext
from orgkubectl.config.settings import OrgSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="org-kubectl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Project ids only, one per line.")
@click.option("-v", "--verbose", count=True, help="More log output (-v info, -vv debug).")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--cache-path", default=None, help="Override the ancestry cache file.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: int,
    log_json: bool,
    cache_path: str | None,
    config_path: str | None,
) -> None:
    """org-kubectl — find the cloud projects beneath an organization or folder."""
    ctx.ensure_object(dict)
    # Unset flags pass None so env vars and TOML still apply.
    settings = OrgSettings.from_cli(
        config_path=config_path,
        json_output=json_output or None,
        quiet=quiet or None,
        verbosity=verbose or None,
        log_json=log_json or None,
    )
    if cache_path is not None:
        settings = settings.with_overrides(cache_path=cache_path)
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
