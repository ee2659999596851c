"""AppContext — the object every subcommand receives via ``@click.pass_obj``.

Built once by the root group. It owns the resolved settings, sets up
logging, and turns a :class:`ServiceResult` into output and an exit code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from orgkubectl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from orgkubectl.config.settings import OrgSettings
    from orgkubectl.services.result import ServiceResult


class AppContext:
    """Settings plus result emission, shared by all commands.

    Construction never touches the network, so ``--help`` and
    ``--version`` work without credentials.
    """

    def __init__(self, settings: OrgSettings) -> None:
        self.settings = settings

        from orgkubectl.config.logging import configure_logging

        configure_logging(verbosity=settings.verbosity, log_json=settings.log_json)

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def emit(self, result: ServiceResult) -> None:
        """Print *result* and exit 1 if it failed.

        Successful output goes to stdout so it can be piped. Failures go
        to stderr. Warnings always go to stderr, except in JSON mode where
        they are part of the payload.
        """
        display = self.output_settings
        output = format_result(result, settings=display)
        if not display.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
        if not result.ok:
            click.echo(output, err=True)
            raise SystemExit(1)
        click.echo(output)
