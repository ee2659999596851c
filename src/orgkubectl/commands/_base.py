"""Click base classes that carry usage examples.

``OrgCommand`` and ``OrgGroup`` accept an ``examples=`` string. Commands
that have one grow an eager ``--examples`` flag, and their help text ends
with a pointer to it, so ``--help`` stays short.
"""

from __future__ import annotations

from typing import Any

import click

_EXAMPLES_HINT = "Run with --examples to see sample invocations."


class _ExamplesMixin:
    """Shared ``--examples`` wiring for commands and groups."""

    examples: str | None
    params: list[click.Parameter]

    def _attach_examples(self, examples: str | None) -> None:
        self.examples = examples
        if not examples:
            return
        self.params.append(
            click.Option(
                ["--examples"],
                is_flag=True,
                expose_value=False,
                is_eager=True,
                callback=self._print_examples,
                help="Show usage examples.",
            )
        )

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value and self.examples:
            click.echo(f"Examples for '{ctx.command_path}':\n\n{self.examples}")
            ctx.exit(0)

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        super().format_epilog(ctx, formatter)  # type: ignore[misc]
        if self.examples:
            formatter.write_paragraph()
            formatter.write_text(_EXAMPLES_HINT)


class OrgCommand(_ExamplesMixin, click.Command):
    """Command with an optional ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._attach_examples(examples)


class OrgGroup(_ExamplesMixin, click.Group):
    """Group with an optional ``--examples`` flag.

    Subcommands default to :class:`OrgCommand`, so ``@group.command``
    accepts ``examples=`` without an explicit ``cls=``.
    """

    command_class = OrgCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._attach_examples(examples)
