"""Click command classes that carry usage examples.

``--examples`` prints the examples and exits, so ``--help`` stays short.
"""

from __future__ import annotations

from typing import Any

import click


class _WithExamples:
    """Adds an eager ``--examples`` flag when ``examples=`` text is given."""

    params: list[click.Parameter]

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._print_examples,
                    help="Show usage examples and exit.",
                )
            )

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)


class DpCommand(_WithExamples, click.Command):
    """Command accepting ``examples=``."""


class DpGroup(_WithExamples, click.Group):
    """Group accepting ``examples=``; subcommands default to :class:`DpCommand`."""

    command_class = DpCommand
