"""Subcommands of ``denotepub``, attached to the root group by :func:`register_commands`."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    from denotepub.commands.frontmatter import frontmatter
    from denotepub.commands.publish import publish

    for command in (publish, frontmatter):
        cli.add_command(command)
