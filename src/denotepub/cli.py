"""The ``denotepub`` command: global flags, settings, and subcommands."""

from __future__ import annotations

import click
from pydantic import ValidationError

from denotepub import __version__
from denotepub.commands import register_commands
from denotepub.commands._context import AppContext
from denotepub.config.settings import DenotePubSettings
from denotepub.domain.errors import ConfigError


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="denotepub")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Only print output paths and errors.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and error details.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Use this config file instead of searching for denotepub.toml.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, **flags: bool) -> None:
    """Publish denote notes as Markdown with YAML front matter."""
    try:
        settings = DenotePubSettings.from_cli(config_path=config_path, **flags)
    except (ConfigError, ValidationError) as exc:
        raise click.ClickException(str(exc)) from exc
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
