"""Per-invocation state handed to every command through ``@click.pass_obj``."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import click

from denotepub.config.logging import configure_logging
from denotepub.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from denotepub.config.settings import DenotePubSettings
    from denotepub.services.publish import PublishService
    from denotepub.services.result import ServiceResult


class AppContext:
    """Settings, output mode, a publisher factory, and result emission."""

    def __init__(self, settings: DenotePubSettings) -> None:
        self.settings = settings
        self.output = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
            color=sys.stdout.isatty(),
        )
        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )

    def publisher(self) -> PublishService:
        from denotepub.services.publish import PublishService

        return PublishService(self.settings)

    def emit(self, result: ServiceResult) -> None:
        """Print *result*. A failed result goes to stderr and exits with status 1."""
        text = format_result(result, settings=self.output)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)

        click.echo(text)
        # JSON output already carries the warnings.
        if self.output.json_output:
            return
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)
