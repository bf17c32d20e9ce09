"""Command group: publish notes as Markdown (one file, or the whole corpus)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from denotepub.commands._base import DpGroup

if TYPE_CHECKING:
    from denotepub.commands._context import AppContext

_PUBLISH_EXAMPLES = """\
  denotepub publish file notes/20240104T120000--my-note__emacs.org
  denotepub publish all
  denotepub publish all --source ~/notes
  denotepub --json publish all"""


@click.group(cls=DpGroup, examples=_PUBLISH_EXAMPLES)
@click.pass_obj
def publish(app: AppContext) -> None:
    """Publish denote notes into the site's content directory."""


@publish.command(
    "file",
    examples="""\
  denotepub publish file notes/20240104T120000--my-note__emacs.org
  denotepub -q publish file notes/20240104T120000--my-note.org""",
)
@click.argument("path", type=click.Path(path_type=Path))
@click.pass_obj
def publish_file(app: AppContext, path: Path) -> None:
    """Publish a single note."""
    app.emit(app.publisher().publish_file(path))


@publish.command(
    "all",
    examples="""\
  denotepub publish all
  denotepub publish all --source ~/notes""",
)
@click.option(
    "--source",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Notes directory (default: [notes] directory from config).",
)
@click.pass_obj
def publish_all(app: AppContext, source: Path | None) -> None:
    """Publish every note under the notes directory."""
    app.emit(app.publisher().publish_all(source))
