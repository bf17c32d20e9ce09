"""Command: print the front matter a note would be published with."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from denotepub.commands._base import DpCommand

if TYPE_CHECKING:
    from denotepub.commands._context import AppContext


@click.command(
    cls=DpCommand,
    examples="""\
  denotepub frontmatter notes/20240104T120000--my-note__emacs.org
  denotepub frontmatter --full notes/20240104T120000--my-note.org""",
)
@click.argument("path", type=click.Path(path_type=Path))
@click.option("--full", is_flag=True, help="Print the whole rendered document.")
@click.pass_obj
def frontmatter(app: AppContext, path: Path, full: bool) -> None:
    """Render a note's front matter without writing anything."""
    result = app.publisher().render_note(path)
    if not result.ok or app.output.json_output:
        app.emit(result)
        return

    # Pipe-friendly: raw text to stdout
    key = "markdown" if full else "front_matter"
    click.echo(result.data[key], nl=False)
