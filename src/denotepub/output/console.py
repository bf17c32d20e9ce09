"""Rich console that renders results into a string.

``format_result`` returns text rather than printing, so every console
writes to an in-memory buffer. Styling is only emitted when the caller
asks for colour (stdout is a terminal).
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

THEME = Theme(
    {
        "dp.ok": "bold green",
        "dp.error": "bold red",
        "dp.warning": "bold yellow",
        "dp.op": "bold cyan",
        "dp.key": "dim",
        "dp.id": "bold blue",
        "dp.path": "dim",
        "dp.title": "bold",
    }
)


def create_console(*, color: bool = False, width: int = 120) -> Console:
    """A themed Console writing to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=THEME,
        force_terminal=color,
        color_system="standard" if color else None,
        highlight=False,
        width=width,
    )


def rendered_text(console: Console) -> str:
    """Everything printed to a console made by :func:`create_console`."""
    buffer = console.file
    assert isinstance(buffer, StringIO)
    return buffer.getvalue()
