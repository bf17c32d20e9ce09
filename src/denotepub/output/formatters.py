"""Format a ServiceResult for the requested output mode.

- ``--json``: the full result as JSON.
- ``--quiet``: one line per published note path, or a one-line error.
- default: Rich rendering, with a table for batch results.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from denotepub.output.console import create_console, rendered_text

if TYPE_CHECKING:
    from rich.console import Console

    from denotepub.services.result import ServiceResult

# Keys rendered by dedicated code paths rather than as plain fields.
_SKIP_FIELDS = frozenset({"items", "failed", "markdown", "front_matter"})


@dataclass(frozen=True)
class OutputSettings:
    """Output mode flags taken from the CLI."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    color: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format *result* as a string according to *settings*."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return _render_quiet(result)
    return _render_human(result, verbose=settings.verbose, color=settings.color)


def _render_quiet(result: ServiceResult) -> str:
    if not result.ok and not result.data.get("items"):
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"
    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item.get("path", "")) for item in items)
    return str(result.data.get("path", f"OK: {result.op}"))


def _render_human(result: ServiceResult, *, verbose: bool, color: bool) -> str:
    console = create_console(color=color)
    _status_line(console, result)

    for key, value in result.data.items():
        if key in _SKIP_FIELDS:
            continue
        _field(console, key, value)

    items = result.data.get("items")
    if items:
        console.print(_items_table(items))
    failed = result.data.get("failed")
    if failed:
        console.print(_failed_table(failed))

    if result.error and not failed:
        console.print(Text(f"  {result.error.message}", style="dp.error"))
        if verbose:
            for key, value in result.error.detail.items():
                _field(console, key, value)

    return rendered_text(console).rstrip("\n")


def _status_line(console: Console, result: ServiceResult) -> None:
    if result.ok:
        label = Text("OK", style="dp.ok")
    else:
        label = Text("ERROR", style="dp.error")
    console.print(label, Text(f"  {result.op}", style="dp.op"))


def _field(console: Console, key: str, value: Any) -> None:
    style = {"id": "dp.id", "path": "dp.path", "title": "dp.title"}.get(key, "")
    console.print(Text(f"  {key}: ", style="dp.key"), Text(str(value), style=style), sep="")


def _items_table(items: list[dict[str, Any]]) -> Table:
    table = Table(title="Published", show_lines=False)
    table.add_column("ID", style="dp.id")
    table.add_column("Title", style="dp.title")
    table.add_column("Output", style="dp.path")
    for item in items:
        table.add_row(*(Text(str(item.get(key, ""))) for key in ("id", "title", "path")))
    return table


def _failed_table(failed: list[dict[str, Any]]) -> Table:
    table = Table(title="Failed")
    table.add_column("Source", style="dp.path")
    table.add_column("Code", style="dp.error")
    table.add_column("Message")
    for item in failed:
        table.add_row(*(Text(str(item.get(key, ""))) for key in ("source", "code", "message")))
    return table
