"""Front-matter synthesis: configured fields in, delimited YAML block out.

INVARIANT: Key order equals configured descriptor order minus dropped
fields. Fields that resolve to ``None``, ``""`` or an empty sequence are
dropped silently; they are never emitted as ``key: ""``.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from typing import Any

from denotepub.domain.fields import (
    FieldDescriptor,
    is_empty,
    resolve_field,
)
from denotepub.domain.metadata import NoteMetadata
from denotepub.domain.scalars import quote, serialize_list

FRONTMATTER_DELIMITER = "---"


def render_value(field_name: str, value: Any, *, strict: bool = False) -> str:
    """Render a resolved value: lists inline, everything else as a scalar."""
    if isinstance(value, (list, tuple)):
        return serialize_list(field_name, value)
    return quote(value, strict=strict)


def front_matter_lines(
    descriptors: Iterable[FieldDescriptor],
    environment: NoteMetadata,
    *,
    today: date,
    strict: bool = False,
) -> list[str]:
    """Return the ``key: value`` lines for every non-empty field."""
    lines: list[str] = []
    for descriptor in descriptors:
        value = resolve_field(descriptor, environment, today=today)
        if is_empty(value):
            continue
        lines.append(f"{descriptor.name}: {render_value(descriptor.name, value, strict=strict)}")
    return lines


def synthesize_front_matter(
    descriptors: Iterable[FieldDescriptor | str],
    environment: NoteMetadata,
    *,
    today: date | None = None,
    strict: bool = False,
) -> str:
    """Build the ``---``-delimited front-matter block for one note.

    Args:
        descriptors: Field descriptors (or bare names) in output order.
        environment: The note's metadata.
        today: Publish date used for ``last_updated_at``. Defaults to the
            current local date.
        strict: Forwarded to the scalar quoting engine.

    Raises:
        InvalidListElementError: A sequence field contains an element that
            cannot be rendered. No partial block is returned.
    """
    resolved = [d if isinstance(d, FieldDescriptor) else FieldDescriptor(d) for d in descriptors]
    lines = front_matter_lines(
        resolved,
        environment,
        today=today or date.today(),
        strict=strict,
    )
    parts = [FRONTMATTER_DELIMITER, *lines, FRONTMATTER_DELIMITER]
    return "".join(f"{part}\n" for part in parts)
