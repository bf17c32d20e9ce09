"""Field descriptors and the policy that resolves each one to a value.

Well-known fields are a closed set of :class:`FieldKind` members handled
explicitly; every other descriptor is an ``OPTION`` and is looked up in
the note's keyword table by name.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import Any

from denotepub.domain.metadata import NoteMetadata
from denotepub.domain.timestamps import format_date


class FieldKind(StrEnum):
    """Front-matter fields with dedicated resolution rules."""

    TITLE = "title"
    DATE = "date"
    LAST_UPDATED_AT = "last_updated_at"
    ALIASES = "aliases"
    TAGS = "tags"
    CATEGORY = "category"
    OPTION = "option"


_WELL_KNOWN: dict[str, FieldKind] = {
    kind.value: kind for kind in FieldKind if kind is not FieldKind.OPTION
}

DEFAULT_FIELDS: tuple[str, ...] = (
    "title",
    "date",
    "last_updated_at",
    "aliases",
    "tags",
    "category",
)


@dataclass(frozen=True)
class FieldDescriptor:
    """One configured front-matter entry. Identity is the name."""

    name: str

    @property
    def kind(self) -> FieldKind:
        return _WELL_KNOWN.get(self.name, FieldKind.OPTION)


def parse_field_descriptors(names: Iterable[str]) -> list[FieldDescriptor]:
    """Build descriptors in configured order. Duplicates are kept."""
    return [FieldDescriptor(name) for name in names]


def _quoted_date(value: date) -> str:
    return f'"{format_date(value)}"'


def resolve_field(
    descriptor: FieldDescriptor,
    environment: NoteMetadata,
    *,
    today: date,
) -> Any:
    """Resolve *descriptor* against *environment*.

    Returns ``None`` when the field has no value. Dates are returned
    already double quoted (``"2024-01-04"``) so they are emitted as
    strings rather than YAML timestamps.
    """
    match descriptor.kind:
        case FieldKind.TITLE:
            return environment.title
        case FieldKind.DATE:
            if environment.created is None:
                return None
            return _quoted_date(environment.created)
        case FieldKind.LAST_UPDATED_AT:
            # Always publish time, never read from the note.
            return _quoted_date(today)
        case FieldKind.ALIASES:
            if environment.aliases is None:
                return None
            return environment.aliases.split()
        case FieldKind.TAGS:
            return list(environment.tags)
        case FieldKind.CATEGORY:
            return environment.category
        case FieldKind.OPTION:
            return environment.option(descriptor.name)


def is_empty(value: Any) -> bool:
    """True for values the synthesizer silently drops."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, Sequence):
        return len(value) == 0
    return False
