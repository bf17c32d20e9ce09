"""The metadata environment a note exposes to the front-matter synthesizer.

Produced once per note by the host parser and read-only afterwards.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field


def normalize_option_key(name: str) -> str:
    """Map ``hugo-draft`` / ``Hugo_Draft`` / ``HUGO_DRAFT`` to ``HUGO_DRAFT``."""
    return name.strip().upper().replace("-", "_")


class NoteMetadata(BaseModel):
    """Metadata environment for one note.

    Attributes:
        identifier: Denote identifier (``YYYYMMDDTHHMMSS``), if known.
        title: Declared title text.
        created: Creation timestamp.
        aliases: Free-text alias annotation, split on whitespace on use.
        tags: Declared tags, in declaration order.
        category: Explicit category annotation only; never derived.
        options: Every keyword of the note, keyed by normalized name.
        source_path: File the note was read from.
    """

    model_config = {"frozen": True}

    identifier: str | None = None
    title: str | None = None
    created: datetime | None = None
    aliases: str | None = None
    tags: tuple[str, ...] = Field(default_factory=tuple)
    category: str | None = None
    options: dict[str, str] = Field(default_factory=dict)
    source_path: Path | None = None

    def option(self, name: str) -> str | None:
        """Look up an export option by name, case-insensitively."""
        return self.options.get(normalize_option_key(name))
