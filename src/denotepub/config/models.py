"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, denotepub.toml only contains
overrides. A fresh site needs only ``[publish] base_dir``.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, field_validator

from denotepub.domain.fields import DEFAULT_FIELDS, FieldDescriptor, parse_field_descriptors


class PublishConfig(BaseModel):
    """[publish] section: the style configuration shared by every note.

    Frozen: constructed once per run and passed into each operation.
    """

    model_config = {"frozen": True}

    base_dir: Path = Path("site")
    section: str = "posts"
    link_class: str = "internal-link"
    front_matter_fields: tuple[str, ...] = DEFAULT_FIELDS
    strict_scalars: bool = False
    heading_offset: int = 1

    @field_validator("section")
    @classmethod
    def _section_not_empty(cls, value: str) -> str:
        value = value.strip().strip("/")
        if not value:
            msg = "section must not be empty"
            raise ValueError(msg)
        return value

    @property
    def field_descriptors(self) -> list[FieldDescriptor]:
        """Configured fields as descriptors, order and duplicates preserved."""
        return parse_field_descriptors(self.front_matter_fields)


class NotesConfig(BaseModel):
    """[notes] section."""

    model_config = {"frozen": True}

    directory: Path = Path(".")
    extensions: tuple[str, ...] = (".org",)

