"""Tests for the configuration models."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from denotepub.config.models import NotesConfig, PublishConfig
from denotepub.domain.fields import DEFAULT_FIELDS, FieldDescriptor


class TestPublishConfig:
    def test_defaults(self) -> None:
        cfg = PublishConfig()
        assert cfg.base_dir == Path("site")
        assert cfg.section == "posts"
        assert cfg.link_class == "internal-link"
        assert cfg.front_matter_fields == DEFAULT_FIELDS
        assert cfg.strict_scalars is False
        assert cfg.heading_offset == 1

    def test_section_slashes_trimmed(self) -> None:
        assert PublishConfig(section="/notes/emacs/").section == "notes/emacs"

    @pytest.mark.parametrize("section", ["", "  ", "/"])
    def test_empty_section_rejected(self, section: str) -> None:
        with pytest.raises(ValidationError):
            PublishConfig(section=section)

    def test_field_descriptors(self) -> None:
        cfg = PublishConfig(front_matter_fields=("tags", "title", "tags"))
        assert cfg.field_descriptors == [
            FieldDescriptor("tags"),
            FieldDescriptor("title"),
            FieldDescriptor("tags"),
        ]

    def test_frozen(self) -> None:
        cfg = PublishConfig()
        with pytest.raises(ValidationError):
            cfg.section = "other"  # type: ignore[misc]



class TestNotesConfig:
    def test_defaults(self) -> None:
        cfg = NotesConfig()
        assert cfg.directory == Path(".")
        assert cfg.extensions == (".org",)

    def test_sparse_validation(self) -> None:
        cfg = NotesConfig.model_validate({"directory": "notes"})
        assert cfg.directory == Path("notes")
        assert cfg.extensions == (".org",)
