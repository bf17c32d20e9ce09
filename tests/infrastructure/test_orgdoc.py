"""Tests for reading Org notes into metadata and body."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from denotepub.domain.errors import NoteParseError
from denotepub.infrastructure.orgdoc import (
    parse_filetags,
    parse_keywords,
    parse_org_date,
    parse_org_note,
    read_org_note,
)
from tests.conftest import NOTE_A, NOTE_A_NAME, NOTE_B


class TestParseKeywords:
    def test_leading_block(self) -> None:
        keywords, body = parse_keywords(NOTE_A)
        assert keywords["TITLE"] == "My Note Title"
        assert keywords["IDENTIFIER"] == "20240104T120000"
        assert body.startswith("* Intro")

    def test_names_are_upper_case(self) -> None:
        keywords, _ = parse_keywords("#+Hugo-Draft: true\n")
        assert keywords == {"HUGO_DRAFT": "true"}

    def test_repeated_keywords_joined(self) -> None:
        keywords, _ = parse_keywords("#+aliases: a\n#+aliases: b\n")
        assert keywords["ALIASES"] == "a b"

    def test_comments_and_blanks_skipped(self) -> None:
        text = "#+title: T\n\n# a comment\n#+category: c\n\nBody line\n"
        keywords, body = parse_keywords(text)
        assert keywords == {"TITLE": "T", "CATEGORY": "c"}
        assert body == "Body line\n"

    def test_keywords_after_body_are_not_metadata(self) -> None:
        keywords, body = parse_keywords("#+title: T\nText\n#+category: late\n")
        assert "CATEGORY" not in keywords
        assert "#+category: late" in body

    def test_empty_value(self) -> None:
        keywords, _ = parse_keywords("#+description:\n")
        assert keywords["DESCRIPTION"] == ""

    def test_no_keywords(self) -> None:
        assert parse_keywords("Just text\n") == ({}, "Just text\n")


class TestParseOrgDate:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("[2024-01-04 Thu 12:00]", datetime(2024, 1, 4, 12, 0)),
            ("<2024-01-04 Thu>", datetime(2024, 1, 4)),
            ("[2024-01-04]", datetime(2024, 1, 4)),
            ("2024-01-05", datetime(2024, 1, 5)),
            ("2024-01-05T08:30:00", datetime(2024, 1, 5, 8, 30)),
        ],
    )
    def test_formats(self, value: str, expected: datetime) -> None:
        assert parse_org_date(value) == expected

    def test_garbage(self) -> None:
        with pytest.raises(ValueError):
            parse_org_date("last tuesday")


class TestParseFiletags:
    def test_colon_form(self) -> None:
        assert parse_filetags(":emacs:org-mode:") == ("emacs", "org-mode")

    def test_space_form(self) -> None:
        assert parse_filetags("b a") == ("b", "a")

    def test_empty(self) -> None:
        assert parse_filetags("") == ()


class TestParseOrgNote:
    def test_full_note(self) -> None:
        meta, body = parse_org_note(NOTE_B)
        assert meta.identifier == "20240105T090000"
        assert meta.title == 'Other "quoted" note'
        assert meta.created == datetime(2024, 1, 5)
        assert meta.aliases == "other-note old/other"
        assert meta.tags == ("emacs",)
        assert meta.category == "journal"
        assert meta.option("title") == 'Other "quoted" note'
        assert body.startswith("* Details")

    def test_identifier_from_file_name(self) -> None:
        meta, _ = parse_org_note("#+title: T\n", source_path=Path(NOTE_A_NAME))
        assert meta.identifier == "20240104T120000"

    def test_created_from_identifier(self) -> None:
        meta, _ = parse_org_note("#+identifier: 20240104T120000\n")
        assert meta.created == datetime(2024, 1, 4, 12, 0)

    def test_missing_everything(self) -> None:
        meta, _ = parse_org_note("Body only\n")
        assert meta.identifier is None
        assert meta.title is None
        assert meta.created is None
        assert meta.tags == ()

    def test_bad_date(self) -> None:
        with pytest.raises(NoteParseError, match="invalid #\\+date"):
            parse_org_note("#+date: someday\n", source_path=Path("x.org"))


class TestReadOrgNote:
    def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / NOTE_A_NAME
        path.write_text(NOTE_A, encoding="utf-8")
        meta, _ = read_org_note(path)
        assert meta.source_path == path
        assert meta.tags == ("emacs", "org-mode")

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(NoteParseError):
            read_org_note(tmp_path / "absent.org")

    def test_undecodable_file(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.org"
        path.write_bytes(b"#+title: \xff\xfe\n")
        with pytest.raises(NoteParseError):
            read_org_note(path)
