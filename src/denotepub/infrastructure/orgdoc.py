"""Read denote Org notes into a metadata environment and a body.

Only the leading keyword block is treated as front matter::

    #+title:      My Note Title
    #+date:       [2024-01-04 Thu 12:00]
    #+filetags:   :emacs:org-mode:
    #+identifier: 20240104T120000

Every keyword, known or not, is also stored in the option table so that
arbitrary front-matter fields can be looked up by name.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from pathlib import Path

from denotepub.domain.errors import NoteParseError
from denotepub.domain.ids import identifier_to_datetime, parse_denote_filename
from denotepub.domain.metadata import NoteMetadata, normalize_option_key

logger = logging.getLogger(__name__)

_KEYWORD_PATTERN = re.compile(r"^#\+(?P<key>[A-Za-z0-9_-]+):[ \t]*(?P<value>.*?)\s*$")
_ORG_TIMESTAMP_PATTERN = re.compile(
    r"^[\[<]?(?P<date>\d{4}-\d{2}-\d{2})"
    r"(?:\s+[^\s\d\]>]+)?"
    r"(?:\s+(?P<time>\d{1,2}:\d{2}))?"
    r"[^\]>]*[\]>]?$"
)


def parse_keywords(text: str) -> tuple[dict[str, str], str]:
    """Split the leading keyword block from the body.

    Blank lines and ``#`` comments inside the block are skipped. Repeated
    keywords are joined with a space.

    Returns:
        ``(keywords, body)`` with keyword names normalized upper-case.
    """
    lines = text.replace("\r\n", "\n").split("\n")
    keywords: dict[str, str] = {}
    idx = 0
    for idx, line in enumerate(lines):
        stripped = line.strip()
        match = _KEYWORD_PATTERN.match(stripped)
        if match:
            key = normalize_option_key(match.group("key"))
            value = match.group("value")
            keywords[key] = f"{keywords[key]} {value}".strip() if key in keywords else value
            continue
        if not stripped or stripped == "#" or stripped.startswith("# "):
            continue
        break
    else:
        idx = len(lines)

    body = "\n".join(lines[idx:]).lstrip("\n")
    return keywords, body


def parse_org_date(value: str) -> datetime:
    """Parse an Org timestamp or ISO 8601 string.

    Raises:
        ValueError: If *value* is neither.
    """
    text = value.strip()
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    match = _ORG_TIMESTAMP_PATTERN.match(text)
    if match is None:
        msg = f"Not an Org or ISO timestamp: {value!r}"
        raise ValueError(msg)
    stamp = match.group("date")
    if match.group("time"):
        return datetime.strptime(f"{stamp} {match.group('time')}", "%Y-%m-%d %H:%M")
    return datetime.strptime(stamp, "%Y-%m-%d")


def parse_filetags(value: str) -> tuple[str, ...]:
    """Split ``:a:b:`` or ``a b`` into an ordered tuple of tags."""
    tokens = re.split(r"[:\s]+", value)
    return tuple(token for token in tokens if token)


def parse_org_note(text: str, *, source_path: Path | None = None) -> tuple[NoteMetadata, str]:
    """Parse an Org note into ``(metadata, body)``.

    The identifier comes from ``#+identifier`` or, failing that, the
    denote file name. The creation date comes from ``#+date`` or, failing
    that, the identifier.

    Raises:
        NoteParseError: If ``#+date`` is present but unparseable.
    """
    keywords, body = parse_keywords(text)

    identifier = keywords.get("IDENTIFIER") or None
    if identifier is None and source_path is not None:
        parsed_name = parse_denote_filename(source_path)
        if parsed_name is not None:
            identifier = parsed_name.identifier

    created: datetime | None = None
    raw_date = keywords.get("DATE")
    if raw_date:
        try:
            created = parse_org_date(raw_date)
        except ValueError as exc:
            raise NoteParseError(source_path, f"invalid #+date {raw_date!r}") from exc
    elif identifier:
        created = identifier_to_datetime(identifier)

    if identifier is None:
        logger.debug("No denote identifier for %s", source_path or "<text>")

    metadata = NoteMetadata(
        identifier=identifier,
        title=keywords.get("TITLE") or None,
        created=created,
        aliases=keywords.get("ALIASES") or None,
        tags=parse_filetags(keywords.get("FILETAGS", "")),
        category=keywords.get("CATEGORY") or None,
        options=keywords,
        source_path=source_path,
    )
    return metadata, body


def read_org_note(path: Path) -> tuple[NoteMetadata, str]:
    """Read and parse the note at *path*.

    Raises:
        NoteParseError: If the file cannot be decoded or parsed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise NoteParseError(path, str(exc)) from exc
    return parse_org_note(text, source_path=path)
