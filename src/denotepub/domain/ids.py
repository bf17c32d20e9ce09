"""Denote identifiers and file-name conventions.

A denote file name looks like::

    20240104T120000==1a--my-note-title__emacs_org-mode.org

The identifier is permanent; the signature (``==``), title slug (``--``)
and keywords (``__``) are optional.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

IDENTIFIER_PATTERN = re.compile(r"^\d{8}T\d{6}$")

_FILENAME_PATTERN = re.compile(
    r"^(?P<identifier>\d{8}T\d{6})"
    r"(?:==(?P<signature>[^-_]+?))?"
    r"(?:--(?P<title>.+?))?"
    r"(?:__(?P<keywords>.+))?$"
)


@dataclass(frozen=True)
class DenoteFileName:
    """Components of a denote-style file name."""

    identifier: str
    title_slug: str | None = None
    signature: str | None = None
    keywords: tuple[str, ...] = field(default_factory=tuple)


def validate_identifier(identifier: str) -> bool:
    """Check whether *identifier* looks like ``YYYYMMDDTHHMMSS``."""
    return IDENTIFIER_PATTERN.match(identifier) is not None


def parse_denote_filename(path: Path | str) -> DenoteFileName | None:
    """Split a denote file name into its parts.

    Returns None when the stem does not start with an identifier.
    """
    stem = Path(path).name.split(".", 1)[0]
    match = _FILENAME_PATTERN.match(stem)
    if match is None:
        return None
    keywords = match.group("keywords")
    return DenoteFileName(
        identifier=match.group("identifier"),
        title_slug=match.group("title"),
        signature=match.group("signature"),
        keywords=tuple(k for k in keywords.split("_") if k) if keywords else (),
    )


def identifier_to_datetime(identifier: str) -> datetime | None:
    """Decode an identifier into the timestamp it encodes, or None."""
    if not validate_identifier(identifier):
        return None
    try:
        return datetime.strptime(identifier, "%Y%m%dT%H%M%S")
    except ValueError:
        return None
