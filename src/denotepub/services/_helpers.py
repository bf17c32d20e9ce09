"""Shared service-layer helper functions."""

from __future__ import annotations

import re
from datetime import date
from pathlib import Path

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def today_local() -> date:
    """Today's date in local time (the publish date)."""
    return date.today()


def slugify(text: str, max_len: int = 80) -> str:
    """Lower-case, dash-separated slug for notes without an identifier."""
    text = _SLUG_RE.sub("-", text.strip().lower()).strip("-")
    if not text:
        return "note"
    return text[:max_len].rstrip("-")


def display_path(path: Path, root: Path) -> str:
    """*path* relative to *root* when possible, else absolute."""
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)
