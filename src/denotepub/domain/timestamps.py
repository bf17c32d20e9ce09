"""Timestamp detection and date formatting.

One predicate decides both whether a string is left bare by the scalar
quoting engine and whether a resolved date field is well formed, so the
two can never disagree about what a timestamp looks like.
"""

from __future__ import annotations

import re
from datetime import date, datetime

# YYYY-MM-DD, optional THH:MM:SS, optional Z or ±HH:MM offset.
TIMESTAMP_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}(?:T\d{2}:\d{2}:\d{2}(?:Z|[+-]\d{2}:\d{2})?)?$"
)


def is_timestamp(text: str) -> bool:
    """Return True when *text* is a bare YAML-compatible timestamp."""
    return TIMESTAMP_PATTERN.fullmatch(text) is not None


def format_date(value: date | datetime) -> str:
    """Render *value* as ``YYYY-MM-DD``."""
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()
