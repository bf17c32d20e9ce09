"""Scalar quoting and inline-list serialization for YAML front matter.

Rules for :func:`quote`, applied in order:

1. ``None`` renders as nothing; the synthesizer drops such fields before
   they get here.
2. Numbers render bare in plain decimal notation (``1e+20`` becomes
   ``100000000000000000000``). Booleans render as ``true`` / ``false``.
3. Symbolic atoms (:class:`Symbol`, enum members) are always double quoted.
4. Strings that are already double quoted, equal ``true``/``false``, or
   are timestamp-shaped pass through untouched. Everything else has
   backslashes doubled, double quotes escaped, and is wrapped in quotes.

The pass-through check in rule 4 must run before escaping, otherwise a
pre-quoted or date-shaped value would be escaped twice.
"""

from __future__ import annotations

import logging
import math
from decimal import Decimal
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from denotepub.domain.errors import InvalidListElementError, MalformedScalarError
from denotepub.domain.timestamps import is_timestamp

logger = logging.getLogger(__name__)

EMPTY_QUOTED = '""'
BOOLEAN_WORDS = frozenset({"true", "false"})


@dataclass(frozen=True)
class Symbol:
    """A symbolic atom, e.g. a keyword-like option value.

    Always rendered as a double-quoted YAML string.
    """

    name: str

    def __str__(self) -> str:
        return self.name


def is_number(value: Any) -> bool:
    """True for ints and finite floats (``bool`` excluded)."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def is_atom(value: Any) -> bool:
    """True for :class:`Symbol` instances and enum members."""
    return isinstance(value, (Symbol, Enum))


def number_text(value: int | float) -> str:
    """Decimal text of a number, never in exponent notation."""
    text = str(value)
    if isinstance(value, float) and "e" in text:
        return f"{Decimal(text):f}"
    return text


def atom_name(value: Symbol | Enum) -> str:
    """Return the text of a symbolic atom."""
    if isinstance(value, Enum):
        return str(value.value)
    return value.name


def escape_and_quote(text: str) -> str:
    """Double backslashes, escape double quotes, and wrap in double quotes."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def is_self_quoted(text: str) -> bool:
    """True when *text* already starts and ends with a double quote."""
    return len(text) >= 2 and text.startswith('"') and text.endswith('"')


def quote_string(text: str) -> str:
    """Apply the string rule: pass through bare-safe text, quote the rest."""
    if is_self_quoted(text) or text in BOOLEAN_WORDS or is_timestamp(text):
        return text
    return escape_and_quote(text)


def quote(value: Any, *, strict: bool = False) -> str:
    """Render *value* as a YAML-safe scalar literal.

    Args:
        value: ``None``, a number, a boolean, a symbolic atom, or a string.
        strict: Raise :class:`MalformedScalarError` for unsupported shapes
            instead of logging a warning and returning ``""``.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_number(value):
        return number_text(value)
    if is_atom(value):
        return escape_and_quote(atom_name(value))
    if isinstance(value, str):
        return quote_string(value)

    if strict:
        raise MalformedScalarError(value)
    logger.warning("Malformed scalar degraded to empty string: %r", value)
    return EMPTY_QUOTED


def _list_element_text(field_name: str, item: Any) -> str:
    if isinstance(item, bool):
        return quote_string("true" if item else "false")
    if is_number(item):
        return quote_string(number_text(item))
    if is_atom(item):
        return escape_and_quote(atom_name(item))
    if isinstance(item, str) and item:
        return quote_string(item)
    raise InvalidListElementError(field_name, item)


def serialize_list(field_name: str, items: Iterable[Any]) -> str:
    """Render *items* as an inline YAML list, e.g. ``["a", "b c"]``.

    Numbers are converted to text before quoting, so ``[1, 2]`` becomes
    ``["1", "2"]``.

    Raises:
        InvalidListElementError: If an element is not a number, atom, or
            non-empty string. *field_name* is carried for diagnostics.
    """
    rendered = [_list_element_text(field_name, item) for item in items]
    return "[" + ", ".join(rendered) + "]"
