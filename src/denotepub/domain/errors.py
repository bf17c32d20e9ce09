"""Exception types raised by the publishing core and its host collaborators."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class DenotePubError(Exception):
    """Base class for all denotepub errors."""


class InvalidListElementError(DenotePubError):
    """A sequence field holds an element that cannot be rendered as YAML.

    Aborts front-matter synthesis for the whole document.
    """

    def __init__(self, field_name: str, value: Any) -> None:
        self.field_name = field_name
        self.value = value
        super().__init__(f"Invalid element in list field {field_name!r}: {value!r}")


class MalformedScalarError(DenotePubError):
    """A scalar value has a shape the quoting engine does not understand.

    Only raised in strict mode; lenient mode degrades to ``""``.
    """

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"Cannot render {type(value).__name__} value as a YAML scalar: {value!r}")


class UnresolvedReferenceError(DenotePubError):
    """An internal ``denote:`` link points at no known note."""

    def __init__(self, path: str, reason: str = "unknown identifier") -> None:
        self.path = path
        super().__init__(f"Cannot resolve denote link {path!r}: {reason}")


class NoteParseError(DenotePubError):
    """A source note could not be read into a metadata environment."""

    def __init__(self, path: Path | None, message: str) -> None:
        self.path = path
        where = str(path) if path is not None else "<text>"
        super().__init__(f"{where}: {message}")


class ConfigError(DenotePubError):
    """``denotepub.toml`` is missing, unreadable, or not valid TOML."""


class OutputPathError(DenotePubError):
    """A note's section or identifier would place it outside the output tree."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Path escapes output directory: {path}")


class OutputConflictError(DenotePubError):
    """Two notes of one run resolve to the same output file."""

    def __init__(self, path: Path, claimed_by: str) -> None:
        self.path = path
        self.claimed_by = claimed_by
        super().__init__(f"{path} is already published from {claimed_by}")
