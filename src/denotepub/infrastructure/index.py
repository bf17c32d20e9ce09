"""Identifier index over a corpus of notes, and the denote link resolver.

The index is the host side of reference resolution: it decides whether
a ``denote:`` link points at a note that exists before the link renderer
formats it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from denotepub.domain.errors import NoteParseError, UnresolvedReferenceError
from denotepub.domain.ids import parse_denote_filename, validate_identifier
from denotepub.domain.links import Reference, Resolver, parse_reference
from denotepub.infrastructure.orgdoc import read_org_note

logger = logging.getLogger(__name__)


@dataclass
class NoteIndex:
    """Maps denote identifiers to the files that carry them."""

    paths: dict[str, Path] = field(default_factory=dict)

    @classmethod
    def build(cls, files: Iterable[Path]) -> NoteIndex:
        """Index *files* by identifier.

        Uses the file name when it carries an identifier; otherwise reads
        the note's ``#+identifier`` keyword. Unreadable files are skipped.
        """
        index = cls()
        for path in files:
            name = parse_denote_filename(path)
            identifier = name.identifier if name else None
            if identifier is None:
                try:
                    identifier = read_org_note(path)[0].identifier
                except NoteParseError:
                    logger.debug("Skipping unreadable note while indexing: %s", path)
                    continue
            if identifier is None:
                continue
            if identifier in index.paths:
                logger.warning(
                    "Duplicate identifier %s in %s and %s",
                    identifier,
                    index.paths[identifier],
                    path,
                )
                continue
            index.paths[identifier] = path
        return index

    def __contains__(self, identifier: object) -> bool:
        return identifier in self.paths

    def __len__(self) -> int:
        return len(self.paths)


def make_resolver(index: NoteIndex | None = None) -> Resolver:
    """Return a resolver that validates identifiers, and checks *index* if given.

    Raises (from the returned callable):
        UnresolvedReferenceError: Malformed identifier, or one the index
            does not know.
    """

    def resolve(path: str) -> Reference:
        reference = parse_reference(path)
        if not validate_identifier(reference.identifier):
            raise UnresolvedReferenceError(path, "malformed identifier")
        if index is not None and reference.identifier not in index:
            raise UnresolvedReferenceError(path)
        return reference

    return resolve
