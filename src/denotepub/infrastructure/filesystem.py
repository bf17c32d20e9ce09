"""Filesystem operations for note discovery and published output.

Pure parsing/rendering lives in the domain layer; this module handles
actual file I/O, path resolution, and file discovery.
"""

from __future__ import annotations

import os
import tempfile
from collections.abc import Iterable
from pathlib import Path

from denotepub.domain.errors import OutputPathError

# Directories to skip when discovering notes.
_SKIP_DIRS = frozenset({".git", ".hg", ".svn", ".denotepub", "ltximg"})

CONTENT_DIRNAME = "content"


def find_note_files(root: Path, extensions: Iterable[str] = (".org",)) -> list[Path]:
    """Discover note files under *root*, sorted by path.

    Skips VCS and hidden directories, and Emacs lock/backup files.
    """
    suffixes = {ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in extensions}
    results: list[Path] = []
    if not root.exists():
        return results
    for path in root.rglob("*"):
        if not path.is_file():
            continue
        rel_parts = path.relative_to(root).parts
        if any(part in _SKIP_DIRS or part.startswith(".") for part in rel_parts[:-1]):
            continue
        if path.name.startswith((".#", "#")) or path.name.endswith("~"):
            continue
        if path.suffix.lower() in suffixes:
            results.append(path)
    return sorted(results)


def resolve_output_path(base_dir: Path, section: str, identifier: str) -> Path:
    """Resolve where a published note lands.

    ``{base_dir}/content/{section}/{identifier}.md``

    Raises:
        OutputPathError: If *section* or *identifier* would escape *base_dir*.
    """
    content_root = base_dir / CONTENT_DIRNAME
    result = content_root / section / f"{identifier}.md"

    if not result.resolve().is_relative_to(content_root.resolve()):
        raise OutputPathError(result)
    return result


def write_atomic(path: Path, content: str, encoding: str = "utf-8") -> int:
    """Write *content* to *path* via a temp file and rename.

    Creates parent directories. Either the full new content lands or the
    previous file (if any) is left untouched.

    Returns:
        Number of bytes written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    data = content.encode(encoding)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return len(data)
