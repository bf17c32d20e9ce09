"""Shared pytest fixtures and test helpers for denotepub tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from denotepub.config.settings import DenotePubSettings

NOTE_A_NAME = "20240104T120000--my-note-title__emacs_org-mode.org"
NOTE_A = """\
#+title:      My Note Title
#+date:       [2024-01-04 Thu 12:00]
#+filetags:   :emacs:org-mode:
#+identifier: 20240104T120000

* Intro
See [[denote:20240105T090000][the other note]] and [[denote:20240105T090000::#details]].
"""

NOTE_B_NAME = "20240105T090000--other-note__emacs.org"
NOTE_B = """\
#+title:      Other "quoted" note
#+date:       2024-01-05
#+filetags:   :emacs:
#+identifier: 20240105T090000
#+aliases:    other-note old/other
#+category:   journal

* Details
Back to [[denote:20240104T120000]].
"""


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's DENOTEPUB_* environment out of the tests."""
    for name in ("DENOTEPUB_CONFIG", "DENOTEPUB_PROJECT_ROOT", "DENOTEPUB_PUBLISH__SECTION"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def notes_dir(tmp_path: Path) -> Path:
    """Notes directory holding two notes that link to each other."""
    notes = tmp_path / "notes"
    notes.mkdir()
    (notes / NOTE_A_NAME).write_text(NOTE_A, encoding="utf-8")
    (notes / NOTE_B_NAME).write_text(NOTE_B, encoding="utf-8")
    return notes


@pytest.fixture
def write_note(notes_dir: Path) -> Callable[[str, str], Path]:
    """Write an extra note into :func:`notes_dir` and return its path."""

    def _write(name: str, text: str) -> Path:
        path = notes_dir / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def settings(tmp_path: Path) -> DenotePubSettings:
    """Settings rooted at tmp_path with notes in ``notes/`` and output in ``site/``."""
    return DenotePubSettings.from_cli(
        project_root=tmp_path,
        publish={"base_dir": "site"},
        notes={"directory": "notes"},
    )


@pytest.fixture
def _isolated_project(tmp_path: Path, notes_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a project with a denotepub.toml and two notes.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command
    test classes.
    """
    (tmp_path / "denotepub.toml").write_text(
        '[publish]\nbase_dir = "site"\n\n[notes]\ndirectory = "notes"\n',
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)
