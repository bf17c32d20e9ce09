"""PublishService: turn denote notes into Markdown files with front matter.

One note is one independent operation: parse, synthesize front matter,
render the body, write. Any failure aborts that note before anything is
written, so a published file is either complete or untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

from denotepub.domain.errors import (
    InvalidListElementError,
    MalformedScalarError,
    NoteParseError,
    OutputConflictError,
    OutputPathError,
    UnresolvedReferenceError,
)
from denotepub.domain.frontmatter import synthesize_front_matter
from denotepub.domain.links import make_link_renderer
from denotepub.infrastructure.filesystem import find_note_files, resolve_output_path, write_atomic
from denotepub.infrastructure.index import NoteIndex, make_resolver
from denotepub.infrastructure.markdown import OrgBodyRenderer
from denotepub.infrastructure.orgdoc import read_org_note
from denotepub.services._helpers import display_path, slugify, today_local
from denotepub.services.result import ServiceResult

if TYPE_CHECKING:
    from denotepub.config.settings import DenotePubSettings
    from denotepub.domain.metadata import NoteMetadata

logger = structlog.get_logger(__name__)

SECTION_KEYWORD = "HUGO_SECTION"

# Domain exception -> ServiceError code.
_ERROR_CODES: dict[type[Exception], str] = {
    InvalidListElementError: "INVALID_LIST_ELEMENT",
    MalformedScalarError: "MALFORMED_SCALAR",
    UnresolvedReferenceError: "UNRESOLVED_REFERENCE",
    NoteParseError: "PARSE_ERROR",
    OutputPathError: "INVALID_PATH",
    OutputConflictError: "OUTPUT_CONFLICT",
    OSError: "WRITE_FAILED",
}

_PUBLISH_ERRORS = (
    InvalidListElementError,
    MalformedScalarError,
    UnresolvedReferenceError,
    NoteParseError,
    OutputPathError,
    OutputConflictError,
    OSError,
)


@dataclass(frozen=True)
class RenderedNote:
    """A fully rendered note, ready to be written."""

    metadata: NoteMetadata
    front_matter: str
    body: str
    output_path: Path

    @property
    def markdown(self) -> str:
        return self.front_matter + self.body

    @property
    def slug(self) -> str:
        return self.output_path.stem


def _error_code(exc: Exception) -> str:
    for exc_type, code in _ERROR_CODES.items():
        if isinstance(exc, exc_type):
            return code
    return "PUBLISH_FAILED"


def _error_detail(exc: Exception, source: str) -> dict[str, Any]:
    detail: dict[str, Any] = {"source": source}
    if isinstance(exc, InvalidListElementError):
        detail["field"] = exc.field_name
        detail["value"] = repr(exc.value)
    elif isinstance(exc, UnresolvedReferenceError):
        detail["link"] = exc.path
    elif isinstance(exc, MalformedScalarError):
        detail["value"] = repr(exc.value)
    elif isinstance(exc, OutputConflictError):
        detail["path"] = str(exc.path)
        detail["claimed_by"] = exc.claimed_by
    return detail


class PublishService:
    """Publish denote notes into ``{base_dir}/content/{section}/``."""

    def __init__(self, settings: DenotePubSettings) -> None:
        self._settings = settings
        self._publish = settings.publish

    # ── Public operations ─────────────────────────────────────────────

    def render_note(
        self,
        path: Path,
        *,
        index: NoteIndex | None = None,
        today: date | None = None,
    ) -> ServiceResult:
        """Render one note without writing it.

        ``data["front_matter"]`` holds the YAML block and
        ``data["markdown"]`` the complete document.
        """
        op = "render_note"
        missing = self._check_exists(op, path)
        if missing is not None:
            return missing
        try:
            rendered = self._render(path, index=index, today=today or today_local())
        except _PUBLISH_ERRORS as exc:
            return self._failure(op, exc, path)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                **self._summary(rendered),
                "front_matter": rendered.front_matter,
                "markdown": rendered.markdown,
            },
        )

    def publish_file(self, path: Path, *, today: date | None = None) -> ServiceResult:
        """Render and write one note.

        Links are checked for well-formed identifiers only; use
        :meth:`publish_all` to also check that the targets exist.
        """
        op = "publish_file"
        missing = self._check_exists(op, path)
        if missing is not None:
            return missing
        try:
            rendered = self._render(path, index=None, today=today or today_local())
            written = write_atomic(rendered.output_path, rendered.markdown)
        except _PUBLISH_ERRORS as exc:
            return self._failure(op, exc, path)

        logger.info("published", note=self._display(path), output=str(rendered.output_path))
        return ServiceResult(
            ok=True,
            op=op,
            data={**self._summary(rendered), "bytes": written},
        )

    def publish_all(
        self,
        source_dir: Path | None = None,
        *,
        today: date | None = None,
    ) -> ServiceResult:
        """Publish every note under *source_dir* (default: ``[notes] directory``).

        Notes are independent: a failing note is reported in
        ``data["failed"]`` and skipped, the rest are still written. A note
        whose output file was already written earlier in the run fails
        with ``OUTPUT_CONFLICT`` instead of overwriting it. The result is
        not ok when any note failed.
        """
        op = "publish_all"
        root = source_dir or self._settings.notes_dir
        if not root.is_dir():
            return ServiceResult.failure(
                op,
                "NOT_FOUND",
                f"Notes directory not found: {root}",
                detail={"source_dir": str(root)},
            )

        files = find_note_files(root, self._settings.notes.extensions)
        index = NoteIndex.build(files)
        publish_date = today or today_local()
        published: list[dict[str, Any]] = []
        failed: list[dict[str, Any]] = []
        warnings: list[str] = []
        claimed: dict[Path, str] = {}

        if not files:
            warnings.append(f"No notes found under {root}")

        for path in files:
            with structlog.contextvars.bound_contextvars(note=self._display(path)):
                try:
                    rendered = self._render(path, index=index, today=publish_date)
                    target = rendered.output_path.resolve()
                    if target in claimed:
                        raise OutputConflictError(rendered.output_path, claimed[target])
                    write_atomic(rendered.output_path, rendered.markdown)
                    claimed[target] = self._display(path)
                except _PUBLISH_ERRORS as exc:
                    logger.warning("publish failed", error=str(exc))
                    failed.append(
                        {
                            "source": self._display(path),
                            "code": _error_code(exc),
                            "message": str(exc),
                        }
                    )
                    continue
                logger.debug("published", output=str(rendered.output_path))
                published.append(self._summary(rendered))

        data: dict[str, Any] = {
            "source_dir": str(root),
            "output_dir": str(self._content_dir()),
            "published_count": len(published),
            "failed_count": len(failed),
            "items": published,
            "failed": failed,
        }
        if failed:
            return ServiceResult.failure(
                op,
                "PARTIAL_FAILURE",
                f"{len(failed)} of {len(files)} notes failed to publish",
                detail={"failed": failed},
                data=data,
                warnings=warnings,
            )
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    # ── Private helpers ───────────────────────────────────────────────

    def _render(self, path: Path, *, index: NoteIndex | None, today: date) -> RenderedNote:
        """Parse, synthesize, and render one note. Raises domain errors."""
        metadata, body = read_org_note(path)

        # Front matter first: a bad list field must stop the note before
        # any body work happens.
        front_matter = synthesize_front_matter(
            self._publish.field_descriptors,
            metadata,
            today=today,
            strict=self._publish.strict_scalars,
        )

        link_renderer = make_link_renderer(
            self._publish.link_class,
            resolve=make_resolver(index),
        )
        renderer = OrgBodyRenderer(link_renderer, heading_offset=self._publish.heading_offset)
        rendered_body = renderer.render(body)

        return RenderedNote(
            metadata=metadata,
            front_matter=front_matter,
            body=rendered_body,
            output_path=self._output_path(path, metadata),
        )

    def _output_path(self, path: Path, metadata: NoteMetadata) -> Path:
        section = metadata.option(SECTION_KEYWORD) or self._publish.section
        slug = metadata.identifier or slugify(metadata.title or path.stem)
        return resolve_output_path(self._settings.output_base_dir, section.strip("/"), slug)

    def _content_dir(self) -> Path:
        return self._settings.output_base_dir / "content"

    def _check_exists(self, op: str, path: Path) -> ServiceResult | None:
        if path.is_file():
            return None
        return ServiceResult.failure(
            op,
            "NOT_FOUND",
            f"Note not found: {path}",
            detail={"source": str(path)},
        )

    def _failure(self, op: str, exc: Exception, path: Path) -> ServiceResult:
        source = self._display(path)
        logger.warning("publish failed", note=source, error=str(exc))
        return ServiceResult.failure(
            op,
            _error_code(exc),
            str(exc),
            detail=_error_detail(exc, source),
        )

    def _summary(self, rendered: RenderedNote) -> dict[str, Any]:
        return {
            "id": rendered.metadata.identifier or rendered.slug,
            "title": rendered.metadata.title or "",
            "source": self._display(rendered.metadata.source_path or Path()),
            "path": str(rendered.output_path),
        }

    def _display(self, path: Path) -> str:
        return display_path(path, self._settings.project_root)
