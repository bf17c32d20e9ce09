"""Return type of every service operation.

Services never raise domain errors to their callers: a failure is a
``ServiceResult`` with ``ok=False`` and a :class:`ServiceError` whose
``code`` is stable and machine-readable (``NOT_FOUND``, ``PARSE_ERROR``,
``PARTIAL_FAILURE``, ...).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Why an operation failed. ``detail`` holds code-specific context."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    ``data`` may be filled even when ``ok`` is False; a batch publish
    reports the notes it did write alongside the failure.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        code: str,
        message: str,
        *,
        detail: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        warnings: list[str] | None = None,
    ) -> ServiceResult:
        error = ServiceError(code=code, message=message, detail=detail or {})
        return cls(ok=False, op=op, data=data or {}, warnings=warnings or [], error=error)
