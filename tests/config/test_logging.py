"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from denotepub.config.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("denotepub")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)
    structlog.contextvars.clear_contextvars()


class TestConfigureLogging:
    def test_default_level(self) -> None:
        configure_logging()
        assert logging.getLogger("denotepub").level == logging.WARNING
        assert logging.getLogger().level == logging.WARNING

    def test_verbose(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("denotepub").level == logging.DEBUG

    def test_quiet(self) -> None:
        configure_logging(quiet=True)
        assert logging.getLogger("denotepub").level == logging.ERROR

    def test_verbose_beats_quiet(self) -> None:
        configure_logging(verbose=True, quiet=True)
        assert logging.getLogger("denotepub").level == logging.DEBUG

    def test_idempotent_calls(self) -> None:
        configure_logging()
        configure_logging(log_json=True)
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, structlog.stdlib.ProcessorFormatter)

    def test_clears_bound_context(self) -> None:
        structlog.contextvars.bind_contextvars(note="stale")
        configure_logging()
        assert structlog.contextvars.get_contextvars() == {}

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_json=True)
        structlog.contextvars.bind_contextvars(note="a.org")
        structlog.get_logger("denotepub.test").warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["note"] == "a.org"
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "denotepub.test"
        assert "timestamp" in parsed

    def test_stdlib_records_are_structured(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("denotepub.domain.scalars").debug("degraded %s", "x")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "degraded x"
        assert parsed["level"] == "debug"

    def test_quiet_hides_warnings(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(quiet=True, log_json=True)
        logging.getLogger("denotepub.infrastructure.index").warning("noise")
        assert capfd.readouterr().err == ""
