"""Locating and reading ``denotepub.toml``.

The file is searched for from the working directory upward, the way git
finds ``.git``. ``DENOTEPUB_CONFIG`` names a file directly and disables
the search.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from denotepub.domain.errors import ConfigError

CONFIG_FILENAME = "denotepub.toml"
CONFIG_ENV_VAR = "DENOTEPUB_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the ``denotepub.toml`` in effect for *start* (default: cwd), or None."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override).expanduser()
        return path if path.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path* as TOML.

    Raises:
        ConfigError: The file cannot be read or is not valid TOML.
    """
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except OSError as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc

