"""Settings for one denotepub run.

Sources, highest priority first:

* keyword arguments, i.e. CLI flags;
* ``DENOTEPUB_*`` environment variables, ``__`` separating nested keys
  (``DENOTEPUB_PUBLISH__SECTION=notes``);
* the discovered ``denotepub.toml``;
* the defaults baked into :mod:`denotepub.config.models`.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from denotepub.config.discovery import find_config, read_toml
from denotepub.config.models import NotesConfig, PublishConfig
from denotepub.domain.errors import ConfigError

# TOML file for the settings object currently being constructed.
_active_toml: ContextVar[Path | None] = ContextVar("denotepub_active_toml", default=None)


@contextmanager
def _reading(path: Path | None) -> Iterator[None]:
    token = _active_toml.set(path)
    try:
        yield
    finally:
        _active_toml.reset(token)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by one ``denotepub.toml``.

    Top-level tables that are not settings fields are ignored.
    """

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        data = read_toml(toml_path) if toml_path is not None else {}
        fields = settings_cls.model_fields
        self._data: dict[str, Any] = {k: v for k, v in data.items() if k in fields}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


def _locate_config(config_path: str | Path | None, start: Path | None) -> Path | None:
    if config_path is None:
        return find_config(start)
    path = Path(config_path).expanduser()
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")
    return path


class DenotePubSettings(BaseSettings):
    """Frozen settings shared by every command of one invocation.

    Attributes:
        project_root: Base for relative paths: the directory holding
            ``denotepub.toml``, else the working directory.
        config_path: The TOML file that was read, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "DENOTEPUB_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    publish: PublishConfig = Field(default_factory=PublishConfig)
    notes: NotesConfig = Field(default_factory=NotesConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # No dotenv or secrets directory; TOML sits below the environment.
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, _active_toml.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | Path | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> DenotePubSettings:
        """Build settings for one CLI invocation.

        An explicit *config_path* must exist. Otherwise ``denotepub.toml``
        is looked up from *project_root* (or the working directory) upward.

        Raises:
            ConfigError: *config_path* is missing, or the TOML is invalid.
        """
        toml_path = _locate_config(config_path, project_root)
        root = project_root or (toml_path.parent if toml_path else Path.cwd())
        with _reading(toml_path):
            return cls(project_root=root, config_path=toml_path, **cli_flags)

    def resolve_path(self, path: Path) -> Path:
        """Resolve *path* against :attr:`project_root` unless absolute."""
        path = path.expanduser()
        return path if path.is_absolute() else self.project_root / path

    @property
    def output_base_dir(self) -> Path:
        return self.resolve_path(self.publish.base_dir)

    @property
    def notes_dir(self) -> Path:
        return self.resolve_path(self.notes.directory)
