"""Configuration: the optional `godotdoc_config.json` and resolved settings."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path, PurePath

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError

log = logging.getLogger(__name__)

CONFIG_FILENAME = "godotdoc_config.json"
DEFAULT_BACKEND = "markdown"


class Configuration(BaseModel):
    """Contents of `godotdoc_config.json` in the input directory."""

    model_config = ConfigDict(extra="forbid")

    backend: str | None = None
    excluded_files: list[str] = Field(default_factory=list)  # globs, relative to input
    show_prefixed: bool | None = None


@dataclass(frozen=True)
class Settings:
    """Options read by traversal and parsing. Never modified while parsing."""

    show_prefixed: bool = True  # document `_private` members
    excluded_files: tuple[str, ...] = ()
    backend: str = DEFAULT_BACKEND

    def is_excluded(self, path: PurePath) -> bool:
        """Check a path relative to the input directory against the globs."""
        posix = path.as_posix()
        return any(fnmatchcase(posix, pattern) for pattern in self.excluded_files)


def load_configuration(input_dir: Path) -> Configuration:
    """Load `godotdoc_config.json` from `input_dir`, defaults if absent.

    Raises:
        ConfigError: If the file exists but cannot be read or validated
    """
    path = input_dir / CONFIG_FILENAME
    if not path.is_file():
        return Configuration()

    try:
        config = Configuration.model_validate_json(path.read_text(encoding="utf-8"))
    except (OSError, ValidationError) as e:
        raise ConfigError(f"Error while reading config file: {e}", str(path)) from e

    log.debug("Loaded configuration from %s", path)
    return config


def resolve_settings(
    config: Configuration,
    *,
    backend: str | None = None,
    show_prefixed: bool | None = None,
) -> Settings:
    """Combine command line overrides with the config file and defaults."""
    if show_prefixed is None:
        show_prefixed = config.show_prefixed
    return Settings(
        show_prefixed=True if show_prefixed is None else show_prefixed,
        excluded_files=tuple(config.excluded_files),
        backend=backend or config.backend or DEFAULT_BACKEND,
    )
