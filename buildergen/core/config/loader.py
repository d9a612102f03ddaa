"""
Configuration loader — reads buildergen.yml into a GeneratorConfig.

The file is optional: without one, every setting has a default and
descriptor files are passed on the command line instead.

    # buildergen.yml
    output_dir: build/generated-sources/builders
    descriptors:
      - descriptors/*.yml
    indent: 4
    overwrite: true
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "buildergen.yml"


class ConfigError(Exception):
    """Raised when buildergen.yml is unreadable or invalid."""


class GeneratorConfig(BaseModel):
    """Settings for a generation run.

    Relative paths are resolved against the directory holding the
    config file (or the cwd when there is none).
    """

    output_dir: str = "build/generated-sources/builders"
    descriptors: list[str] = Field(default_factory=list)  # glob patterns
    indent: int = Field(default=4, ge=0, le=8)
    overwrite: bool = True

    def resolve_output_dir(self, base: Path) -> Path:
        return (base / self.output_dir).resolve()

    def resolve_descriptor_files(self, base: Path) -> list[Path]:
        """Expand the descriptor glob patterns, sorted and de-duplicated."""
        found: dict[Path, None] = {}
        for pattern in self.descriptors:
            for path in sorted(base.glob(pattern)):
                if path.is_file():
                    found.setdefault(path.resolve(), None)
        return list(found)


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for buildergen.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to buildergen.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_config(path: Path | None = None) -> GeneratorConfig:
    """Load and validate generator configuration.

    Args:
        path: Explicit path to buildergen.yml. If None, searches upward
            and falls back to defaults when nothing is found.

    Returns:
        Validated GeneratorConfig.

    Raises:
        ConfigError: An explicit path is missing, or the file is invalid.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            logger.debug("No %s found, using defaults", CONFIG_FILE)
            return GeneratorConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading generator config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # Allow everything to sit under a "buildergen" key
    if isinstance(data.get("buildergen"), dict):
        data = data["buildergen"]

    try:
        config = GeneratorConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid generator configuration: {e}") from e

    logger.info("Loaded config from %s (%d descriptor pattern(s))", path, len(config.descriptors))
    return config


def config_root(config_path: Path | None) -> Path:
    """Directory that relative config paths are resolved against."""
    return config_path.parent.resolve() if config_path else Path.cwd()
