"""
Configuration loader — reads typegen.yml into a TypegenConfig.

The file is optional. Without one, every setting takes its default
and relative paths resolve against the current directory.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from typegen.core.models.config import TypegenConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "typegen.yml"


class ConfigError(Exception):
    """Raised when typegen.yml is unreadable or invalid."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for typegen.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to typegen.yml, or None if not found.
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


def load_config(path: Path | None = None) -> TypegenConfig:
    """Load and validate the run configuration.

    Args:
        path: Explicit path to typegen.yml. If None, searches upward
            and falls back to defaults when nothing is found.

    Returns:
        Validated TypegenConfig with ``root`` set.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            logger.debug("No %s found, using defaults", CONFIG_FILE)
            return TypegenConfig(root=Path.cwd().resolve())

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)

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

    # Accept both a flat file and one wrapped under "typegen:"
    if isinstance(data.get("typegen"), dict):
        data = data["typegen"]

    try:
        config = TypegenConfig.model_validate({**data, "root": path.parent.resolve()})
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info("Loaded config from %s (contracts: %s)", path, config.contracts_dir)
    return config
