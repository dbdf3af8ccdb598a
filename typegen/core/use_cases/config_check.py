"""
Config check use case — validate typegen.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from typegen.adapters.registry import AdapterRegistry, default_registry
from typegen.core.config.loader import ConfigError, find_config_file, load_config
from typegen.core.models.config import TypegenConfig


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: TypegenConfig | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        data: dict = {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
        }
        if self.config:
            data["contracts_dir"] = str(self.config.contracts_path)
            data["out_path"] = str(self.config.output_path)
            data["schema_command"] = self.config.schema_command
        return data


def check_config(
    config_path: Path | None = None,
    registry: AdapterRegistry | None = None,
) -> ConfigCheckResult:
    """Validate configuration and report issues.

    A missing typegen.yml is not an error (defaults apply), but it is
    reported as a warning.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_config_file()
        if config_path is None:
            result.warnings.append("No typegen.yml found, using defaults.")
    result.config_path = config_path

    try:
        config = load_config(config_path)
    except ConfigError as e:
        result.errors.append(str(e))
        return result
    result.config = config

    contracts = config.contracts_path
    if not contracts.is_dir():
        result.errors.append(f"Contracts directory does not exist: {contracts}")
    else:
        try:
            if not any(p.is_dir() for p in contracts.iterdir()):
                result.warnings.append(f"Contracts directory has no subdirectories: {contracts}")
        except OSError as e:
            result.errors.append(f"Cannot read contracts directory {contracts}: {e}")

    if not config.output_path.parent.is_dir():
        result.warnings.append(
            f"Parent of output directory does not exist and will be created: "
            f"{config.output_path.parent}"
        )

    if not config.generator_cwd.is_dir():
        result.errors.append(f"Generator working directory does not exist: {config.generator_cwd}")

    if registry is None:
        registry = default_registry(config)
    for name, status in registry.adapter_status().items():
        if not status["available"]:
            result.warnings.append(f"Tool for adapter '{name}' not found on PATH.")

    result.valid = not result.errors
    return result
