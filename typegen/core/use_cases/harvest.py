"""
Harvest use case — build every contract's schema without generating code.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from typegen.adapters.registry import AdapterRegistry, default_registry
from typegen.core.config.loader import ConfigError, load_config
from typegen.core.models.config import TypegenConfig
from typegen.core.models.contract import ContractDescriptor
from typegen.core.services.harvest import HarvestResult, harvest_all

logger = logging.getLogger(__name__)


@dataclass
class HarvestRunResult:
    """Result of harvesting a contracts root."""

    contracts_dir: Path | None = None
    results: list[HarvestResult] = field(default_factory=list)
    error: str | None = None

    @property
    def contracts(self) -> list[ContractDescriptor]:
        """Accepted contracts, in directory order."""
        return [r.descriptor() for r in self.results if r.ok]

    @property
    def failures(self) -> list[HarvestResult]:
        return [r for r in self.results if not r.ok]

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "contracts_dir": str(self.contracts_dir),
            "contracts": [c.model_dump(by_alias=True) for c in self.contracts],
            "results": [r.to_dict() for r in self.results],
            "failed": len(self.failures),
        }


def load_run_config(
    config_path: Path | None = None,
    contracts_dir: Path | None = None,
    out_path: Path | None = None,
) -> TypegenConfig:
    """Load typegen.yml and apply command-line path overrides.

    Raises:
        ConfigError: If the configuration cannot be loaded.
    """
    config = load_config(config_path)
    updates = {}
    if contracts_dir is not None:
        updates["contracts_dir"] = str(contracts_dir.resolve())
    if out_path is not None:
        updates["out_path"] = str(out_path.resolve())
    return config.model_copy(update=updates) if updates else config


def run_harvest(
    config: TypegenConfig,
    registry: AdapterRegistry | None = None,
) -> HarvestRunResult:
    """Harvest schemas for every contract under the configured root."""
    result = HarvestRunResult(contracts_dir=config.contracts_path)
    if registry is None:
        registry = default_registry(config)

    try:
        result.results = harvest_all(
            config.contracts_path,
            registry,
            config.schema_command,
            timeout=config.schema_timeout,
        )
    except OSError as e:
        result.error = f"Cannot read contracts directory {config.contracts_path}: {e}"
    return result


def harvest_from_config(
    config_path: Path | None = None,
    contracts_dir: Path | None = None,
    registry: AdapterRegistry | None = None,
) -> HarvestRunResult:
    """Load configuration, then harvest. Config errors land in ``error``."""
    try:
        config = load_run_config(config_path, contracts_dir=contracts_dir)
    except ConfigError as e:
        return HarvestRunResult(error=str(e))
    return run_harvest(config, registry=registry)
