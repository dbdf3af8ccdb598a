"""
Tools use case — which external tools the pipeline can reach.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from typegen.adapters.registry import AdapterRegistry, default_registry
from typegen.core.config.loader import load_config


def tool_status(
    config_path: Path | None = None,
    registry: AdapterRegistry | None = None,
) -> dict[str, dict[str, Any]]:
    """Availability of every registered adapter's tool.

    Raises:
        ConfigError: If the configuration cannot be loaded.
    """
    if registry is None:
        registry = default_registry(load_config(config_path))
    return registry.adapter_status()
