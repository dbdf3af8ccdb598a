"""
Generate use case — harvest schemas, reset the output, run the generator.

This is the top-level pipeline:

    contracts/*  →  schema command per directory  →  contract list
                 →  wipe + recreate output dir    →  ts-codegen (once)

Individual contracts may fail to harvest; they are logged and left
out. Anything else that goes wrong (unreadable contracts root, output
directory that cannot be reset, generator failure) ends the run with
``error`` set.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from typegen.adapters.registry import AdapterRegistry, default_registry
from typegen.core.config.loader import ConfigError
from typegen.core.models.action import Action, Receipt
from typegen.core.models.config import TypegenConfig
from typegen.core.models.contract import CodegenOptions, ContractDescriptor, build_payload
from typegen.core.use_cases.harvest import HarvestRunResult, load_run_config, run_harvest

logger = logging.getLogger(__name__)


@dataclass
class GenerateResult:
    """Result of a full generation run."""

    harvest: HarvestRunResult | None = None
    out_path: Path | None = None
    reset_receipt: Receipt | None = None
    codegen_receipt: Receipt | None = None
    options: CodegenOptions = field(default_factory=CodegenOptions)
    dry_run: bool = False
    error: str | None = None

    @property
    def contracts(self) -> list[ContractDescriptor]:
        return self.harvest.contracts if self.harvest else []

    @property
    def generated(self) -> bool:
        return self.codegen_receipt is not None and self.codegen_receipt.ok

    def to_dict(self) -> dict:
        result: dict = {}
        if self.error:
            result["error"] = self.error
        if self.harvest and not self.harvest.error:
            result["harvest"] = self.harvest.to_dict()
        if self.out_path:
            result["out_path"] = str(self.out_path)
        result["dry_run"] = self.dry_run
        result["generated"] = self.generated
        if self.codegen_receipt:
            result["codegen"] = {
                "status": self.codegen_receipt.status,
                "duration_ms": self.codegen_receipt.duration_ms,
                "error": self.codegen_receipt.error,
            }
        return result


def reset_output_action(out_path: Path) -> Action:
    return Action(
        id="reset-output",
        adapter="filesystem",
        params={"operation": "reset", "path": str(out_path)},
        target=str(out_path),
    )


def codegen_action(
    contracts: list[ContractDescriptor],
    out_path: Path,
    cwd: Path,
    options: CodegenOptions,
) -> Action:
    return Action(
        id="generate",
        adapter="ts-codegen",
        params={
            "payload": build_payload(contracts, str(out_path), options),
            "cwd": str(cwd),
        },
        target=str(out_path),
    )


def run_generate(
    config: TypegenConfig,
    registry: AdapterRegistry | None = None,
    dry_run: bool = False,
    on_harvested: Callable[[HarvestRunResult], None] | None = None,
) -> GenerateResult:
    """Run the full pipeline for an already-loaded configuration.

    Args:
        config: Paths and commands for this run.
        registry: Optional pre-configured adapter registry.
        dry_run: Harvest, but leave the output directory alone and
            don't invoke the generator.
        on_harvested: Called once harvesting succeeds, before the output
            directory is touched.

    Returns:
        GenerateResult; ``error`` is set when the run could not complete.
    """
    if registry is None:
        registry = default_registry(config)

    result = GenerateResult(out_path=config.output_path, dry_run=dry_run)

    # ── Harvest ──────────────────────────────────────────────────
    harvest = run_harvest(config, registry=registry)
    result.harvest = harvest
    if harvest.error:
        result.error = harvest.error
        return result

    contracts = harvest.contracts
    if not contracts:
        logger.warning("No schemas harvested from %s", config.contracts_path)

    if on_harvested is not None:
        on_harvested(harvest)

    # ── Reset output directory ───────────────────────────────────
    out_path = config.output_path
    reset = registry.execute_action(
        reset_output_action(out_path),
        working_dir=str(config.root),
        dry_run=dry_run,
    )
    result.reset_receipt = reset
    if reset.failed:
        result.error = f"Cannot reset output directory {out_path}: {reset.error}"
        return result

    # ── Generate ─────────────────────────────────────────────────
    receipt = registry.execute_action(
        codegen_action(contracts, out_path, config.generator_cwd, result.options),
        working_dir=str(config.root),
        dry_run=dry_run,
    )
    result.codegen_receipt = receipt
    if receipt.failed:
        result.error = f"Code generation failed: {receipt.error}"
        return result

    if receipt.ok:
        logger.info(
            "Generated bindings for %d contract(s) in %s (%dms)",
            len(contracts), out_path, receipt.duration_ms,
        )
    return result


def generate_from_config(
    config_path: Path | None = None,
    contracts_dir: Path | None = None,
    out_path: Path | None = None,
    dry_run: bool = False,
    registry: AdapterRegistry | None = None,
    on_harvested: Callable[[HarvestRunResult], None] | None = None,
) -> GenerateResult:
    """Load configuration (with overrides), then run the pipeline."""
    try:
        config = load_run_config(config_path, contracts_dir=contracts_dir, out_path=out_path)
    except ConfigError as e:
        return GenerateResult(error=str(e), dry_run=dry_run)
    return run_generate(
        config, registry=registry, dry_run=dry_run, on_harvested=on_harvested
    )
