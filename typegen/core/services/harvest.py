"""
Schema harvest — build each contract's schema and learn what it is called.

``cargo run --bin schema`` (via cosmwasm-schema) prints a line like

    Exported the full API as /path/to/contract/schema/reserve.json

for the file it wrote. The file's base name, minus its extension, is
the contract name the code generator uses. Only the first such line
counts.

A contract that cannot be built, or whose build prints no such line,
yields a failed HarvestResult carrying the reason. Nothing here raises
for a single bad contract directory.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path, PurePath

from typegen.adapters.registry import AdapterRegistry
from typegen.core.models.action import Action, Receipt
from typegen.core.models.contract import ContractDescriptor

logger = logging.getLogger(__name__)

EXPORT_LINE = re.compile(r"Exported the full API as (.*)$")
_EXTENSION = re.compile(r"\.[^/.]+$")


@dataclass
class HarvestResult:
    """Outcome of harvesting one contract directory."""

    directory: Path
    name: str | None = None
    reason: str | None = None
    return_code: int | None = None
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.name is not None

    def descriptor(self) -> ContractDescriptor:
        """The generator-facing descriptor. Only valid when ``ok``."""
        if self.name is None:
            raise ValueError(f"No schema harvested for {self.directory}")
        return ContractDescriptor(name=self.name, directory=str(self.directory))

    def to_dict(self) -> dict:
        return {
            "directory": str(self.directory),
            "ok": self.ok,
            "name": self.name,
            "reason": self.reason,
            "return_code": self.return_code,
            "duration_ms": self.duration_ms,
        }


def schema_name_from_path(path: str) -> str:
    """Base filename of an exported schema with its last extension removed."""
    filename = PurePath(path.strip()).name
    return _EXTENSION.sub("", filename)


def parse_schema_name(stdout: str) -> str | None:
    """Contract name from the first export line in build output, if any."""
    for line in stdout.split("\n"):
        match = EXPORT_LINE.search(line.rstrip("\r"))
        if match:
            return schema_name_from_path(match.group(1))
    return None


def harvest_contract(
    directory: Path,
    registry: AdapterRegistry,
    command: list[str],
    timeout: float | None = None,
) -> HarvestResult:
    """Run the schema command in ``directory`` and extract the contract name."""
    action = Action(
        id=f"schema:{directory.name}",
        adapter="shell",
        params={"command": list(command), "cwd": str(directory), "timeout": timeout},
        target=str(directory),
    )
    receipt = registry.execute_action(action, working_dir=str(directory))
    return _result_from_receipt(directory, receipt)


def _result_from_receipt(directory: Path, receipt: Receipt) -> HarvestResult:
    result = HarvestResult(
        directory=directory,
        return_code=receipt.metadata.get("return_code"),
        duration_ms=receipt.duration_ms,
    )

    # Exit status alone does not decide: a build that printed the export
    # line produced a schema.
    name = parse_schema_name(receipt.output)
    if name:
        result.name = name
        if receipt.failed:
            logger.warning(
                "Schema command in %s failed but exported %s: %s",
                directory, name, receipt.error,
            )
        return result

    if name == "":
        result.reason = "export line names a file with an empty base name"
    elif receipt.failed and result.return_code is None:
        result.reason = receipt.error or "schema command could not be run"
    elif result.return_code:
        detail = f": {receipt.error}" if receipt.error else ""
        result.reason = (
            f"no exported schema in output (exit code {result.return_code}){detail}"
        )
    else:
        result.reason = "no exported schema in output"
    return result


def list_contract_dirs(contracts_dir: Path) -> list[Path]:
    """Immediate subdirectories of the contracts root, sorted by name.

    Raises:
        FileNotFoundError / NotADirectoryError: If the root is unusable.
    """
    return sorted(
        (entry for entry in contracts_dir.iterdir() if entry.is_dir()),
        key=lambda p: p.name,
    )


def harvest_all(
    contracts_dir: Path,
    registry: AdapterRegistry,
    command: list[str],
    timeout: float | None = None,
) -> list[HarvestResult]:
    """Harvest every contract directory, one after another."""
    results = []
    for directory in list_contract_dirs(contracts_dir):
        result = harvest_contract(directory, registry, command, timeout=timeout)
        if result.ok:
            logger.info("Harvested %s from %s", result.name, directory)
        else:
            logger.error("Failed to generate schema for %s: %s", directory, result.reason)
        results.append(result)
    return results
