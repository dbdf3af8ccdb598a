"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from typegen.adapters.registry import AdapterRegistry
from typegen.adapters.shell.command import ShellCommandAdapter
from typegen.adapters.shell.filesystem import FilesystemAdapter
from typegen.core.models.config import TypegenConfig

from helpers import SCHEMA_COMMAND, RecordingGenerator


@pytest.fixture
def contracts_root(tmp_path: Path) -> Path:
    """An empty contracts root."""
    root = tmp_path / "contracts"
    root.mkdir()
    return root


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    """Output directory for generated bindings (not created)."""
    return tmp_path / "app" / "src" / "types"


@pytest.fixture
def config(tmp_path: Path, contracts_root: Path, out_dir: Path) -> TypegenConfig:
    return TypegenConfig(
        root=tmp_path,
        contracts_dir=str(contracts_root),
        out_path=str(out_dir),
        schema_command=SCHEMA_COMMAND,
    )


@pytest.fixture
def generator() -> RecordingGenerator:
    return RecordingGenerator()


@pytest.fixture
def registry(generator: RecordingGenerator) -> AdapterRegistry:
    """Real shell and filesystem adapters, recording generator."""
    reg = AdapterRegistry()
    reg.register(ShellCommandAdapter())
    reg.register(FilesystemAdapter())
    reg.register(generator)
    return reg
