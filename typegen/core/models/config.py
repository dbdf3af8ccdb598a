"""
Run configuration — loaded from typegen.yml, or defaulted.

Paths are stored as written and resolved against ``root`` (the
directory holding typegen.yml, or the working directory when there
is no file).
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_SCHEMA_COMMAND = ["cargo", "run", "--quiet", "--bin", "schema"]


class GeneratorSettings(BaseModel):
    """How to reach the Node.js code generator."""

    model_config = ConfigDict(extra="forbid")

    node: str = "node"
    package: str = "@cosmwasm/ts-codegen"
    cwd: str = "."


class TypegenConfig(BaseModel):
    """Where contracts live, where bindings go, and how to build schemas."""

    model_config = ConfigDict(extra="forbid")

    contracts_dir: str = "contracts"
    out_path: str = "../unstake.js/src/types"
    schema_command: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SCHEMA_COMMAND), min_length=1
    )
    schema_timeout: float | None = None
    generator: GeneratorSettings = Field(default_factory=GeneratorSettings)

    root: Path = Field(default_factory=Path.cwd, exclude=True)

    def resolve(self, value: str) -> Path:
        """Resolve a configured path against the config root."""
        path = Path(value).expanduser()
        if not path.is_absolute():
            path = self.root / path
        return path.resolve()

    @property
    def contracts_path(self) -> Path:
        return self.resolve(self.contracts_dir)

    @property
    def output_path(self) -> Path:
        return self.resolve(self.out_path)

    @property
    def generator_cwd(self) -> Path:
        return self.resolve(self.generator.cwd)
