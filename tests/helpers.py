"""
Test helpers — simulated contract directories and a recording generator.

Each simulated contract gets a ``build.sh`` whose output stands in for
``cargo run --bin schema``; the schema command is ``sh build.sh``.
"""

from __future__ import annotations

import textwrap
from pathlib import Path

from typegen.adapters.base import ExecutionContext
from typegen.adapters.mock import MockAdapter
from typegen.core.models.action import Receipt

SCHEMA_COMMAND = ["sh", "build.sh"]


def make_contract(root: Path, name: str, script: str | None) -> Path:
    """Create a contract directory; ``script=None`` leaves out build.sh."""
    directory = root / name
    directory.mkdir(parents=True)
    if script is not None:
        (directory / "build.sh").write_text(textwrap.dedent(script))
    return directory


def export_script(path: str, exit_code: int = 0) -> str:
    return f"echo 'Compiling schema'\necho 'Exported the full API as {path}'\nexit {exit_code}\n"


class RecordingGenerator(MockAdapter):
    """Stand-in for ts-codegen that remembers what the output dir held."""

    def __init__(self) -> None:
        super().__init__(adapter_name="ts-codegen")
        self.out_dir_entries: list[list[str]] = []

    @property
    def payloads(self) -> list[dict]:
        return [ctx.action.params["payload"] for ctx in self.call_log]

    def execute(self, context: ExecutionContext) -> Receipt:
        out = Path(context.action.params["payload"]["outPath"])
        self.out_dir_entries.append(sorted(p.name for p in out.iterdir()))
        return super().execute(context)
