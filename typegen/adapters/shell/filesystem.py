"""
Filesystem adapter — reset the bindings output directory.

``reset`` is the destructive step of a run: the output directory is
removed with everything in it and created again, empty. A directory
that does not exist yet counts as already removed.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from typegen.adapters.base import Adapter, ExecutionContext
from typegen.core.models.action import Receipt

logger = logging.getLogger(__name__)

VALID_OPERATIONS = {"reset"}


class FilesystemAdapter(Adapter):
    """Directory operations with receipts.

    Action params:
        operation (str): Only 'reset' is supported.
        path (str): Target path (relative to working_dir or absolute).
    """

    @property
    def name(self) -> str:
        return "filesystem"

    def is_available(self) -> bool:
        return True

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        operation = context.action.params.get("operation", "")
        if not operation:
            return False, "Missing required param: 'operation'"

        if operation not in VALID_OPERATIONS:
            return False, (
                f"Unknown operation '{operation}'. "
                f"Valid: {', '.join(sorted(VALID_OPERATIONS))}"
            )

        if not context.action.params.get("path"):
            return False, "Missing required param: 'path'"

        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        operation = context.action.params["operation"]
        target = Path(context.action.params["path"])
        if not target.is_absolute():
            target = Path(context.working_dir) / target

        try:
            return self._reset(context, target)
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Filesystem error: {e}",
                metadata={"operation": operation, "path": str(target)},
            )

    def _reset(self, ctx: ExecutionContext, target: Path) -> Receipt:
        removed = 0
        if target.is_dir() and not target.is_symlink():
            removed = sum(1 for _ in target.iterdir())
            shutil.rmtree(target)
        elif target.exists() or target.is_symlink():
            target.unlink()
        target.mkdir(parents=True)
        logger.debug("Reset %s (%d entries removed)", target, removed)
        return Receipt.success(
            adapter=self.name,
            action_id=ctx.action.id,
            output=f"Directory reset: {target}",
            metadata={"path": str(target), "removed": removed},
        )
