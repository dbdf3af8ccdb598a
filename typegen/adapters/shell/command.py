"""
Shell command adapter — run a build command inside a contract directory.

Commands run without a shell, as an argument list. Stdout is captured
on success and on failure alike: the schema exporter may report the
file it wrote even when the process exits non-zero.
"""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
import time
from pathlib import Path

from typegen.adapters.base import Adapter, ExecutionContext
from typegen.core.models.action import Receipt

logger = logging.getLogger(__name__)


class ShellCommandAdapter(Adapter):
    """Execute commands and capture output.

    Action params:
        command (list[str] | str): The command to execute.
        cwd (str): Working directory (default: context.working_dir).
        timeout (float | None): Timeout in seconds (default: none).
    """

    def __init__(self, program: str = "sh"):
        self._program = program

    @property
    def name(self) -> str:
        return "shell"

    def is_available(self) -> bool:
        return shutil.which(self._program) is not None

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        command = context.action.params.get("command")
        if not command:
            return False, "Missing required param: 'command'"

        if not Path(context.cwd).is_dir():
            return False, f"Working directory does not exist: {context.cwd}"

        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        command = context.action.params["command"]
        argv = shlex.split(command) if isinstance(command, str) else list(command)
        timeout = context.action.params.get("timeout")
        cwd = context.cwd
        display = shlex.join(argv)

        logger.debug("Executing: %s (cwd=%s)", display, cwd)
        start = time.monotonic()

        try:
            result = subprocess.run(
                argv,
                cwd=cwd,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Command timed out after {timeout}s",
                metadata={"command": display, "cwd": cwd, "timeout": timeout},
            )
        except (OSError, ValueError) as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Command execution error: {e}",
                metadata={"command": display, "cwd": cwd},
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        metadata = {
            "command": display,
            "cwd": cwd,
            "return_code": result.returncode,
            "stderr": result.stderr.strip(),
        }

        if result.returncode == 0:
            return Receipt.success(
                adapter=self.name,
                action_id=context.action.id,
                output=result.stdout,
                duration_ms=elapsed_ms,
                metadata=metadata,
            )

        return Receipt.failure(
            adapter=self.name,
            action_id=context.action.id,
            error=metadata["stderr"] or f"Command exited with code {result.returncode}",
            output=result.stdout,
            duration_ms=elapsed_ms,
            metadata=metadata,
        )
