"""
ts-codegen adapter — drive @cosmwasm/ts-codegen from Python.

The generator is a Node.js library, not a CLI. A small driver script
is evaluated by ``node -e``: it reads the JSON payload from stdin,
calls the package's default export with it and waits for the returned
promise. Module resolution starts from the action's working directory,
so that directory must see the package in its node_modules.
"""

from __future__ import annotations

import json
import logging
import shutil
import subprocess
import time
from pathlib import Path

from typegen.adapters.base import Adapter, ExecutionContext
from typegen.core.models.action import Receipt

logger = logging.getLogger(__name__)

_DRIVER = """\
const mod = require(process.argv[1]);
const codegen = mod.default || mod;
let raw = '';
process.stdin.setEncoding('utf8');
process.stdin.on('data', (chunk) => { raw += chunk; });
process.stdin.on('end', () => {
  Promise.resolve()
    .then(() => codegen(JSON.parse(raw)))
    .then(
      () => process.exit(0),
      (err) => {
        console.error((err && err.stack) || String(err));
        process.exit(1);
      },
    );
});
"""


class TsCodegenAdapter(Adapter):
    """Invoke the TypeScript code generator once, blocking until it finishes.

    Action params:
        payload (dict): ``{"contracts": [...], "outPath": str, "options": {...}}``.
        cwd (str): Directory node resolves the package from.
    """

    def __init__(self, node: str = "node", package: str = "@cosmwasm/ts-codegen"):
        self._node = node
        self._package = package

    @property
    def name(self) -> str:
        return "ts-codegen"

    def is_available(self) -> bool:
        return shutil.which(self._node) is not None

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        payload = context.action.params.get("payload")
        if not isinstance(payload, dict):
            return False, "Missing required param: 'payload'"
        if not isinstance(payload.get("contracts"), list):
            return False, "Payload must contain a 'contracts' list"
        if not payload.get("outPath"):
            return False, "Payload must contain 'outPath'"
        if not Path(context.cwd).is_dir():
            return False, f"Working directory does not exist: {context.cwd}"
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        payload = context.action.params["payload"]
        argv = [self._node, "-e", _DRIVER, self._package]

        logger.debug(
            "Running %s for %d contract(s) into %s",
            self._package,
            len(payload["contracts"]),
            payload["outPath"],
        )
        start = time.monotonic()

        try:
            result = subprocess.run(
                argv,
                cwd=context.cwd,
                input=json.dumps(payload),
                capture_output=True,
                text=True,
                errors="replace",
            )
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Could not start {self._node}: {e}",
                metadata={"package": self._package},
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        metadata = {
            "package": self._package,
            "return_code": result.returncode,
            "contracts": len(payload["contracts"]),
            "out_path": payload["outPath"],
        }

        if result.returncode != 0:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=result.stderr.strip() or f"Generator exited with code {result.returncode}",
                output=result.stdout,
                duration_ms=elapsed_ms,
                metadata=metadata,
            )

        for line in result.stdout.splitlines():
            if line.strip():
                logger.info("[%s] %s", self._package, line.rstrip())

        return Receipt.success(
            adapter=self.name,
            action_id=context.action.id,
            output=result.stdout,
            duration_ms=elapsed_ms,
            metadata=metadata,
        )
