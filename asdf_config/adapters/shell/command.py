"""
Shell command adapter — run external commands and capture output.

The single place where ``subprocess.run`` is called. Commands run
to completion, one at a time, with no timeout unless the Action
carries one. Output is decoded as UTF-8 with undecodable bytes
replaced, so a tool printing arbitrary bytes still yields a Receipt.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time

from asdf_config.adapters.base import Adapter
from asdf_config.core.models.action import Action, Receipt

logger = logging.getLogger(__name__)


class ShellCommandAdapter(Adapter):
    """Execute commands as subprocesses and capture their output."""

    @property
    def name(self) -> str:
        return "shell"

    def is_available(self, binary: str) -> bool:
        return shutil.which(binary) is not None

    def execute(self, action: Action) -> Receipt:
        logger.debug("Executing: %s", action.display)
        start = time.monotonic()

        try:
            result = subprocess.run(
                action.argv,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=action.timeout,
            )
        except subprocess.TimeoutExpired:
            return Receipt.failure(
                action_id=action.id,
                error=f"Command timed out after {action.timeout}s",
                metadata={"command": action.display, "timeout": action.timeout},
            )
        except OSError as e:
            # missing binary, no permission, exec format error, ...
            return Receipt.failure(
                action_id=action.id,
                error=f"Cannot run {action.argv[0]}: {e.strerror or e}",
                metadata={"command": action.display, "spawn_failed": True},
            )
        except Exception as e:
            return Receipt.failure(
                action_id=action.id,
                error=f"Command execution error: {e}",
                metadata={"command": action.display},
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        output = result.stdout.strip()
        stderr = result.stderr.strip()

        if result.returncode == 0:
            return Receipt.success(
                action_id=action.id,
                output=output,
                return_code=result.returncode,
                duration_ms=elapsed_ms,
                metadata={"command": action.display, "stderr": stderr},
            )

        logger.debug("Command failed (exit %d): %s", result.returncode, stderr)
        return Receipt.failure(
            action_id=action.id,
            error=stderr or f"Command exited with code {result.returncode}",
            output=output,
            return_code=result.returncode,
            duration_ms=elapsed_ms,
            metadata={"command": action.display},
        )
