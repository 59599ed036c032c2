"""
Action and Receipt models — the execution contract.

Actions represent external commands to run. Receipts represent
their results. Adapters take Actions and return Receipts; a
non-zero exit status is a failed Receipt, never an exception.
"""

from __future__ import annotations

import shlex
from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class Action(BaseModel):
    """A single external command to execute.

    ``argv`` is passed to the process directly (no shell). Post-install
    hooks are wrapped by the caller as ``[shell, "-c", command]``.
    """

    id: str                         # e.g. "trivy:install"
    argv: list[str]
    for_plugin: str | None = None
    timeout: int | None = None

    @property
    def display(self) -> str:
        """The command as a user would type it."""
        return shlex.join(self.argv)


class Receipt(BaseModel):
    """Result of running an Action."""

    action_id: str
    status: Literal["ok", "failed"] = "ok"

    started_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    return_code: int | None = None
    output: str = ""
    error: str | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether the command succeeded."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        """Whether the command failed."""
        return self.status == "failed"

    @classmethod
    def success(
        cls,
        action_id: str,
        output: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a success receipt."""
        return cls(action_id=action_id, status="ok", output=output, **kwargs)

    @classmethod
    def failure(
        cls,
        action_id: str,
        error: str,
        **kwargs: Any,
    ) -> Receipt:
        """Create a failure receipt."""
        return cls(action_id=action_id, status="failed", error=error, **kwargs)
