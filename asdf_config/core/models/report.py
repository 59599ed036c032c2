"""
Install report models — per-plugin, per-step outcomes.

States (per plugin):
    PENDING → REGISTERED → INSTALLED → ACTIVATED → POST_INSTALL_RUN → DONE

    ERRORED is terminal and reachable from the registration or
    install attempt. Dry runs leave every plugin PENDING.

Step outcomes record what happened to each external command,
including the failures that are deliberately not acted upon
(activation and post-install hooks end up as IGNORED).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from asdf_config.core.models.action import Receipt


class PluginState(StrEnum):
    """Reconciliation state of one plugin."""

    PENDING = "pending"
    REGISTERED = "registered"
    INSTALLED = "installed"
    ACTIVATED = "activated"
    POST_INSTALL_RUN = "post_install_run"
    DONE = "done"
    ERRORED = "errored"


class StepOutcome(StrEnum):
    """Outcome of a single external step."""

    OK = "ok"
    ALREADY_PRESENT = "already_present"
    FAILED = "failed"
    IGNORED = "ignored"


@dataclass
class StepResult:
    """One external command issued for a plugin."""

    step: str
    command: str
    outcome: StepOutcome
    receipt: Receipt | None = None

    def to_dict(self) -> dict:
        return {
            "step": self.step,
            "command": self.command,
            "outcome": self.outcome.value,
            "error": self.receipt.error if self.receipt else None,
            "duration_ms": self.receipt.duration_ms if self.receipt else 0,
        }


@dataclass
class PluginReport:
    """Everything the driver did for one plugin."""

    name: str
    source: str
    version: str
    resolved_version: str
    state: PluginState = PluginState.PENDING
    steps: list[StepResult] = field(default_factory=list)
    error: str | None = None

    @property
    def done(self) -> bool:
        return self.state == PluginState.DONE

    @property
    def errored(self) -> bool:
        return self.state == PluginState.ERRORED

    def record(self, step: str, command: str, outcome: StepOutcome, receipt: Receipt | None = None) -> None:
        self.steps.append(StepResult(step=step, command=command, outcome=outcome, receipt=receipt))

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "source": self.source,
            "version": self.version,
            "resolved_version": self.resolved_version,
            "state": self.state.value,
            "error": self.error,
            "steps": [s.to_dict() for s in self.steps],
        }


@dataclass
class InstallReport:
    """Result of a reconciliation run."""

    dry_run: bool = False
    plugins: list[PluginReport] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.plugins)

    @property
    def succeeded(self) -> int:
        return sum(1 for p in self.plugins if p.done)

    @property
    def failed(self) -> int:
        return sum(1 for p in self.plugins if p.errored)

    @property
    def status(self) -> str:
        if self.dry_run:
            return "dry_run"
        if self.failed == 0:
            return "ok"
        if self.succeeded > 0:
            return "partial"
        return "failed"

    def get(self, name: str) -> PluginReport | None:
        """Look up a plugin report by name."""
        for plugin in self.plugins:
            if plugin.name == name:
                return plugin
        return None

    def to_dict(self) -> dict:
        return {
            "dry_run": self.dry_run,
            "status": self.status,
            "total": self.total,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "plugins": [p.to_dict() for p in self.plugins],
        }
