"""
asdf CLI binding — builds asdf commands and dispatches them.

Every external operation the tool performs goes through here:

    asdf plugin add <name> <url>
    asdf install <name> <version>
    asdf global <name> <version>
    sh -c <post-install command>
    asdf plugin list --urls        (export)
    asdf current                   (export)

The binary names come from ``ASDF_CONFIG_ASDF_BIN`` (default ``asdf``)
and ``ASDF_CONFIG_SHELL`` (default ``sh``).
"""

from __future__ import annotations

import logging
import os

from asdf_config.adapters.base import Adapter
from asdf_config.core.models.action import Action, Receipt

logger = logging.getLogger(__name__)

# stderr marker asdf prints when a plugin is registered twice
ALREADY_ADDED = "already added"


class ToolNotFoundError(Exception):
    """Raised when the asdf binary (or the shell) cannot be spawned."""


class AsdfClient:
    """Thin command builder over a command Adapter."""

    def __init__(
        self,
        adapter: Adapter,
        binary: str | None = None,
        shell: str | None = None,
    ):
        self.adapter = adapter
        self.binary = binary or os.environ.get("ASDF_CONFIG_ASDF_BIN", "asdf")
        self.shell = shell or os.environ.get("ASDF_CONFIG_SHELL", "sh")

    def _run(self, action_id: str, argv: list[str], plugin: str | None = None) -> Receipt:
        action = Action(id=action_id, argv=argv, for_plugin=plugin)
        receipt = self.adapter.execute(action)
        logger.debug("%s → %s", action.display, receipt.status)
        return receipt

    # ── Reconciliation steps ────────────────────────────────────

    def plugin_add(self, name: str, url: str) -> Receipt:
        return self._run(f"{name}:plugin-add", [self.binary, "plugin", "add", name, url], name)

    def install(self, name: str, version: str) -> Receipt:
        return self._run(f"{name}:install", [self.binary, "install", name, version], name)

    def set_global(self, name: str, version: str) -> Receipt:
        return self._run(f"{name}:global", [self.binary, "global", name, version], name)

    def run_hook(self, name: str, index: int, command: str) -> Receipt:
        return self._run(f"{name}:post-install:{index}", [self.shell, "-c", command], name)

    # ── Queries (export) ────────────────────────────────────────

    def plugin_urls(self) -> Receipt:
        return self._run("plugin-list", [self.binary, "plugin", "list", "--urls"])

    def current(self) -> Receipt:
        return self._run("current", [self.binary, "current"])


def is_already_added(receipt: Receipt) -> bool:
    """Whether a failed ``plugin add`` only means it was registered before."""
    return ALREADY_ADDED in (receipt.error or "")


def require_spawned(receipt: Receipt, binary: str) -> Receipt:
    """Raise ToolNotFoundError if the receipt records a spawn failure."""
    if receipt.metadata.get("spawn_failed"):
        raise ToolNotFoundError(f"Failed to run {binary}: {receipt.error}")
    return receipt
