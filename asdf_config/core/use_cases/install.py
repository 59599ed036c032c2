"""
Install use case — reconcile asdf with the declared plugin set.

For each selected plugin, strictly one at a time and in config order:

    1. asdf plugin add   failure → ERRORED, next plugin
                         ("already added" counts as success)
    2. asdf install      failure → ERRORED, next plugin
    3. asdf global       failure ignored
    4. post_install      each command via sh -c, failures ignored
    5. DONE

Failures of one plugin never abort the batch. Only a config parse
error or a binary that cannot be spawned during steps 1–2 is fatal.
Dry runs resolve sources and versions and touch nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from asdf_config.adapters.asdf import AsdfClient, is_already_added, require_spawned
from asdf_config.adapters.base import Adapter
from asdf_config.core.config.loader import ConfigNotFound, load_config
from asdf_config.core.models.plugin import PluginConfig, PluginSpec
from asdf_config.core.models.report import (
    InstallReport,
    PluginReport,
    PluginState,
    StepOutcome,
)
from asdf_config.core.services.sources import resolve_source
from asdf_config.core.services.versions import resolve_version

logger = logging.getLogger(__name__)


@dataclass
class InstallResult:
    """Result of running the install command."""

    report: InstallReport = field(default_factory=InstallReport)
    config_path: Path | None = None
    selected: list[str] = field(default_factory=list)
    error: str | None = None     # advisory: config missing

    @property
    def nothing_to_do(self) -> bool:
        return self.error is None and not self.selected

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "config_path": str(self.config_path) if self.config_path else None,
            "selected": self.selected,
            "nothing_to_do": self.nothing_to_do,
            "report": self.report.to_dict(),
        }


def plan_plugin(name: str, spec: PluginSpec) -> PluginReport:
    """Resolve source and version for one plugin, without side effects."""
    return PluginReport(
        name=name,
        source=resolve_source(name, spec.source),
        version=spec.version,
        resolved_version=resolve_version(spec.version),
    )


def reconcile_plugin(client: AsdfClient, name: str, spec: PluginSpec) -> PluginReport:
    """Drive a single plugin through add → install → global → hooks.

    Raises:
        ToolNotFoundError: If asdf itself cannot be spawned.
    """
    plugin = plan_plugin(name, spec)
    version = plugin.resolved_version

    # ── 1. Register ─────────────────────────────────────────────
    logger.info("Adding plugin %s from %s", name, plugin.source)
    receipt = require_spawned(client.plugin_add(name, plugin.source), client.binary)
    command = f"plugin add {name} {plugin.source}"
    if receipt.ok:
        plugin.record("plugin_add", command, StepOutcome.OK, receipt)
    elif is_already_added(receipt):
        plugin.record("plugin_add", command, StepOutcome.ALREADY_PRESENT, receipt)
    else:
        plugin.record("plugin_add", command, StepOutcome.FAILED, receipt)
        plugin.state = PluginState.ERRORED
        plugin.error = f"Failed to add {name}: {receipt.error}"
        logger.info("%s", plugin.error)
        return plugin
    plugin.state = PluginState.REGISTERED

    # ── 2. Install ──────────────────────────────────────────────
    logger.info("Installing %s @ %s", name, version)
    receipt = require_spawned(client.install(name, version), client.binary)
    command = f"install {name} {version}"
    if not receipt.ok:
        plugin.record("install", command, StepOutcome.FAILED, receipt)
        plugin.state = PluginState.ERRORED
        plugin.error = f"Failed to install {name}: {receipt.error}"
        logger.info("%s", plugin.error)
        return plugin
    plugin.record("install", command, StepOutcome.OK, receipt)
    plugin.state = PluginState.INSTALLED

    # ── 3. Activate (best effort) ───────────────────────────────
    receipt = client.set_global(name, version)
    outcome = StepOutcome.OK if receipt.ok else StepOutcome.IGNORED
    if not receipt.ok:
        logger.info("Ignoring failed 'global %s %s': %s", name, version, receipt.error)
    plugin.record("global", f"global {name} {version}", outcome, receipt)
    plugin.state = PluginState.ACTIVATED

    # ── 4. Post-install hooks (best effort) ─────────────────────
    for index, hook in enumerate(spec.post_install):
        logger.info("Running post-install for %s: %s", name, hook)
        receipt = client.run_hook(name, index, hook)
        outcome = StepOutcome.OK if receipt.ok else StepOutcome.IGNORED
        if not receipt.ok:
            logger.info("Ignoring failed post-install command %r: %s", hook, receipt.error)
        plugin.record("post_install", hook, outcome, receipt)
    plugin.state = PluginState.POST_INSTALL_RUN

    plugin.state = PluginState.DONE
    return plugin


def reconcile(
    config: PluginConfig,
    client: AsdfClient | None,
    plugin: str | None = None,
    dry_run: bool = False,
) -> InstallReport:
    """Reconcile the selected plugins of a loaded configuration.

    ``client`` may be None for dry runs.
    """
    report = InstallReport(dry_run=dry_run)

    for name, spec in config.select(plugin):
        if dry_run:
            report.plugins.append(plan_plugin(name, spec))
            continue

        assert client is not None
        result = reconcile_plugin(client, name, spec)
        report.plugins.append(result)

        marker = "✓" if result.done else "✗"
        logger.info("%s %s → %s", marker, name, result.state)

    return report


def run_install(
    config_path: Path | None = None,
    plugin: str | None = None,
    dry_run: bool = False,
    adapter: Adapter | None = None,
) -> InstallResult:
    """Load the configuration and reconcile asdf against it.

    Args:
        config_path: Path to the config file (default: .asdf-config.yaml).
        plugin: Only install this plugin. Unknown names select nothing.
        dry_run: Resolve and report, but run nothing.
        adapter: Command adapter. Defaults to the real subprocess adapter.

    Returns:
        InstallResult. ``error`` is set only when the config is missing.

    Raises:
        ConfigParseError: If the config cannot be decoded.
        ToolNotFoundError: If asdf cannot be spawned.
    """
    result = InstallResult(config_path=config_path)

    try:
        config = load_config(config_path)
    except ConfigNotFound as e:
        result.error = str(e)
        return result

    result.selected = [name for name, _ in config.select(plugin)]
    if not result.selected:
        logger.info("No plugins selected (filter: %s)", plugin)
        result.report = InstallReport(dry_run=dry_run)
        return result

    client = None
    if not dry_run:
        if adapter is None:
            from asdf_config.adapters.shell.command import ShellCommandAdapter

            adapter = ShellCommandAdapter()
        client = AsdfClient(adapter)

    result.report = reconcile(config, client, plugin=plugin, dry_run=dry_run)
    return result
