"""
Export use case — build a configuration from the live asdf setup.

Reads ``asdf plugin list --urls`` and ``asdf current`` and turns them
into a PluginConfig that ``install`` would reproduce.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from asdf_config.adapters.asdf import AsdfClient, require_spawned
from asdf_config.adapters.base import Adapter
from asdf_config.core.models.plugin import PluginConfig, PluginSpec
from asdf_config.core.services.sources import source_for_url
from asdf_config.core.services.templates import dump_config
from asdf_config.core.services.versions import LATEST

logger = logging.getLogger(__name__)

# Placeholders asdf prints instead of a version
_NO_VERSION = ("______", "none", "system")
_NOT_SET = "No version is set"


@dataclass
class ExportResult:
    """Result of exporting the asdf setup."""

    config: PluginConfig | None = None
    text: str = ""
    output: Path | None = None
    error: str | None = None


def parse_plugin_urls(output: str) -> dict[str, str]:
    """Parse ``asdf plugin list --urls`` into name → URL."""
    plugins: dict[str, str] = {}
    for line in output.splitlines():
        parts = line.split()
        if not parts or parts[0].startswith("*"):
            continue
        plugins[parts[0]] = parts[1] if len(parts) > 1 else ""
    return plugins


def parse_current(output: str) -> dict[str, str]:
    """Parse ``asdf current`` into name → version.

    Handles both the older ``name version source`` layout and the
    newer table with a ``Name Version Source Installed`` header.
    """
    versions: dict[str, str] = {}
    for line in output.splitlines():
        parts = line.split()
        if len(parts) < 2 or parts[0] == "Name":
            continue
        name, version = parts[0], parts[1]
        if version.lower() in _NO_VERSION or " ".join(parts[1:]).startswith(_NOT_SET):
            continue
        versions[name] = version
    return versions


def build_config(urls: dict[str, str], versions: dict[str, str]) -> PluginConfig:
    """Combine plugin URLs and current versions into a PluginConfig."""
    plugins: dict[str, PluginSpec] = {}
    for name, url in urls.items():
        plugins[name] = PluginSpec(
            version=versions.get(name, LATEST),
            source=source_for_url(name, url) if url else "official",
        )
    return PluginConfig(plugins=plugins)


def run_export(
    fmt: str = "yaml",
    output: Path | None = None,
    adapter: Adapter | None = None,
) -> ExportResult:
    """Export the current asdf setup as a configuration document.

    Raises:
        ToolNotFoundError: If asdf cannot be spawned.
        UnsupportedFormat: If ``fmt`` is not yaml or toml.
    """
    if adapter is None:
        from asdf_config.adapters.shell.command import ShellCommandAdapter

        adapter = ShellCommandAdapter()
    client = AsdfClient(adapter)
    result = ExportResult(output=output)

    receipt = require_spawned(client.plugin_urls(), client.binary)
    if not receipt.ok:
        result.error = f"asdf plugin list failed: {receipt.error}"
        return result
    urls = parse_plugin_urls(receipt.output)

    # A failing `asdf current` (e.g. no .tool-versions) only loses versions
    receipt = client.current()
    versions = parse_current(receipt.output) if receipt.output else {}
    if not receipt.ok:
        logger.info("asdf current failed, exporting without versions: %s", receipt.error)

    result.config = build_config(urls, versions)
    result.text = dump_config(result.config, fmt)

    if output is not None:
        output.write_text(result.text, encoding="utf-8")
        logger.info("Wrote %d plugin(s) to %s", len(result.config.plugins), output)

    return result
