"""
List use case — configured plugins or the built-in catalog.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from asdf_config.core.config.loader import ConfigNotFound, load_config
from asdf_config.core.models.plugin import PluginConfig
from asdf_config.core.services.catalog import catalog_entries


@dataclass
class ConfiguredListing:
    """Configured plugins, or the reason there are none."""

    config: PluginConfig | None = None
    config_path: Path | None = None
    error: str | None = None     # advisory: config missing

    @property
    def total(self) -> int:
        return len(self.config.plugins) if self.config else 0


@dataclass
class CatalogListing:
    """Catalog entries, possibly narrowed to one category."""

    category: str | None = None
    entries: dict[str, list[tuple[str, str]]] = field(default_factory=dict)


def list_configured(config_path: Path | None = None) -> ConfiguredListing:
    """Load the configured plugins.

    A missing file is reported through ``error``; parse errors raise.
    """
    result = ConfiguredListing(config_path=config_path)
    try:
        result.config = load_config(config_path)
    except ConfigNotFound as e:
        result.error = str(e)
    return result


def list_catalog(category: str | None = None) -> CatalogListing:
    """Return the built-in plugin catalog."""
    return CatalogListing(category=category, entries=catalog_entries(category))
