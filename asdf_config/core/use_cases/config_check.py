"""
Config check use case — validate .asdf-config.yaml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from asdf_config.core.config.loader import (
    ConfigError,
    default_config_path,
    find_duplicate_plugins,
    load_config,
)
from asdf_config.core.models.plugin import PluginConfig
from asdf_config.core.services.sources import KNOWN_SOURCES, is_explicit_url
from asdf_config.core.services.versions import LATEST_ALIASES, is_exact, is_range


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: PluginConfig | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "plugin_count": len(self.config.plugins) if self.config else 0,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate plugin configuration and report issues.

    Args:
        config_path: Optional explicit path to the config file.

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    if config_path is None:
        config_path = default_config_path()

    result = ConfigCheckResult(config_path=config_path)

    try:
        config = load_config(config_path)
        result.config = config
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    if not config.plugins:
        result.warnings.append("No plugins defined. There is nothing to install.")

    dupes = find_duplicate_plugins(config_path)
    if dupes:
        result.errors.append(
            f"Duplicate plugin names: {', '.join(dupes)} (only the last entry is used)"
        )

    for name, spec in config.plugins.items():
        version = spec.version.strip()
        if not version:
            result.errors.append(f"Plugin '{name}' has an empty version")
        elif is_range(version):
            result.warnings.append(
                f"Plugin '{name}' uses range '{version}'; ranges are installed as 'latest'"
            )
        elif version not in LATEST_ALIASES and not is_exact(version):
            result.warnings.append(
                f"Plugin '{name}' has an unrecognized version '{version}'; it is passed to asdf as-is"
            )

        source = spec.source
        if source not in KNOWN_SOURCES and not is_explicit_url(source):
            result.warnings.append(
                f"Plugin '{name}' has unknown source '{source}'; "
                "falling back to the hyperpolymath plugin URL"
            )
        elif is_explicit_url(source) and not source.startswith(("https://", "http://")):
            result.warnings.append(f"Plugin '{name}' source does not look like a URL: {source}")

        for cmd in spec.post_install:
            if not cmd.strip():
                result.warnings.append(f"Plugin '{name}' has an empty post_install command")

    result.valid = len(result.errors) == 0
    return result
