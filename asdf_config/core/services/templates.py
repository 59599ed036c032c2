"""
Config file generation — starter templates and serialization.

``init`` writes a commented starter file; ``export`` serializes a
PluginConfig built from the live asdf state.
"""

from __future__ import annotations

import tomlkit
import yaml

from asdf_config.core.models.plugin import PluginConfig

FORMATS = ("yaml", "toml")


class UnsupportedFormat(ValueError):
    """Raised for a --format other than yaml or toml."""


_YAML_TEMPLATE = """\
# ── asdf-config ─────────────────────────────────────────────────
# Declarative asdf plugin configuration.
#
# Per plugin:
#   version       exact version, "latest", "stable", or a range (^ ~ > <)
#                 ranges currently install "latest"
#   source        "official", "hyperpolymath", or a git URL
#   optional      informational flag shown by `asdf-config list`
#   post_install  shell commands run after install, failures ignored

plugins:
  trivy:
    version: latest
    source: official

  nickel:
    version: "1.7.0"
    source: hyperpolymath
    post_install:
      - nickel --version

  yq:
    version: stable
    source: official
    optional: true
"""

_TOML_TEMPLATE = """\
# ── asdf-config ─────────────────────────────────────────────────
# Declarative asdf plugin configuration.
#
# Per plugin:
#   version       exact version, "latest", "stable", or a range (^ ~ > <)
#                 ranges currently install "latest"
#   source        "official", "hyperpolymath", or a git URL
#   optional      informational flag shown by `asdf-config list`
#   post_install  shell commands run after install, failures ignored

[plugins.trivy]
version = "latest"
source = "official"

[plugins.nickel]
version = "1.7.0"
source = "hyperpolymath"
post_install = ["nickel --version"]

[plugins.yq]
version = "stable"
source = "official"
optional = true
"""


def _check_format(fmt: str) -> str:
    fmt = fmt.lower()
    if fmt not in FORMATS:
        raise UnsupportedFormat(f"Unsupported format '{fmt}' (expected one of: {', '.join(FORMATS)})")
    return fmt


def starter_config(fmt: str = "yaml") -> str:
    """Return the starter configuration text for ``init``."""
    if _check_format(fmt) == "toml":
        return _TOML_TEMPLATE
    return _YAML_TEMPLATE


def config_filename(fmt: str = "yaml") -> str:
    """Default filename for a config of the given format."""
    return f".asdf-config.{_check_format(fmt)}"


def dump_config(config: PluginConfig, fmt: str = "yaml") -> str:
    """Serialize a PluginConfig to YAML or TOML text."""
    document = config.to_document()

    if _check_format(fmt) == "toml":
        doc = tomlkit.document()
        plugins = tomlkit.table(is_super_table=True)
        for name, fields in document["plugins"].items():
            table = tomlkit.table()
            table.update(fields)
            plugins.add(name, table)
        doc.add("plugins", plugins)
        return tomlkit.dumps(doc)

    return yaml.safe_dump(document, sort_keys=False, default_flow_style=False)
