"""
Configuration loader — reads .asdf-config.yaml into domain models.

This is the primary entry point for loading plugin configuration.
It reads YAML (or TOML, by file suffix), validates against the
Pydantic schema, and returns a typed PluginConfig.

No semantic checks happen here; see ``use_cases.config_check``.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from asdf_config.core.models.plugin import PluginConfig

logger = logging.getLogger(__name__)

# Default config filename, relative to the working directory
DEFAULT_CONFIG_FILE = ".asdf-config.yaml"


class ConfigError(Exception):
    """Raised when plugin configuration is invalid or missing."""


class ConfigNotFound(ConfigError):
    """The configuration file does not exist."""


class ConfigParseError(ConfigError):
    """The configuration file exists but cannot be decoded."""


def default_config_path() -> Path:
    """Path of the configuration file when --config is not given."""
    return Path(DEFAULT_CONFIG_FILE)


def is_toml(path: Path) -> bool:
    return path.suffix.lower() == ".toml"


def read_document(path: Path) -> dict[str, Any]:
    """Read and decode the raw configuration document.

    Raises:
        ConfigNotFound: If the file does not exist.
        ConfigParseError: If it is not valid YAML/TOML or not a mapping.
    """
    if not path.is_file():
        raise ConfigNotFound(f"Configuration file not found: {path}")

    logger.debug("Loading plugin config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigParseError(f"Cannot read {path}: {e}") from e

    if is_toml(path):
        try:
            data = tomllib.loads(raw)
        except tomllib.TOMLDecodeError as e:
            raise ConfigParseError(f"Invalid TOML in {path}: {e}") from e
    else:
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ConfigParseError(f"Invalid YAML in {path}: {e}") from e

    # An empty file is an empty configuration
    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigParseError(f"Expected a mapping in {path}, got {type(data).__name__}")

    return data


def load_config(path: Path | None = None) -> PluginConfig:
    """Load and validate plugin configuration.

    Args:
        path: Explicit path to the config file. Defaults to
            ``.asdf-config.yaml`` in the working directory.

    Returns:
        Validated PluginConfig, plugins in document order.

    Raises:
        ConfigNotFound: If the file is missing.
        ConfigParseError: If the file cannot be decoded into the model.
    """
    if path is None:
        path = default_config_path()

    data = read_document(path)

    # "plugins: " with nothing under it decodes to None
    if data.get("plugins") is None:
        data = {**data, "plugins": {}}

    try:
        config = PluginConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigParseError(f"Invalid plugin configuration in {path}: {e}") from e

    logger.info("Loaded %d plugin(s) from %s", len(config.plugins), path)
    return config


def find_duplicate_plugins(path: Path) -> list[str]:
    """Return plugin names declared more than once in a YAML file.

    ``yaml.safe_load`` keeps only the last occurrence of a repeated
    key, so duplicates are found by walking the node graph instead.
    TOML rejects duplicate keys at parse time, so TOML files always
    return an empty list.
    """
    if is_toml(path) or not path.is_file():
        return []

    try:
        root = yaml.compose(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError):
        return []

    if not isinstance(root, yaml.MappingNode):
        return []

    for key_node, value_node in root.value:
        if key_node.value != "plugins" or not isinstance(value_node, yaml.MappingNode):
            continue
        names = [k.value for k, _ in value_node.value]
        return sorted({n for n in names if names.count(n) > 1})

    return []
