"""
Domain models for asdf-config.

All models are re-exported here for convenient access:

    from asdf_config.core.models import PluginConfig, PluginSpec, Action, Receipt
"""

from asdf_config.core.models.action import Action, Receipt
from asdf_config.core.models.plugin import DEFAULT_SOURCE, PluginConfig, PluginSpec
from asdf_config.core.models.report import (
    InstallReport,
    PluginReport,
    PluginState,
    StepOutcome,
    StepResult,
)

__all__ = [
    "DEFAULT_SOURCE",
    # action.py
    "Action",
    "Receipt",
    # report.py
    "InstallReport",
    "PluginReport",
    "PluginState",
    "StepOutcome",
    "StepResult",
    # plugin.py
    "PluginConfig",
    "PluginSpec",
]
