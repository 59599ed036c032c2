"""Adapters — bindings to the external asdf CLI and the shell.

Public re-exports for convenient access.
"""

from asdf_config.adapters.asdf import AsdfClient, ToolNotFoundError
from asdf_config.adapters.base import Adapter
from asdf_config.adapters.mock import MockAdapter

__all__ = [
    "Adapter",
    "AsdfClient",
    "MockAdapter",
    "ToolNotFoundError",
]
