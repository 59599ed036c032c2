"""
Plugin configuration model — the declared desired state.

Loaded from .asdf-config.yaml, this is what the user wants asdf to
look like: which plugins, at which versions, from where, and what
to run after each install.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# Source keyword that falls through to the hyperpolymath URL template
DEFAULT_SOURCE = "hyperpolymath"


class PluginSpec(BaseModel):
    """A single plugin entry declared in the configuration file.

    ``version`` is a constraint string: an exact version, ``latest``,
    ``stable``, or a range prefixed with ``^ ~ > <``.
    """

    version: str
    source: str = DEFAULT_SOURCE
    optional: bool = False
    post_install: list[str] = Field(default_factory=list)


class PluginConfig(BaseModel):
    """Root configuration — plugin name → spec, in document order."""

    plugins: dict[str, PluginSpec] = Field(default_factory=dict)

    def get_plugin(self, name: str) -> PluginSpec | None:
        """Look up a plugin spec by name."""
        return self.plugins.get(name)

    def select(self, name: str | None = None) -> list[tuple[str, PluginSpec]]:
        """Return the (name, spec) pairs to act on.

        With no name, every configured plugin in order. With a name,
        only that plugin, or nothing if it is not configured.
        """
        if name is None:
            return list(self.plugins.items())
        spec = self.plugins.get(name)
        return [(name, spec)] if spec is not None else []

    def to_document(self) -> dict:
        """Serializable form, omitting fields left at their defaults."""
        return {
            "plugins": {
                name: spec.model_dump(exclude_defaults=True)
                for name, spec in self.plugins.items()
            }
        }
