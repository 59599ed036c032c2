"""asdf-config — declarative configuration management for asdf plugins."""

__version__ = "0.1.0"
