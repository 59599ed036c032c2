"""
Shared test fixtures and configuration.
"""

import textwrap
from pathlib import Path

import pytest

from asdf_config.adapters.mock import MockAdapter


@pytest.fixture
def write_config(tmp_path: Path):
    """Return a helper that writes a config file and returns its path."""

    def _write(content: str, name: str = ".asdf-config.yaml") -> Path:
        path = tmp_path / name
        path.write_text(textwrap.dedent(content))
        return path

    return _write


@pytest.fixture
def three_plugins(write_config) -> Path:
    """A config with plugins a, b, c in that order."""
    return write_config("""\
        plugins:
          a:
            version: "1.0.0"
            source: official
          b:
            version: latest
            post_install:
              - echo b-installed
              - echo b-again
          c:
            version: "^2.1"
            source: https://example.com/asdf-c.git
            optional: true
    """)


@pytest.fixture
def mock_adapter() -> MockAdapter:
    """A mock command adapter that succeeds for every action."""
    return MockAdapter()
