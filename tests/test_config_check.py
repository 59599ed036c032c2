"""
Tests for configuration validation.
"""

from pathlib import Path

from asdf_config.core.use_cases.config_check import check_config


class TestCheckConfig:
    def test_valid_config(self, write_config):
        path = write_config("""\
            plugins:
              trivy:
                version: "0.50.1"
                source: official
              yq:
                version: stable
        """)
        result = check_config(path)
        assert result.valid
        assert result.errors == []
        assert result.warnings == []

    def test_missing_file(self, tmp_path: Path):
        result = check_config(tmp_path / "missing.yaml")
        assert not result.valid
        assert "not found" in result.errors[0]

    def test_parse_error(self, write_config):
        result = check_config(write_config("plugins:\n  x: {source: official}\n"))
        assert not result.valid
        assert result.config is None

    def test_empty_plugins_warns(self, write_config):
        result = check_config(write_config("plugins: {}\n"))
        assert result.valid
        assert any("No plugins" in w for w in result.warnings)

    def test_empty_version_is_error(self, write_config):
        result = check_config(write_config("plugins:\n  x:\n    version: ''\n"))
        assert not result.valid
        assert "empty version" in result.errors[0]

    def test_range_warns(self, write_config):
        result = check_config(write_config("plugins:\n  x:\n    version: '~1.2'\n"))
        assert result.valid
        assert any("installed as 'latest'" in w for w in result.warnings)

    def test_unrecognized_version_warns(self, write_config):
        result = check_config(write_config("plugins:\n  x:\n    version: ref:main\n"))
        assert result.valid
        assert any("unrecognized version" in w for w in result.warnings)

    def test_unknown_source_warns(self, write_config):
        result = check_config(write_config("plugins:\n  x:\n    version: latest\n    source: gitlab\n"))
        assert result.valid
        assert any("unknown source 'gitlab'" in w for w in result.warnings)

    def test_duplicates_are_errors(self, write_config):
        path = write_config("plugins:\n  x:\n    version: latest\n  x:\n    version: '1.0'\n")
        result = check_config(path)
        assert not result.valid
        assert "x" in result.errors[0]

    def test_to_dict(self, three_plugins: Path):
        data = check_config(three_plugins).to_dict()
        assert data["valid"] is True
        assert data["plugin_count"] == 3
        assert data["config_path"] == str(three_plugins)
