"""
Tests for CLI commands — install, list, validate, init, export, and the
placeholder commands.
"""

import json
import textwrap
from pathlib import Path

from click.testing import CliRunner

from asdf_config.adapters.mock import MockAdapter
from asdf_config.core.models.action import Receipt
from asdf_config.main import cli

TRIVY_CONFIG = textwrap.dedent("""\
    plugins:
      trivy:
        version: "1.2.3"
        source: official
        post_install: []
""")


def _make_config(tmp_path: Path, content: str = TRIVY_CONFIG, name: str = ".asdf-config.yaml") -> Path:
    config = tmp_path / name
    config.write_text(content)
    return config


class TestInstallCommand:
    def test_dry_run_trivy(self, tmp_path: Path):
        config = _make_config(tmp_path)
        mock = MockAdapter()
        result = CliRunner().invoke(
            cli, ["--config", str(config), "install", "--dry-run"], obj={"adapter": mock}
        )
        assert result.exit_code == 0
        assert "trivy" in result.output
        assert "1.2.3" in result.output
        assert "https://github.com/asdf-vm/asdf-trivy.git" in result.output
        assert "(dry run)" in result.output
        assert mock.call_count == 0

    def test_dry_run_one_line_per_plugin(self, three_plugins: Path):
        mock = MockAdapter()
        result = CliRunner().invoke(
            cli, ["--config", str(three_plugins), "install", "-d"], obj={"adapter": mock}
        )
        assert result.exit_code == 0
        lines = [line for line in result.output.splitlines() if "Would install" in line]
        assert len(lines) == 3
        assert mock.call_count == 0

    def test_live_install(self, tmp_path: Path):
        config = _make_config(tmp_path)
        mock = MockAdapter()
        result = CliRunner().invoke(cli, ["--config", str(config), "install"], obj={"adapter": mock})
        assert result.exit_code == 0
        assert "Adding plugin trivy" in result.output
        assert "Installed trivy @ 1.2.3" in result.output
        assert "Installation complete" in result.output
        assert mock.executed_ids == ["trivy:plugin-add", "trivy:install", "trivy:global"]

    def test_partial_failure_exits_zero(self, three_plugins: Path):
        mock = MockAdapter()
        mock.set_failure("a:plugin-add", "fatal: could not read from remote")
        result = CliRunner().invoke(
            cli, ["--config", str(three_plugins), "install"], obj={"adapter": mock}
        )
        assert result.exit_code == 0
        assert "Failed to add a" in result.output
        assert "Installed b" in result.output
        assert "2/3 succeeded" in result.output

    def test_failure_printed_once(self, three_plugins: Path):
        mock = MockAdapter()
        mock.set_failure("a:plugin-add", "fatal: could not read from remote")
        result = CliRunner().invoke(
            cli, ["--config", str(three_plugins), "install"], obj={"adapter": mock}
        )
        assert result.exit_code == 0
        assert result.output.count("Failed to add a") == 1

    def test_verbose_hides_ignored_failures(self, three_plugins: Path):
        mock = MockAdapter()
        mock.set_failure("b:global", "no such command")
        mock.set_failure("b:post-install:0", "hook failed")
        result = CliRunner().invoke(
            cli, ["--config", str(three_plugins), "--verbose", "install"], obj={"adapter": mock}
        )
        assert result.exit_code == 0
        assert "ignored failure" not in result.output
        assert "✓ Installed b @ latest" in result.output

    def test_plugin_filter(self, three_plugins: Path):
        mock = MockAdapter()
        result = CliRunner().invoke(
            cli, ["--config", str(three_plugins), "install", "--plugin", "b"], obj={"adapter": mock}
        )
        assert result.exit_code == 0
        assert "Installing 1 plugin(s)" in result.output
        assert {a.for_plugin for a in mock.call_log} == {"b"}

    def test_unknown_plugin_nothing_to_do(self, three_plugins: Path):
        mock = MockAdapter()
        result = CliRunner().invoke(
            cli, ["--config", str(three_plugins), "install", "-p", "nope"], obj={"adapter": mock}
        )
        assert result.exit_code == 0
        assert "No plugins to install" in result.output
        assert mock.call_count == 0

    def test_missing_config(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = CliRunner().invoke(cli, ["install"])
        assert result.exit_code == 0
        assert "not found" in result.output

    def test_parse_error_fails(self, tmp_path: Path):
        config = _make_config(tmp_path, "plugins: [oops\n")
        result = CliRunner().invoke(cli, ["--config", str(config), "install", "--dry-run"])
        assert result.exit_code == 1
        assert "Invalid YAML" in result.output

    def test_missing_asdf_fails(self, tmp_path: Path):
        config = _make_config(tmp_path)
        mock = MockAdapter()
        mock.set_missing_binary("trivy:plugin-add")
        result = CliRunner().invoke(cli, ["--config", str(config), "install"], obj={"adapter": mock})
        assert result.exit_code == 1
        assert "Failed to run asdf" in result.output

    def test_json_report(self, three_plugins: Path):
        mock = MockAdapter()
        mock.set_failure("b:post-install:0", "hook failed")
        result = CliRunner().invoke(
            cli, ["--config", str(three_plugins), "install", "--json"], obj={"adapter": mock}
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["report"]["status"] == "ok"
        b = data["report"]["plugins"][1]
        assert b["steps"][3]["outcome"] == "ignored"


class TestListCommand:
    def test_configured(self, three_plugins: Path):
        result = CliRunner().invoke(cli, ["--config", str(three_plugins), "list"])
        assert result.exit_code == 0
        assert "a @ 1.0.0" in result.output
        assert "c @ ^2.1 (optional)" in result.output
        assert "Total: 3 plugins" in result.output
        assert "echo b-installed" not in result.output

    def test_configured_verbose_shows_hooks(self, three_plugins: Path):
        result = CliRunner().invoke(cli, ["--config", str(three_plugins), "--verbose", "list"])
        assert result.exit_code == 0
        assert "echo b-installed" in result.output

    def test_missing_config_is_advisory(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = CliRunner().invoke(cli, ["list"])
        assert result.exit_code == 0
        assert "No configuration file found" in result.output
        assert "asdf-config init" in result.output

    def test_parse_error_propagates(self, tmp_path: Path):
        config = _make_config(tmp_path, "plugins:\n  x:\n    optional: true\n")
        result = CliRunner().invoke(cli, ["--config", str(config), "list"])
        assert result.exit_code == 1

    def test_catalog(self):
        result = CliRunner().invoke(cli, ["list", "--all"])
        assert result.exit_code == 0
        for category in ("security", "database", "config", "network", "crypto"):
            assert category in result.output
        assert "trivy" in result.output
        assert "--category" in result.output

    def test_catalog_category_filter(self):
        result = CliRunner().invoke(cli, ["list", "--all", "--category", "crypto"])
        assert result.exit_code == 0
        assert "step-ca" in result.output
        assert "trivy" not in result.output
        assert "Use --category" not in result.output

    def test_catalog_ignores_missing_config(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = CliRunner().invoke(cli, ["list", "-a"])
        assert result.exit_code == 0
        assert "No configuration file found" not in result.output


class TestValidateCommand:
    def test_valid(self, three_plugins: Path):
        result = CliRunner().invoke(cli, ["--config", str(three_plugins), "validate"])
        assert result.exit_code == 0
        assert "valid" in result.output.lower()
        # range constraint on "c" produces a warning
        assert "Warnings" in result.output

    def test_valid_json(self, three_plugins: Path):
        result = CliRunner().invoke(cli, ["--config", str(three_plugins), "validate", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["valid"] is True
        assert data["plugin_count"] == 3

    def test_missing_config_fails(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = CliRunner().invoke(cli, ["validate"])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_duplicate_plugins_fail(self, tmp_path: Path):
        config = _make_config(
            tmp_path,
            "plugins:\n  yq:\n    version: latest\n  yq:\n    version: '4.0'\n",
        )
        result = CliRunner().invoke(cli, ["--config", str(config), "validate"])
        assert result.exit_code == 1
        assert "Duplicate plugin names: yq" in result.output


class TestInitCommand:
    def test_creates_yaml(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = CliRunner().invoke(cli, ["init"])
        assert result.exit_code == 0
        path = tmp_path / ".asdf-config.yaml"
        assert path.is_file()

        listed = CliRunner().invoke(cli, ["list"])
        assert "trivy" in listed.output

    def test_creates_toml(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = CliRunner().invoke(cli, ["init", "--format", "toml"])
        assert result.exit_code == 0
        assert (tmp_path / ".asdf-config.toml").is_file()

    def test_respects_config_path(self, tmp_path: Path):
        target = tmp_path / "team.yaml"
        result = CliRunner().invoke(cli, ["--config", str(target), "init"])
        assert result.exit_code == 0
        assert target.is_file()

    def test_refuses_overwrite(self, tmp_path: Path):
        config = _make_config(tmp_path)
        result = CliRunner().invoke(cli, ["--config", str(config), "init"])
        assert result.exit_code == 1
        assert config.read_text() == TRIVY_CONFIG

    def test_force_overwrites(self, tmp_path: Path):
        config = _make_config(tmp_path)
        result = CliRunner().invoke(cli, ["--config", str(config), "init", "--force"])
        assert result.exit_code == 0
        assert config.read_text() != TRIVY_CONFIG


class TestExportCommand:
    def _mock(self) -> MockAdapter:
        mock = MockAdapter()
        mock.set_response(
            "plugin-list",
            Receipt.success(
                action_id="plugin-list",
                output="trivy  https://github.com/asdf-vm/asdf-trivy.git\n"
                "cue    https://example.com/asdf-cue.git",
            ),
        )
        mock.set_response(
            "current",
            Receipt.success(action_id="current", output="trivy  0.50.1  /home/u/.tool-versions"),
        )
        return mock

    def test_export_to_stdout(self):
        result = CliRunner().invoke(cli, ["export"], obj={"adapter": self._mock()})
        assert result.exit_code == 0
        assert "trivy:" in result.output
        assert "0.50.1" in result.output
        assert "https://example.com/asdf-cue.git" in result.output

    def test_export_to_file_round_trips(self, tmp_path: Path):
        out = tmp_path / "exported.yaml"
        result = CliRunner().invoke(
            cli, ["export", "--output", str(out)], obj={"adapter": self._mock()}
        )
        assert result.exit_code == 0
        assert "Exported 2 plugin(s)" in result.output

        listed = CliRunner().invoke(cli, ["--config", str(out), "list"])
        assert "trivy @ 0.50.1" in listed.output
        assert "cue @ latest" in listed.output

    def test_export_toml(self, tmp_path: Path):
        out = tmp_path / "exported.toml"
        result = CliRunner().invoke(
            cli, ["export", "-f", "toml", "-o", str(out)], obj={"adapter": self._mock()}
        )
        assert result.exit_code == 0
        assert "[plugins.trivy]" in out.read_text()

    def test_export_plugin_list_failure(self):
        mock = MockAdapter()
        mock.set_failure("plugin-list", "No plugins installed")
        result = CliRunner().invoke(cli, ["export"], obj={"adapter": mock})
        assert result.exit_code == 1


class TestPlaceholderCommands:
    def test_sync_requires_direction(self):
        result = CliRunner().invoke(cli, ["sync"])
        assert result.exit_code == 0
        assert "Specify --pull or --push" in result.output

    def test_sync_pull_and_push(self):
        result = CliRunner().invoke(cli, ["sync", "--pull", "-P"])
        assert result.exit_code == 0
        assert "Sync pull not yet implemented" in result.output
        assert "Sync push not yet implemented" in result.output

    def test_search(self):
        result = CliRunner().invoke(cli, ["search", "trivy"])
        assert result.exit_code == 0
        assert "Searching for 'trivy'" in result.output
        assert "asdf-metaiconic-plugin" in result.output
