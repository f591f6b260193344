"""Tests for the archmap command line interface."""

import json
import logging

import pytest
from typer.testing import CliRunner

from archmap import __version__
from archmap.cli import app
from archmap.cli._common import ExitCode
from archmap.core import CodebaseAnalyzer

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated(isolated_config):
    return isolated_config


class TestTopLevel:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_help_lists_commands(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "analyze" in result.stdout
        assert "health" in result.stdout


class TestAnalyzeCommand:
    def test_json_output(self, sample_project):
        result = runner.invoke(app, ["analyze", str(sample_project), "--format", "json"])
        assert result.exit_code == ExitCode.SUCCESS
        data = json.loads(result.stdout)
        assert [lvl["level"] for lvl in data["levels"]] == [-1, 0, 1, 2]
        assert data["stats"]["totalFiles"] == 8
        assert "structure" not in data

    def test_json_with_structure(self, sample_project):
        result = runner.invoke(
            app, ["analyze", str(sample_project), "-f", "json", "--structure"]
        )
        assert result.exit_code == ExitCode.SUCCESS
        assert json.loads(result.stdout)["structure"]["totalFiles"] == 8

    def test_output_file(self, sample_project, tmp_path):
        target = tmp_path / "architecture.json"
        result = runner.invoke(app, ["analyze", str(sample_project), "-o", str(target)])
        assert result.exit_code == ExitCode.SUCCESS
        data = json.loads(target.read_text(encoding="utf-8"))
        assert data["healthSummary"]["score"] == 100

    def test_rich_output(self, sample_project):
        result = runner.invoke(app, ["analyze", str(sample_project)])
        assert result.exit_code == ExitCode.SUCCESS
        assert "Master Architecture" in result.stdout

    def test_exclude_option(self, sample_project):
        result = runner.invoke(
            app,
            ["analyze", str(sample_project), "-f", "json", "-e", "src", "-e", "node_modules", "-e", ".git"],
        )
        assert result.exit_code == ExitCode.SUCCESS
        assert json.loads(result.stdout)["stats"]["totalFiles"] == 4

    def test_max_depth_option(self, sample_project):
        result = runner.invoke(
            app, ["analyze", str(sample_project), "-f", "json", "--max-depth", "0"]
        )
        assert result.exit_code == ExitCode.SUCCESS
        assert json.loads(result.stdout)["stats"]["totalFiles"] == 3

    def test_missing_path(self, tmp_path):
        result = runner.invoke(app, ["analyze", str(tmp_path / "missing")])
        assert result.exit_code == ExitCode.CONFIG_ERROR

    def test_unknown_format(self, sample_project):
        result = runner.invoke(app, ["analyze", str(sample_project), "-f", "xml"])
        assert result.exit_code == ExitCode.CONFIG_ERROR

    def test_invalid_config_file(self, sample_project, tmp_path):
        bad = tmp_path / "bad.toml"
        bad.write_text("max_depth = -5\n")
        result = runner.invoke(app, ["analyze", str(sample_project), "-c", str(bad)])
        assert result.exit_code == ExitCode.CONFIG_ERROR


class TestHealthCommand:
    def test_json(self, sample_project):
        result = runner.invoke(app, ["health", str(sample_project), "--json"])
        assert result.exit_code == ExitCode.SUCCESS
        data = json.loads(result.stdout)
        assert data["health"]["overall"] == "Excellent"
        assert data["criticalComponents"][0]["name"] == "App Router (1 files)"

    def test_top_limits_components(self, sample_project):
        result = runner.invoke(app, ["health", str(sample_project), "--json", "--top", "1"])
        assert len(json.loads(result.stdout)["criticalComponents"]) == 1

    def test_table_output(self, sample_project):
        result = runner.invoke(app, ["health", str(sample_project)])
        assert result.exit_code == ExitCode.SUCCESS
        assert "CODEBASE HEALTH" in result.stdout
        assert "import cycles" in result.stdout

    def test_missing_path(self, tmp_path):
        result = runner.invoke(app, ["health", str(tmp_path / "missing")])
        assert result.exit_code == ExitCode.CONFIG_ERROR

    def test_exclude_option(self, sample_project):
        result = runner.invoke(
            app, ["health", str(sample_project), "--json", "-e", "src", "-e", ".git"]
        )
        assert result.exit_code == ExitCode.SUCCESS
        names = [c["name"] for c in json.loads(result.stdout)["criticalComponents"]]
        assert not any(name.startswith("App Router") for name in names)

    def test_invalid_config_file(self, sample_project, tmp_path):
        bad = tmp_path / "bad.toml"
        bad.write_text("workers = 0\n")
        result = runner.invoke(app, ["health", str(sample_project), "-c", str(bad)])
        assert result.exit_code == ExitCode.CONFIG_ERROR

    def test_unexpected_error(self, sample_project, monkeypatch):
        def boom(self, cancel_event=None):
            raise RuntimeError("boom")

        monkeypatch.setattr(CodebaseAnalyzer, "analyze_codebase", boom)
        result = runner.invoke(app, ["health", str(sample_project)])
        assert result.exit_code == ExitCode.INTERNAL_ERROR


class TestLogging:
    def test_verbosity_from_project_config(self, sample_project, isolated_config):
        (isolated_config / "archmap.toml").write_text('verbosity = "verbose"\n')
        result = runner.invoke(app, ["analyze", str(sample_project), "-f", "json"])
        assert result.exit_code == ExitCode.SUCCESS
        assert logging.getLogger("archmap").level == logging.DEBUG

    def test_quiet_flag_overrides_config(self, sample_project, isolated_config):
        (isolated_config / "archmap.toml").write_text('verbosity = "verbose"\n')
        result = runner.invoke(app, ["analyze", str(sample_project), "-f", "json", "-q"])
        assert result.exit_code == ExitCode.SUCCESS
        assert logging.getLogger("archmap").level == logging.ERROR

    def test_verbosity_from_environment(self, sample_project, monkeypatch):
        monkeypatch.setenv("ARCHMAP_VERBOSITY", "quiet")
        result = runner.invoke(app, ["health", str(sample_project), "-v"])
        assert result.exit_code == ExitCode.SUCCESS
        # the -v flag is an override and wins over the environment
        assert logging.getLogger("archmap").level == logging.DEBUG

    def test_log_file(self, sample_project, tmp_path):
        log_path = tmp_path / "archmap.log"
        result = runner.invoke(
            app, ["analyze", str(sample_project), "-f", "json", "-v", "--log-file", str(log_path)]
        )
        assert result.exit_code == ExitCode.SUCCESS
        for handler in logging.getLogger().handlers:
            handler.flush()
        text = log_path.read_text(encoding="utf-8")
        assert "Analysis complete: 8 files analyzed" in text
        assert "archmap.core" in text

    def test_log_file_on_health(self, sample_project, tmp_path):
        log_path = tmp_path / "health.log"
        result = runner.invoke(
            app, ["health", str(sample_project), "-v", "--log-file", str(log_path)]
        )
        assert result.exit_code == ExitCode.SUCCESS
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "Starting codebase analysis" in log_path.read_text(encoding="utf-8")


class TestAnalyzeErrors:
    def test_unexpected_error(self, sample_project, monkeypatch):
        def boom(self, cancel_event=None):
            raise RuntimeError("boom")

        monkeypatch.setattr(CodebaseAnalyzer, "analyze_codebase", boom)
        result = runner.invoke(app, ["analyze", str(sample_project)])
        assert result.exit_code == ExitCode.INTERNAL_ERROR
