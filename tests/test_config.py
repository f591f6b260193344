"""Tests for AnalyzerConfig validation and load_config merging."""

import pytest

from archmap.config import (
    DEFAULT_EXCLUDE_PATHS,
    AnalyzerConfig,
    MetricThresholds,
    load_config,
)
from archmap.exceptions import ArchmapError


class TestAnalyzerConfigDefaults:
    def test_defaults(self):
        config = AnalyzerConfig()
        assert config.exclude_paths == DEFAULT_EXCLUDE_PATHS
        assert config.max_depth == 10
        assert config.max_file_size_bytes == 10 * 1024 * 1024
        assert config.alias_roots == {"@/": "src/"}
        assert config.follow_symlinks is False
        assert config.detect_cycles is True

    def test_effective_workers(self):
        assert AnalyzerConfig(workers=3).effective_workers == 3
        assert 1 <= AnalyzerConfig().effective_workers <= 8


class TestAnalyzerConfigValidation:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_depth": -1},
            {"max_file_size_mb": 0},
            {"workers": 0},
            {"timeout_seconds": 0},
            {"exclude_paths": ("node_modules", "")},
            {"alias_roots": {"~/": "src/"}},
            {"verbosity": "loud"},
        ],
    )
    def test_rejects(self, kwargs):
        with pytest.raises(ValueError):
            AnalyzerConfig(**kwargs)

    def test_thresholds_must_be_ordered(self):
        with pytest.raises(ValueError):
            MetricThresholds(health_good_imports=20, health_monitor_imports=15)
        with pytest.raises(ValueError):
            MetricThresholds(complexity_medium_files=30)
        with pytest.raises(ValueError):
            MetricThresholds(hot_file_limit=-1)


class TestLoadConfig:
    def test_defaults_without_sources(self, isolated_config):
        assert load_config() == AnalyzerConfig()

    def test_project_file(self, isolated_config):
        (isolated_config / "archmap.toml").write_text(
            'max_depth = 3\nexclude_paths = ["vendor"]\n\n[thresholds]\nhot_file_limit = 4\n'
        )
        config = load_config()
        assert config.max_depth == 3
        assert config.exclude_paths == ("vendor",)
        assert config.thresholds.hot_file_limit == 4

    def test_global_file_under_project_file(self, isolated_config, tmp_path):
        (tmp_path / "home" / ".archmap.toml").write_text("max_depth = 2\nworkers = 2\n")
        (isolated_config / "archmap.toml").write_text("max_depth = 5\n")
        config = load_config()
        assert config.max_depth == 5
        assert config.workers == 2

    def test_explicit_file(self, isolated_config, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text("follow_symlinks = true\n")
        assert load_config(config_file=path).follow_symlinks is True

    def test_missing_explicit_file(self, isolated_config, tmp_path):
        with pytest.raises(ArchmapError, match="not found"):
            load_config(config_file=tmp_path / "missing.toml")

    def test_malformed_file(self, isolated_config, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("max_depth = \n")
        with pytest.raises(ArchmapError, match="Invalid config file"):
            load_config(config_file=path)

    def test_env_vars_override_files(self, isolated_config, monkeypatch):
        (isolated_config / "archmap.toml").write_text("max_depth = 3\n")
        monkeypatch.setenv("ARCHMAP_MAX_DEPTH", "7")
        monkeypatch.setenv("ARCHMAP_DETECT_CYCLES", "false")
        monkeypatch.setenv("ARCHMAP_TIMEOUT_SECONDS", "2.5")
        config = load_config()
        assert config.max_depth == 7
        assert config.detect_cycles is False
        assert config.timeout_seconds == 2.5

    def test_bad_env_var(self, isolated_config, monkeypatch):
        monkeypatch.setenv("ARCHMAP_FOLLOW_SYMLINKS", "maybe")
        with pytest.raises(ArchmapError, match="ARCHMAP_FOLLOW_SYMLINKS"):
            load_config()

    def test_overrides_win_and_none_is_ignored(self, isolated_config, monkeypatch):
        monkeypatch.setenv("ARCHMAP_MAX_DEPTH", "7")
        config = load_config(max_depth=1, workers=None)
        assert config.max_depth == 1
        assert config.workers is None

    def test_verbose_and_quiet_flags(self, isolated_config):
        assert load_config(verbose=True).verbosity == "verbose"
        assert load_config(quiet=True).verbosity == "quiet"
        assert load_config(verbose=False, quiet=False).verbosity == "normal"

    def test_invalid_value_wrapped(self, isolated_config):
        with pytest.raises(ArchmapError, match="Invalid configuration"):
            load_config(max_depth=-2)

    def test_unknown_key_wrapped(self, isolated_config):
        (isolated_config / "archmap.toml").write_text("colour = 'blue'\n")
        with pytest.raises(ArchmapError, match="Invalid configuration"):
            load_config()

    def test_bad_thresholds_table(self, isolated_config):
        (isolated_config / "archmap.toml").write_text("[thresholds]\nhot_file_limit = -1\n")
        with pytest.raises(ArchmapError, match="thresholds"):
            load_config()
