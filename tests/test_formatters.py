"""Tests for output formatters."""

import json

import pytest

from archmap import AnalyzerConfig, analyze_codebase
from archmap.formatters import JsonFormatter, RichFormatter, get_formatter


@pytest.fixture
def result(sample_project):
    return analyze_codebase(sample_project, config=AnalyzerConfig(workers=1))


class TestJsonFormatter:
    def test_document_shape(self, result):
        data = json.loads(JsonFormatter().format(result))
        assert set(data) == {
            "root",
            "levels",
            "stats",
            "warnings",
            "healthSummary",
            "criticalComponents",
        }
        assert data["healthSummary"]["overall"] == "Excellent"
        assert data["stats"]["dependencyCycles"] == [["src/lib/format.ts", "src/lib/utils.ts"]]

    def test_include_structure(self, result):
        data = json.loads(JsonFormatter(include_structure=True).format(result))
        assert data["structure"]["path"] == "."
        assert data["structure"]["totalFiles"] == 8

    def test_critical_components_listed(self, result):
        data = json.loads(JsonFormatter().format(result))
        names = [c["name"] for c in data["criticalComponents"]]
        # App Router has the most imports among Critical-importance vertices
        assert names[0] == "App Router (1 files)"
        assert "Git Repository" in names

    def test_render_prints(self, result, capsys):
        JsonFormatter(indent=0).render(result)
        assert json.loads(capsys.readouterr().out)["stats"]["totalFiles"] == 8


class TestRichFormatter:
    def test_render_lists_every_level(self, result, capsys):
        RichFormatter().render(result)
        out = capsys.readouterr().out
        for title in (
            "Root Orchestration",
            "Master Architecture",
            "Component Sub-Graphs",
            "Implementation Detail",
        ):
            assert title in out
        assert "no components" in out

    def test_format_returns_empty_string(self, result, capsys):
        assert RichFormatter().format(result) == ""


class TestGetFormatter:
    def test_known(self):
        assert isinstance(get_formatter("json"), JsonFormatter)
        assert isinstance(get_formatter("rich", verbose=True), RichFormatter)

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown formatter"):
            get_formatter("xml")
