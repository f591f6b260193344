"""Tests for the health summary and critical component views."""

import pytest

from archmap import AnalyzerConfig, analyze_codebase
from archmap.core import AnalysisResult, AnalysisStats
from archmap.graph.models import (
    GraphLevel,
    GraphVertex,
    Health,
    Importance,
    Position,
    VertexMetrics,
)
from archmap.insights import find_critical_components, summarize_health
from archmap.scanning.models import DirectoryStructure


def _vertex(vid, health=Health.EXCELLENT, imports=0, importance=Importance.MEDIUM, level=0):
    return GraphVertex(
        id=vid,
        name=vid.title(),
        description="",
        category="Libraries",
        icon="Code",
        level=level,
        position=Position(10, 15),
        files=[f"src/{vid}.ts"],
        metrics=VertexMetrics(
            afferent_coupling=imports,
            efferent_coupling=1,
            instability=imports / (imports + 2),
            importance=importance,
        ),
        health=health,
    )


def _result(vertices, **stats):
    level = GraphLevel(level=0, title="Master Architecture", description="", color="", vertices=vertices)
    return AnalysisResult(
        root=".",
        structure=DirectoryStructure.build("root", ".", [], []),
        levels=[level],
        stats=AnalysisStats(**stats),
    )


class TestSummarizeHealth:
    def test_empty_codebase_is_excellent(self):
        summary = summarize_health(_result([]))
        assert summary.overall == Health.EXCELLENT
        assert summary.score == 0
        assert summary.components == {"excellent": 0, "good": 0, "monitor": 0, "refactor": 0}
        assert summary.recommendations == []

    def test_counts_tiers(self):
        vertices = [
            _vertex("a"),
            _vertex("b", Health.GOOD),
            _vertex("c", Health.GOOD),
            _vertex("d", Health.MONITOR),
        ]
        summary = summarize_health(_result(vertices))
        assert summary.components == {"excellent": 1, "good": 2, "monitor": 1, "refactor": 0}
        assert summary.score == 80
        assert summary.overall == Health.GOOD

    def test_refactor_recommendation(self):
        summary = summarize_health(_result([_vertex("a", Health.REFACTOR)]))
        assert summary.overall == Health.REFACTOR
        assert summary.recommendations == ["1 components need refactoring"]

    def test_many_monitored_components(self):
        vertices = [_vertex(f"m{i}", Health.MONITOR) for i in range(6)]
        summary = summarize_health(_result(vertices))
        assert summary.overall == Health.MONITOR
        assert any("consider splitting" in r for r in summary.recommendations)

    def test_dependency_and_cycle_recommendations(self):
        summary = summarize_health(
            _result([_vertex("a")], total_dependencies=151, circular_dependencies=2)
        )
        assert any("High dependency count" in r for r in summary.recommendations)
        assert any(r.startswith("2 import cycles") for r in summary.recommendations)

    def test_sample_project(self, sample_project):
        result = analyze_codebase(sample_project, config=AnalyzerConfig(workers=1))
        summary = summarize_health(result)
        assert summary.overall == Health.EXCELLENT
        assert summary.score == 100
        assert summary.components["excellent"] == 10
        assert summary.to_dict()["overall"] == "Excellent"


class TestFindCriticalComponents:
    def test_reasons(self):
        vertices = [
            _vertex("fine"),
            _vertex("refactor", Health.REFACTOR, imports=1),
            _vertex("monitor", Health.MONITOR, imports=2),
            _vertex("critical", importance=Importance.CRITICAL, imports=3),
            _vertex("coupled", imports=16),
        ]
        found = find_critical_components(_result(vertices).levels)
        reasons = {c.name: c.reason for c in found}
        assert reasons == {
            "Refactor": "Requires refactoring",
            "Monitor": "High complexity - monitor closely",
            "Critical": "Critical system component",
            "Coupled": "High coupling - many dependencies",
        }

    def test_sorted_by_imports(self):
        vertices = [
            _vertex("low", Health.MONITOR, imports=1),
            _vertex("high", Health.MONITOR, imports=9),
            _vertex("mid", Health.MONITOR, imports=4),
        ]
        names = [c.name for c in find_critical_components(_result(vertices).levels)]
        assert names == ["High", "Mid", "Low"]

    def test_coupling_threshold_is_strict(self):
        found = find_critical_components(_result([_vertex("edge", imports=15)]).levels)
        assert found == []

    def test_to_dict(self):
        (component,) = find_critical_components(
            _result([_vertex("core", Health.REFACTOR, imports=4)]).levels
        )
        assert component.to_dict() == {
            "name": "Core",
            "category": "Libraries",
            "health": "Refactor",
            "imports": 4,
            "exports": 1,
            "files": ["src/core.ts"],
            "reason": "Requires refactoring",
        }

    @pytest.mark.parametrize("levels", [[], [GraphLevel(2, "Implementation Detail", "", "")]])
    def test_nothing_to_report(self, levels):
        assert find_critical_components(levels) == []
