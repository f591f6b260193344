"""
archmap - Codebase Dependency and Coupling Analyzer

Walks a source tree, extracts local import/export relationships with
lightweight pattern matching, classifies files into architectural
categories and emits a four-level hierarchical graph (root orchestration,
master architecture, component sub-graphs, implementation detail) with
coupling, instability and health metrics for a visualization layer.
"""

__version__ = "0.1.0"

from .config import AnalyzerConfig, MetricThresholds, load_config
from .core import AnalysisResult, AnalysisStats, CodebaseAnalyzer, analyze_codebase
from .exceptions import ArchmapError

__all__ = [
    "analyze_codebase",  # Main entry point
    "CodebaseAnalyzer",
    "AnalysisResult",
    "AnalysisStats",
    "AnalyzerConfig",
    "MetricThresholds",
    "load_config",
    "ArchmapError",
]
