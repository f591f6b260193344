"""Coupling and health metrics for scanned files."""

from .metrics import (
    afferent_coupling,
    architecture_grade,
    assess_health,
    category_instability,
    complexity_for,
    efferent_coupling,
    file_load_bucket,
    health_score,
    instability,
)

__all__ = [
    "afferent_coupling",
    "efferent_coupling",
    "instability",
    "category_instability",
    "assess_health",
    "complexity_for",
    "file_load_bucket",
    "health_score",
    "architecture_grade",
]
