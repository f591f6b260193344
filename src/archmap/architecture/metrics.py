"""Coupling, instability and health metrics over groups of files.

Naming convention used throughout archmap:
- Afferent coupling (Ca): total imports made by the files of a unit
- Efferent coupling (Ce): total exports offered by the files of a unit
- Instability (I): Ca / (Ca + Ce + 1)

This is inverted relative to Martin's textbook definitions. The +1
smoothing term keeps I finite for isolated units and strictly below 1.
Every function is total: empty inputs give neutral values, never NaN.
"""

from typing import Iterable, Sequence

import numpy as np

from ..config import DEFAULT_THRESHOLDS, MetricThresholds
from ..graph.models import Complexity, Health
from ..scanning.models import FileInfo

HEALTH_WEIGHTS = {
    Health.EXCELLENT: 100,
    Health.GOOD: 80,
    Health.MONITOR: 60,
    Health.REFACTOR: 20,
}


def afferent_coupling(files: Iterable[FileInfo]) -> int:
    """Sum of import counts across ``files``."""
    return sum(len(f.imports) for f in files)


def efferent_coupling(files: Iterable[FileInfo]) -> int:
    """Sum of export counts across ``files``."""
    return sum(len(f.exports) for f in files)


def instability(ca: int, ce: int) -> float:
    """Compute I = Ca / (Ca + Ce + 1).

    Returns:
        Instability in [0, 1); exactly 0.0 for (0, 0)
    """
    return ca / (ca + ce + 1)


def category_instability(files: Sequence[FileInfo]) -> float:
    return instability(afferent_coupling(files), efferent_coupling(files))


def assess_health(
    files: Sequence[FileInfo], thresholds: MetricThresholds = DEFAULT_THRESHOLDS
) -> Health:
    """Classify a group of files by mean import count and mean byte size.

    Ladder, first match wins:
        mean imports > 15 or mean size > 5000 => Monitor
        mean imports > 10 or mean size > 3000 => Good
        otherwise                             => Excellent

    An empty group is Excellent.
    """
    if not files:
        return Health.EXCELLENT

    avg_imports = float(np.mean([len(f.imports) for f in files]))
    avg_size = float(np.mean([f.size for f in files]))

    if avg_imports > thresholds.health_monitor_imports or avg_size > thresholds.health_monitor_size:
        return Health.MONITOR
    if avg_imports > thresholds.health_good_imports or avg_size > thresholds.health_good_size:
        return Health.GOOD
    return Health.EXCELLENT


def complexity_for(
    file_count: int, thresholds: MetricThresholds = DEFAULT_THRESHOLDS
) -> Complexity:
    """More than 20 files is High, more than 10 Medium, otherwise Low."""
    if file_count > thresholds.complexity_high_files:
        return Complexity.HIGH
    if file_count > thresholds.complexity_medium_files:
        return Complexity.MEDIUM
    return Complexity.LOW


def file_load_bucket(
    import_count: int, thresholds: MetricThresholds = DEFAULT_THRESHOLDS
) -> str:
    """Per-file rung of the health ladder: "healthy", "monitor" or "refactor"."""
    if import_count >= thresholds.load_refactor_imports:
        return "refactor"
    if import_count >= thresholds.load_monitor_imports:
        return "monitor"
    return "healthy"


def health_score(healths: Iterable[Health]) -> int:
    """Weighted mean of health tiers on a 0-100 scale; 0 when empty."""
    weights = [HEALTH_WEIGHTS[h] for h in healths]
    if not weights:
        return 0
    return int(round(float(np.mean(weights))))


def architecture_grade(score: int, has_components: bool = True) -> str:
    """Letter grade for a 0-100 score; "N/A" when there is nothing to grade."""
    if not has_components:
        return "N/A"
    if score >= 90:
        return "A"
    if score >= 80:
        return "B"
    if score >= 70:
        return "C"
    if score >= 60:
        return "D"
    return "F"
