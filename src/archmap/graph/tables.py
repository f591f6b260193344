"""Lookup tables that drive level construction.

These are configuration data, not global state: the builder receives an
ArchitectureTables instance and tests can pass their own.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .models import Importance

DEFAULT_ICON = "Package"


def slugify(category: str) -> str:
    """Vertex id for a category: lower case, whitespace runs become '-'."""
    return re.sub(r"\s+", "-", category.lower())


@dataclass(frozen=True)
class ArchitectureTables:
    # Typical upstream vertex ids per category (heuristic, not import-derived)
    category_dependencies: Dict[str, List[str]] = field(
        default_factory=lambda: {
            "App Router": ["components", "libraries"],
            "Components": ["ui-components", "libraries"],
            "API": ["domain", "libraries"],
            "Libraries": ["types"],
            "Content": ["build-pipeline"],
        }
    )
    category_icons: Dict[str, str] = field(
        default_factory=lambda: {
            "App Router": "Route",
            "Components": "Layers",
            "UI Components": "Palette",
            "Libraries": "Code",
            "Domain": "Brain",
            "Types": "Shield",
            "API": "Server",
            "Content": "FileText",
            "Documentation": "BookOpen",
            "Static Assets": "Image",
            "Build Scripts": "Zap",
        }
    )
    category_importance: Dict[str, Importance] = field(
        default_factory=lambda: {
            "App Router": Importance.CRITICAL,
            "Components": Importance.HIGH,
            "Libraries": Importance.HIGH,
            "Types": Importance.CRITICAL,
            "API": Importance.HIGH,
            "Domain": Importance.HIGH,
            "Content": Importance.MEDIUM,
            "Documentation": Importance.LOW,
        }
    )
    # Categories eligible for a detailed Level 1 vertex, in display order
    critical_categories: Tuple[str, ...] = (
        "App Router",
        "Components",
        "Libraries",
        "Types",
        "API",
    )

    def dependencies_for(self, category: str) -> list[str]:
        return list(self.category_dependencies.get(category, []))

    def icon_for(self, category: str) -> str:
        return self.category_icons.get(category, DEFAULT_ICON)

    def importance_for(self, category: str) -> Importance:
        return self.category_importance.get(category, Importance.MEDIUM)


DEFAULT_TABLES = ArchitectureTables()
