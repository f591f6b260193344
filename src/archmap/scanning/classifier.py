"""Path-based file categorisation.

Categories are decided by an ordered rule table: root-level files are
tested by name first, nested files by root-relative path prefix. The first
matching rule wins, so a prefix must appear before any shorter prefix that
contains it (``src/app/api`` before ``src/app/``).
"""

import re
from dataclasses import dataclass
from typing import Sequence

FALLBACK_CATEGORY = "Miscellaneous"
ROOT_CATEGORY = "Root"

# A root JSON manifest that declares packages, e.g. bower.json or composer.json
_MANIFEST_PATTERN = re.compile(r'"(?:dependencies|devDependencies)"\s*:')


@dataclass(frozen=True)
class PrefixRule:
    """Maps a root-relative path prefix to a category."""

    prefix: str
    category: str

    def matches(self, relative_path: str) -> bool:
        return relative_path.startswith(self.prefix)


DEFAULT_RULES: tuple[PrefixRule, ...] = (
    PrefixRule("src/app/api", "API"),
    PrefixRule("src/app/", "App Router"),
    PrefixRule("src/components/ui", "UI Components"),
    PrefixRule("src/components/", "Components"),
    PrefixRule("src/lib/", "Libraries"),
    PrefixRule("src/domain/", "Domain"),
    PrefixRule("src/types/", "Types"),
    PrefixRule("src/hooks/", "Hooks"),
    PrefixRule("src/content/", "Content"),
    PrefixRule("docs/", "Documentation"),
    PrefixRule("local-reports/", "Analysis Reports"),
    PrefixRule("public/", "Static Assets"),
    PrefixRule("scripts/", "Build Scripts"),
)


class FileClassifier:
    """Assigns each file one semantic category."""

    def __init__(self, rules: Sequence[PrefixRule] = DEFAULT_RULES):
        self.rules = tuple(rules)

    def classify(self, relative_path: str, content: str = "") -> str:
        """Return the category for a root-relative POSIX path.

        ``content`` only matters for root-level files, where it separates a
        package manifest from a generic root file.
        """
        if "/" not in relative_path:
            return self._classify_root(relative_path, content)

        for rule in self.rules:
            if rule.matches(relative_path):
                return rule.category
        return FALLBACK_CATEGORY

    @staticmethod
    def _classify_root(name: str, content: str) -> str:
        if "config" in name:
            return "Configuration"
        if "package.json" in name:
            return "Dependencies"
        if name.endswith(".md"):
            return "Documentation"
        if name.endswith(".json") and _MANIFEST_PATTERN.search(content):
            return "Dependencies"
        return ROOT_CATEGORY
