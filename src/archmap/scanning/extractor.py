"""Regex-based import/export extraction for JavaScript-family sources.

This is a heuristic. Multi-line exports, ``export * from``
re-exports and destructured exports may be missed; malformed source just
yields fewer matches. A real parser can replace these two functions
without touching any caller.
"""

import re
from typing import Iterable, Sequence

_ES_IMPORT = re.compile(r"""import\s+.*?\s+from\s+['"`]([^'"`]+)['"`]""")
_REQUIRE = re.compile(r"""require\(['"`]([^'"`]+)['"`]\)""")
_EXPORT = re.compile(
    r"export\s+(default\s+|const\s+|function\s+|class\s+|interface\s+|type\s+)?"
    r"([a-zA-Z_$][a-zA-Z0-9_$]*)"
)


def _unique(items: Iterable[str]) -> tuple[str, ...]:
    # dict keeps first-seen order
    return tuple(dict.fromkeys(items))


def is_local_spec(spec: str, alias_prefixes: Sequence[str] = ("@/",)) -> bool:
    """True for relative specs and alias-rooted specs; packages are external."""
    return spec.startswith(".") or any(spec.startswith(p) for p in alias_prefixes)


def extract_imports(content: str, alias_prefixes: Sequence[str] = ("@/",)) -> tuple[str, ...]:
    """Return the distinct local module specs imported by ``content``.

    ES-module ``import ... from '<spec>'`` statements are collected first,
    then ``require('<spec>')`` calls.
    """
    specs = [m.group(1) for m in _ES_IMPORT.finditer(content)]
    specs.extend(m.group(1) for m in _REQUIRE.finditer(content))
    return _unique(s for s in specs if is_local_spec(s, alias_prefixes))


def extract_exports(content: str) -> tuple[str, ...]:
    """Return the distinct identifiers following ``export`` keywords."""
    return _unique(m.group(2) for m in _EXPORT.finditer(content))
