"""File-level import graph and cycle detection.

Import specs are resolved against the scanned file set the way a bundler
would: relative specs from the importing file's directory, alias specs
(``@/lib/x``) from the alias root, trying each source extension and then
an ``index`` file. Specs that resolve to nothing are dropped.
"""

import posixpath
from typing import Iterable, Mapping, Optional, Sequence

from ..scanning.models import FileInfo


def resolve_import(
    importer: str,
    spec: str,
    known_paths: set[str],
    alias_roots: Mapping[str, str],
    extensions: Sequence[str],
) -> Optional[str]:
    """Resolve one import spec to a scanned root-relative path, or None."""
    if spec.startswith("."):
        base = posixpath.join(posixpath.dirname(importer), spec)
    else:
        for alias, target in alias_roots.items():
            if spec.startswith(alias):
                base = posixpath.join(target, spec[len(alias) :])
                break
        else:
            return None

    base = posixpath.normpath(base)
    if base == ".." or base.startswith("../"):
        return None

    candidates = [base]
    candidates.extend(base + ext for ext in extensions)
    candidates.extend(posixpath.join(base, "index" + ext) for ext in extensions)
    for candidate in candidates:
        if candidate in known_paths:
            return candidate
    return None


def build_import_graph(
    files: Iterable[FileInfo],
    alias_roots: Mapping[str, str],
    extensions: Sequence[str],
) -> dict[str, list[str]]:
    """Adjacency list: file path -> resolved paths it imports, in import order."""
    files = list(files)
    known = {f.path for f in files}
    adjacency: dict[str, list[str]] = {}
    for info in files:
        targets: list[str] = []
        for spec in info.imports:
            target = resolve_import(info.path, spec, known, alias_roots, extensions)
            if target is not None and target not in targets:
                targets.append(target)
        adjacency[info.path] = targets
    return adjacency


def tarjan_scc(adjacency: dict[str, list[str]], all_nodes: Iterable[str]) -> list[set[str]]:
    """Tarjan's algorithm for strongly connected components (iterative).

    Uses an explicit call stack to avoid Python recursion limits on deep
    dependency chains.
    """
    nodes = list(all_nodes)
    node_set = set(nodes)
    counter = 0
    scc_stack: list[str] = []
    on_stack: set[str] = set()
    index: dict[str, int] = {}
    lowlink: dict[str, int] = {}
    result: list[set[str]] = []

    for root in nodes:
        if root in index:
            continue

        # Each frame is (node, neighbor_iterator)
        call_stack: list[tuple] = []
        index[root] = lowlink[root] = counter
        counter += 1
        scc_stack.append(root)
        on_stack.add(root)
        neighbors = [w for w in adjacency.get(root, []) if w in node_set]
        call_stack.append((root, iter(neighbors)))

        while call_stack:
            v, it = call_stack[-1]
            pushed = False
            for w in it:
                if w not in index:
                    index[w] = lowlink[w] = counter
                    counter += 1
                    scc_stack.append(w)
                    on_stack.add(w)
                    w_neighbors = [n for n in adjacency.get(w, []) if n in node_set]
                    call_stack.append((w, iter(w_neighbors)))
                    pushed = True
                    break
                elif w in on_stack:
                    lowlink[v] = min(lowlink[v], index[w])

            if not pushed:
                call_stack.pop()
                if call_stack:
                    caller = call_stack[-1][0]
                    lowlink[caller] = min(lowlink[caller], lowlink[v])

                if lowlink[v] == index[v]:
                    component: set[str] = set()
                    while True:
                        w = scc_stack.pop()
                        on_stack.discard(w)
                        component.add(w)
                        if w == v:
                            break
                    result.append(component)

    return result


def find_cycles(adjacency: dict[str, list[str]]) -> list[list[str]]:
    """Return every import cycle as a sorted list of paths.

    A cycle is a strongly connected component with more than one file, or
    a single file that imports itself. The result is sorted so it is
    stable across runs.
    """
    cycles: list[list[str]] = []
    for component in tarjan_scc(adjacency, adjacency.keys()):
        if len(component) > 1:
            cycles.append(sorted(component))
        else:
            (node,) = component
            if node in adjacency.get(node, []):
                cycles.append([node])
    return sorted(cycles)
