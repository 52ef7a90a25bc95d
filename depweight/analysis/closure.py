"""Transitive closure counting over the dependency graph."""

from __future__ import annotations

from typing import Callable

from depweight.analysis.graph_models import DependencyGraph


def count_reachable(graph: DependencyGraph, root: str, keep: Callable[[str], bool]) -> int:
    """Count the modules reachable from ``root``, root included.

    ``keep`` prunes: a module it rejects is neither counted nor traversed, so
    anything reachable only through it is excluded as well. Modules reached by
    several paths, or through cycles, are counted once.
    """
    visited: set[str] = set()
    stack = [root]
    while stack:
        name = stack.pop()
        if not keep(name) or name in visited:
            continue
        visited.add(name)
        stack.extend(graph.direct(name))
    return len(visited)
