"""Edge table for the module dependency graph."""

from __future__ import annotations

import threading


class DependencyGraph:
    """Direct-dependency edges: module name -> {names it imports}.

    Edge sets only grow. Every method takes the lock for a single read or
    write, so builders on several threads can share one graph.
    """

    def __init__(self):
        self._forward: dict[str, set[str]] = {}
        self._lock = threading.Lock()

    def add_edge(self, source: str, target: str) -> None:
        with self._lock:
            self._forward.setdefault(source, set()).add(target)

    def direct(self, name: str) -> list[str]:
        """Snapshot of the direct dependencies of ``name`` (unordered)."""
        with self._lock:
            return list(self._forward.get(name, ()))

    def edge_count(self) -> int:
        with self._lock:
            return sum(len(targets) for targets in self._forward.values())

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._forward
