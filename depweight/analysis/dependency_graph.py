"""Dependency graph builder: resolves a module and everything it imports, memoizing as it goes."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable, Iterator

from depweight.analysis.closure import count_reachable
from depweight.analysis.graph_models import DependencyGraph
from depweight.analysis.module_cache import ModuleCache
from depweight.models import ResolvedModule
from depweight.resolver.base import PSEUDO_IMPORT, BaseResolver, ResolveCancelled

logger = logging.getLogger(__name__)


class DependencyGraphBuilder:
    """Build the import graph of a source tree on demand.

    One builder is one analysis session: its cache and edge table live as
    long as the builder does. A module is cached *before* its imports are
    followed, so reaching it again through an import cycle stops there.
    """

    def __init__(self, resolver: BaseResolver):
        self.resolver = resolver
        self.cache = ModuleCache()
        self.graph = DependencyGraph()

    def resolve(
        self,
        import_id: str,
        source_dir: Path,
        cancel: threading.Event | None = None,
    ) -> ResolvedModule:
        """Resolve ``import_id`` and, on first sight, all of its transitive imports.

        The first resolution error aborts the whole call and propagates
        unchanged. Returns the module as resolved, or the cached module if
        its name was already known.
        """
        root = self._fetch(import_id, source_dir, cancel)
        cached = self.cache.get(root.name)
        if cached is not None:
            logger.debug("cache hit: %s", root.name)
            return cached
        self.cache.put(root)

        # Explicit stack of (module, remaining imports) instead of recursion
        stack: list[tuple[ResolvedModule, Iterator[str]]] = [(root, iter(root.imports))]
        while stack:
            module, pending = stack[-1]
            for imported in pending:
                if imported == PSEUDO_IMPORT:
                    logger.debug("skipping %s in %s", PSEUDO_IMPORT, module.name)
                    continue
                child = self._fetch(imported, module.source_dir, cancel)
                cached = self.cache.get(child.name)
                if cached is not None:
                    self.graph.add_edge(module.name, cached.name)
                    continue
                self.cache.put(child)
                stack.append((child, iter(child.imports)))
                break
            else:
                stack.pop()
                if stack:
                    self.graph.add_edge(stack[-1][0].name, module.name)

        return root

    def lookup(
        self,
        import_id: str,
        source_dir: Path,
        cancel: threading.Event | None = None,
    ) -> tuple[ResolvedModule, list[str]]:
        """Return a module and its direct dependency names, building the graph if needed."""
        name = self.resolver.locate(import_id, source_dir)
        module = self.cache.get(name)
        if module is None:
            module = self.resolve(import_id, source_dir, cancel)
        return module, self.graph.direct(module.name)

    def count_reachable(self, root: str, keep: Callable[[str], bool]) -> int:
        return count_reachable(self.graph, root, keep)

    def _fetch(
        self,
        import_id: str,
        source_dir: Path | None,
        cancel: threading.Event | None,
    ) -> ResolvedModule:
        if cancel is not None and cancel.is_set():
            raise ResolveCancelled(import_id)
        return self.resolver.resolve(import_id, source_dir)
