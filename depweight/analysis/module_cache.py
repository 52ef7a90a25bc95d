"""Thread-safe memo of resolved modules keyed by canonical name."""

from __future__ import annotations

import threading

from depweight.models import ResolvedModule


class ModuleCache:

    def __init__(self):
        self._modules: dict[str, ResolvedModule] = {}
        self._lock = threading.Lock()

    def get(self, name: str) -> ResolvedModule | None:
        with self._lock:
            return self._modules.get(name)

    def put(self, module: ResolvedModule) -> None:
        """Insert or overwrite the entry for ``module.name``."""
        with self._lock:
            self._modules[module.name] = module

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._modules

    def __len__(self) -> int:
        with self._lock:
            return len(self._modules)
