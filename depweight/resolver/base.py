"""Abstract base resolver and the resolution error hierarchy."""

from __future__ import annotations

import abc
from pathlib import Path

from depweight.models import ResolvedModule

# Compiler directive, not a real dependency. Recorded by resolvers, skipped by the graph builder.
PSEUDO_IMPORT = "__future__"


class ResolveError(Exception):
    """Base class for anything that stops a module from being resolved."""

    def __init__(self, message: str, import_id: str = "", source_dir: Path | None = None):
        super().__init__(message)
        self.import_id = import_id
        self.source_dir = source_dir


class NotFoundError(ResolveError):
    """The import cannot be located from the given source directory."""

    def __init__(self, import_id: str, source_dir: Path | None = None, reason: str = ""):
        message = f"cannot find module {import_id!r}"
        if source_dir is not None:
            message += f" from {source_dir}"
        if reason:
            message += f": {reason}"
        super().__init__(message, import_id, source_dir)


class ParseError(ResolveError):
    """The module was located but its source could not be parsed."""

    def __init__(self, import_id: str, path: Path, reason: str):
        super().__init__(f"cannot parse {path} ({import_id}): {reason}", import_id, path.parent)
        self.path = path


class ResolveCancelled(ResolveError):
    """The caller's cancel event was set before ``import_id`` was resolved."""

    def __init__(self, import_id: str = ""):
        super().__init__(f"resolution of {import_id!r} cancelled", import_id)


class BaseResolver(abc.ABC):
    """Locates modules on disk and reports their direct imports."""

    @abc.abstractmethod
    def resolve(self, import_id: str, source_dir: Path) -> ResolvedModule:
        """Locate and parse ``import_id`` relative to ``source_dir``.

        Raises:
            NotFoundError: the module cannot be located.
            ParseError: the module's source cannot be parsed.
        """

    @abc.abstractmethod
    def locate(self, import_id: str, source_dir: Path) -> str:
        """Return the canonical name of ``import_id`` without parsing it.

        Raises:
            NotFoundError: the module cannot be located.
        """
