"""Resolver registry: locating modules and reading their imports."""

from __future__ import annotations

from pathlib import Path

from depweight.resolver.base import (
    PSEUDO_IMPORT,
    BaseResolver,
    NotFoundError,
    ParseError,
    ResolveCancelled,
    ResolveError,
)
from depweight.resolver.python_resolver import PythonResolver


def get_resolver(search_paths: list[Path] | None = None) -> BaseResolver:
    """Return the resolver used for Python source trees."""
    return PythonResolver(search_paths=search_paths)


__all__ = [
    "PSEUDO_IMPORT",
    "BaseResolver",
    "NotFoundError",
    "ParseError",
    "PythonResolver",
    "ResolveCancelled",
    "ResolveError",
    "get_resolver",
]
