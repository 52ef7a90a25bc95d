"""Python resolver: locates modules with importlib finders and reads imports with ast.

Nothing is imported or executed. Modules are found the same way the import
system would find them, then their source is parsed for import statements.
"""

from __future__ import annotations

import ast
import importlib
import importlib.util
import logging
import os
import sys
import threading
from dataclasses import dataclass, field
from importlib.machinery import BuiltinImporter, FrozenImporter, ModuleSpec, PathFinder
from pathlib import Path

from depweight.analysis.filters import is_standard_module
from depweight.models import ResolvedModule
from depweight.resolver.base import PSEUDO_IMPORT, BaseResolver, NotFoundError, ParseError

logger = logging.getLogger(__name__)

# Handlers that make the imports in a try body optional
_IMPORT_GUARDS = {"ImportError", "ModuleNotFoundError", "Exception", "BaseException"}

# Placed in sys.modules by the parent at import time, not found on disk
_MODULE_ALIASES = {"os.path": os.path.__name__}


class PythonResolver(BaseResolver):
    """Resolve dotted module names against a source directory.

    Absolute names are searched in the import root of ``source_dir`` first,
    then in ``search_paths``, then in ``sys.path``. Relative names are
    anchored at the package that owns ``source_dir``: the canonical package
    recorded when a module in that directory was resolved, or failing that
    the chain of ``__init__.py`` files above it.

    ``X.y`` where ``X`` is a plain module (``six.moves`` and the like) is
    taken to mean ``X``. Standard library modules that are not built for the
    running interpreter (``msvcrt`` on POSIX) are dropped from import lists.
    Each module is parsed at most once per resolver.
    """

    def __init__(self, search_paths: list[Path] | None = None):
        self.search_paths = [Path(p) for p in (search_paths or [])]
        self._packages: dict[Path, str] = {}
        self._resolved: dict[str, ResolvedModule] = {}
        self._lock = threading.Lock()
        # Finders cache directory listings; pick up files written since the last lookup
        importlib.invalidate_caches()

    def locate(self, import_id: str, source_dir: Path) -> str:
        name, _ = self._find(import_id, Path(source_dir))
        return name

    def resolve(self, import_id: str, source_dir: Path) -> ResolvedModule:
        name, spec = self._find(import_id, Path(source_dir))
        with self._lock:
            known = self._resolved.get(name)
        if known is not None:
            return known

        is_package = spec.submodule_search_locations is not None
        origin = Path(spec.origin) if spec.has_location and spec.origin else None

        module_dir: Path | None = None
        if is_package and spec.submodule_search_locations:
            module_dir = Path(list(spec.submodule_search_locations)[0])
        elif origin is not None:
            module_dir = origin.parent

        imports: list[str] = []
        if origin is not None and origin.suffix == ".py":
            imports = self._read_imports(name, origin, module_dir)

        logger.debug("resolved %s -> %s (%d imports)", import_id, name, len(imports))
        module = ResolvedModule(
            name=name,
            source_dir=module_dir,
            imports=imports,
            origin=origin,
            is_package=is_package,
        )
        with self._lock:
            return self._resolved.setdefault(name, module)

    # ── Locating ─────────────────────────────────────────────

    def _find(self, import_id: str, source_dir: Path, strict: bool = False) -> tuple[str, ModuleSpec]:
        root, package = self._anchor(source_dir)

        name = import_id
        if import_id.startswith("."):
            if not package:
                raise NotFoundError(import_id, source_dir, "relative import outside a package")
            try:
                name = importlib.util.resolve_name(import_id, package)
            except ImportError as e:
                raise NotFoundError(import_id, source_dir, str(e)) from e

        if not all(name.split(".")):
            raise NotFoundError(import_id, source_dir, "malformed module name")

        for alias, target in _MODULE_ALIASES.items():
            if name == alias or name.startswith(alias + "."):
                name = target + name[len(alias):]
                break
        parts = name.split(".")

        search_path = _dedupe([str(root)] + [str(p) for p in self.search_paths] + sys.path)

        spec = BuiltinImporter.find_spec(parts[0])
        if spec is None:
            spec = PathFinder.find_spec(parts[0], search_path)
        if spec is None:
            spec = FrozenImporter.find_spec(parts[0])
        if spec is None:
            raise NotFoundError(import_id, source_dir)

        for i in range(1, len(parts)):
            locations = spec.submodule_search_locations
            if not locations:
                parent = ".".join(parts[:i])
                if strict:
                    raise NotFoundError(import_id, source_dir, f"{parent} is not a package")
                logger.debug("%s is not a package, taking %s as %s", parent, import_id, parent)
                name = parent
                break
            spec = PathFinder.find_spec(".".join(parts[:i + 1]), list(locations))
            if spec is None:
                raise NotFoundError(import_id, source_dir)

        self._remember(name, spec)
        return name, spec

    def _is_module(self, import_id: str, source_dir: Path | None) -> bool:
        if source_dir is None:
            return False
        try:
            self._find(import_id, source_dir, strict=True)
        except NotFoundError:
            return False
        return True

    def _anchor(self, source_dir: Path) -> tuple[Path, str]:
        """Return the import root above ``source_dir`` and the package it holds."""
        directory = source_dir.absolute()
        with self._lock:
            package = self._packages.get(directory)
        if package is None:
            return _package_root(directory)

        root = directory
        for _ in package.split(".") if package else ():
            root = root.parent
        return root, package

    def _remember(self, name: str, spec: ModuleSpec) -> None:
        """Record which package each directory holds, as found by the import system."""
        if spec.submodule_search_locations:
            directories = [Path(d) for d in spec.submodule_search_locations]
            package = name
        elif spec.has_location and spec.origin:
            directories = [Path(spec.origin).parent]
            package = name.rpartition(".")[0]
        else:
            return

        with self._lock:
            for directory in directories:
                self._packages.setdefault(directory.absolute(), package)

    # ── Parsing ──────────────────────────────────────────────

    def _read_imports(self, name: str, path: Path, module_dir: Path | None) -> list[str]:
        try:
            tree = ast.parse(path.read_bytes(), filename=str(path))
        except (OSError, SyntaxError, ValueError) as e:
            raise ParseError(name, path, str(e)) from e

        collector = _ImportCollector()
        collector.visit(tree)

        imports: list[str] = []
        for found in collector.found:
            if found.module == PSEUDO_IMPORT:
                _append_unique(imports, found.module)
                continue
            # Conditional imports and stdlib modules missing from this
            # interpreter only count where they resolve
            optional = found.conditional or _platform_module(found.module)
            if optional and not self._is_module(found.module, module_dir):
                logger.debug("dropping unavailable import %s in %s", found.module, name)
                continue
            _append_unique(imports, found.module)
            # from X import a, where a is a submodule of X
            for member in found.names:
                base = found.module
                candidate = base + member if base.endswith(".") else f"{base}.{member}"
                if self._is_module(candidate, module_dir):
                    _append_unique(imports, candidate)
        return imports


@dataclass
class _FoundImport:
    module: str
    names: list[str] = field(default_factory=list)
    conditional: bool = False


class _ImportCollector(ast.NodeVisitor):
    """Collect import statements in source order.

    Imports under an ``if``, inside a function, or in a ``try`` that handles
    ImportError only run under some condition and are flagged as such.
    """

    def __init__(self):
        self.found: list[_FoundImport] = []
        self._depth = 0

    def visit_Import(self, node: ast.Import) -> None:
        for alias in node.names:
            self.found.append(_FoundImport(alias.name, [], self._depth > 0))

    def visit_ImportFrom(self, node: ast.ImportFrom) -> None:
        base = "." * node.level + (node.module or "")
        names = [a.name for a in node.names if a.name != "*"]
        self.found.append(_FoundImport(base, names, self._depth > 0))

    def _visit_conditional(self, node: ast.AST) -> None:
        self._depth += 1
        self.generic_visit(node)
        self._depth -= 1

    visit_If = _visit_conditional
    visit_FunctionDef = _visit_conditional
    visit_AsyncFunctionDef = _visit_conditional

    def visit_Try(self, node: ast.Try) -> None:
        if _guards_imports(node):
            self._visit_conditional(node)
        else:
            self.generic_visit(node)

    visit_TryStar = visit_Try


def _guards_imports(node: ast.Try) -> bool:
    for handler in node.handlers:
        if handler.type is None:
            return True
        types = handler.type.elts if isinstance(handler.type, ast.Tuple) else [handler.type]
        for t in types:
            if isinstance(t, ast.Name) and t.id in _IMPORT_GUARDS:
                return True
            if isinstance(t, ast.Attribute) and t.attr in _IMPORT_GUARDS:
                return True
    return False


def _platform_module(name: str) -> bool:
    if name.startswith("."):
        return False
    return is_standard_module(name) or name.split(".", 1)[0] == "__main__"


def _package_root(source_dir: Path) -> tuple[Path, str]:
    """Return the import root above ``source_dir`` and the dotted package name of ``source_dir``."""
    parts: list[str] = []
    current = source_dir.absolute()
    while (current / "__init__.py").is_file() and current.parent != current:
        parts.insert(0, current.name)
        current = current.parent
    return current, ".".join(parts)


def _append_unique(items: list[str], value: str) -> None:
    if value not in items:
        items.append(value)


def _dedupe(items: list[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result
