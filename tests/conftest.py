"""Shared fixtures: an in-memory resolver driven by a plain adjacency dict."""

from pathlib import Path

import pytest

from depweight.models import ResolvedModule
from depweight.resolver.base import BaseResolver, NotFoundError, ParseError

FIXTURES = Path(__file__).parent / "fixtures"


class FakeResolver(BaseResolver):
    """Resolves names straight out of ``modules`` (name -> imports)."""

    def __init__(self, modules, broken=(), aliases=None):
        self.modules = modules
        self.broken = set(broken)
        self.aliases = aliases or {}
        self.resolve_calls: list[str] = []
        self.locate_calls: list[str] = []

    def resolve(self, import_id, source_dir):
        self.resolve_calls.append(import_id)
        name = self._canonical(import_id, source_dir)
        if name in self.broken:
            raise ParseError(name, Path(f"/src/{name}.py"), "invalid syntax")
        return ResolvedModule(
            name=name,
            source_dir=Path("/src") / name,
            imports=list(self.modules[name]),
        )

    def locate(self, import_id, source_dir):
        self.locate_calls.append(import_id)
        return self._canonical(import_id, source_dir)

    def _canonical(self, import_id, source_dir):
        name = self.aliases.get(import_id, import_id)
        if name not in self.modules:
            raise NotFoundError(import_id, source_dir)
        return name


@pytest.fixture
def fake_resolver():
    def _make(modules, broken=(), aliases=None):
        return FakeResolver(modules, broken=broken, aliases=aliases)
    return _make


@pytest.fixture
def shop_project():
    return FIXTURES / "shop_project"
