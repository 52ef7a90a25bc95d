"""Data models for depweight."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class ResolvedModule:
    """A located and parsed module."""
    name: str  # canonical dotted name
    source_dir: Path | None  # base for this module's own relative imports
    imports: list[str] = field(default_factory=list)  # as written, relative dots kept
    origin: Path | None = None
    is_package: bool = False


@dataclass
class ReportLine:
    name: str
    count: int

    def format(self) -> str:
        return f"{self.count:6d} {self.name}"


@dataclass
class AnalysisConfig:
    """Configuration for a single report run."""
    root: str
    source_dir: Path = field(default_factory=Path.cwd)
    exclude_standard: bool = False
    search_paths: list[Path] = field(default_factory=list)
