"""Report orchestrator: resolve root -> list direct deps -> filter -> count closures."""

from __future__ import annotations

import logging
import threading

from depweight.analysis.dependency_graph import DependencyGraphBuilder
from depweight.analysis.filters import make_filter
from depweight.models import AnalysisConfig, ReportLine
from depweight.resolver import BaseResolver, get_resolver

logger = logging.getLogger(__name__)


def run_report(
    config: AnalysisConfig,
    resolver: BaseResolver | None = None,
    cancel: threading.Event | None = None,
) -> list[ReportLine]:
    """Return one line per surviving direct dependency of ``config.root``, sorted by name."""
    builder = DependencyGraphBuilder(resolver or get_resolver(config.search_paths))
    keep = make_filter(config.exclude_standard)

    module, deps = builder.lookup(config.root, config.source_dir, cancel)
    logger.info(
        "resolved %s: %d modules, %d edges",
        module.name, len(builder.cache), builder.graph.edge_count(),
    )

    return [
        ReportLine(name=name, count=builder.count_reachable(name, keep))
        for name in sorted(deps)
        if keep(name)
    ]
