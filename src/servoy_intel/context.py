"""
Explicit ownership of the long-lived components.

A single IntelligenceContext is built at startup and handed to whatever
serves requests; nothing in the core is reachable through module globals.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

from .config import AnalyzerConfig
from .diagnostics import DiagnosticEngine
from .index import SymbolIndex
from .scope import ScopeGraph
from .storage import CacheAdapter, DiskCache

logger = logging.getLogger(__name__)


@dataclass
class IntelligenceContext:
    workspace: str
    config: AnalyzerConfig
    cache: CacheAdapter
    symbol_index: SymbolIndex
    scope_graph: ScopeGraph
    diagnostics: DiagnosticEngine


def build_context(workspace: str, config: Optional[AnalyzerConfig] = None,
                  cache: Optional[CacheAdapter] = None) -> IntelligenceContext:
    """
    Build and initialize every component for `workspace`.

    The symbol index and scope graph are initialized concurrently; both
    are complete and read-only when this returns.

    Args:
        workspace: Project root directory
        config: Analyzer settings, defaults if omitted
        cache: Cache collaborator, a DiskCache under `config.cache_root` if omitted
    """
    config = config or AnalyzerConfig()
    if cache is None:
        cache = DiskCache(workspace, config.cache_root)

    start_time = time.time()
    symbol_index = SymbolIndex(workspace, config, cache)
    scope_graph = ScopeGraph(workspace, config, cache)

    with ThreadPoolExecutor(max_workers=2) as executor:
        index_future = executor.submit(symbol_index.initialize)
        scope_future = executor.submit(scope_graph.initialize)
        index_future.result()
        scope_future.result()

    logger.info(f"Context for {workspace} ready in {time.time() - start_time:.2f}s")
    return IntelligenceContext(
        workspace=workspace,
        config=config,
        cache=cache,
        symbol_index=symbol_index,
        scope_graph=scope_graph,
        diagnostics=DiagnosticEngine(symbol_index, config),
    )
