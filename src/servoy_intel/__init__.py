"""
Servoy script intelligence core.

Type system, declaration extraction, symbol index, scope graph and
call-site diagnostics for Servoy JavaScript projects.
"""

from .config import AnalyzerConfig
from .context import IntelligenceContext, build_context
from .diagnostics import Diagnostic, DiagnosticEngine
from .index import SymbolIndex
from .scope import ScopeGraph

__version__ = "0.1.0"

__all__ = [
    "AnalyzerConfig",
    "IntelligenceContext",
    "build_context",
    "Diagnostic",
    "DiagnosticEngine",
    "SymbolIndex",
    "ScopeGraph",
]
