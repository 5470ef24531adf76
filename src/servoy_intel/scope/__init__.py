"""
Scope graph: unit discovery, direct dependency visibility and module listing.
"""

from .graph import build_dependency_graph, direct_references, resolve_transitive
from .scope_graph import ScopeGraph
from .settings import parse_settings_text, parse_solution_settings, read_solution_settings

__all__ = [
    "ScopeGraph",
    "build_dependency_graph",
    "direct_references",
    "resolve_transitive",
    "parse_settings_text",
    "parse_solution_settings",
    "read_solution_settings",
]
