"""
Symbol index: platform catalog plus project globals, with fuzzy lookup.
"""

from .catalog import load_platform_catalog, parse_platform_catalog
from .fuzzy import fuzzy_search, levenshtein_distance
from .symbol_index import SymbolIndex, aggregate_globals

__all__ = [
    "SymbolIndex",
    "aggregate_globals",
    "load_platform_catalog",
    "parse_platform_catalog",
    "fuzzy_search",
    "levenshtein_distance",
]
