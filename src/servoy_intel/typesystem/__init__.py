"""
Type system: doc-comment type parsing, platform type-code mapping,
assignability and display.
"""

from .compat import LITERAL_TYPES, infer_literal_type, is_assignable, stringify_type
from .doc_types import parse_doc_type
from .platform_types import PLATFORM_TYPE_MAP, PRIMITIVE_CODES, map_platform_type

__all__ = [
    "parse_doc_type",
    "map_platform_type",
    "is_assignable",
    "stringify_type",
    "infer_literal_type",
    "LITERAL_TYPES",
    "PLATFORM_TYPE_MAP",
    "PRIMITIVE_CODES",
]
