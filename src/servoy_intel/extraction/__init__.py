"""
Extraction pipeline: source text to declarations.
"""

from .batch import CachedExtractor, extract_all
from .extractor import ScriptExtractor, merge_params
from .jsdoc import DocComment, DocTag, parse_doc_comment
from .parser import Comment, ParsedScript, node_text, parse_script

__all__ = [
    "ScriptExtractor",
    "CachedExtractor",
    "extract_all",
    "merge_params",
    "parse_doc_comment",
    "DocComment",
    "DocTag",
    "parse_script",
    "ParsedScript",
    "Comment",
    "node_text",
]
