"""
Shared utilities: file discovery/filtering, display formatting and
cursor-chain tokenizing.
"""

from .file_filter import FileFilter
from .formatting import format_function_detail, format_function_docs, format_signature_label, format_snippet
from .tokenizer import get_chain

__all__ = [
    "FileFilter",
    "format_function_detail",
    "format_function_docs",
    "format_signature_label",
    "format_snippet",
    "get_chain",
]
