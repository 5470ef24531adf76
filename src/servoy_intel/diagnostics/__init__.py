"""
Diagnostic engine: overload checking of call sites in a document.
"""

from .engine import DiagnosticEngine, format_overload_message
from .models import Diagnostic, Position, Range, Severity

__all__ = ["DiagnosticEngine", "format_overload_message", "Diagnostic", "Position", "Range", "Severity"]
