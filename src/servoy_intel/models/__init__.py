"""
Model classes shared by the type system, extraction, index and diagnostics.
"""

from .declarations import Class, ExtractionResult, Function, Param, SourceLocation, Variable
from .script_object import ScriptObject
from .solution import ModuleRef, SolutionInfo
from .type_info import ANY, NULL, UNKNOWN, VOID, TypeInfo

__all__ = [
    "TypeInfo",
    "ANY",
    "NULL",
    "UNKNOWN",
    "VOID",
    "Param",
    "Function",
    "Variable",
    "Class",
    "SourceLocation",
    "ExtractionResult",
    "ScriptObject",
    "SolutionInfo",
    "ModuleRef",
]
