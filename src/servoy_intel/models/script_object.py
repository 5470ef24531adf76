"""
ScriptObject model: a named namespace offered for top-level completion.
"""

from dataclasses import dataclass, field, replace
from typing import List

from .declarations import Function, Variable


@dataclass
class ScriptObject:
    """A platform service object or the project's merged globals object."""

    name: str
    functions: List[Function] = field(default_factory=list)
    constants: List[Variable] = field(default_factory=list)
    properties: List[Variable] = field(default_factory=list)
    description: str = ""

    def overloads(self, function_name: str) -> List[Function]:
        """All stored signatures named `function_name`, in stored order."""
        return [f for f in self.functions if f.name == function_name]

    def function_names(self) -> List[str]:
        """Distinct function names in first-seen order."""
        return list(dict.fromkeys(f.name for f in self.functions))

    def with_members(self, functions: List[Function], properties: List[Variable]) -> "ScriptObject":
        return replace(self, functions=list(functions), properties=list(properties))
