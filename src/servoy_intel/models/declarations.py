"""
Declaration models produced by the extraction pipeline and the platform catalog.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .type_info import TypeInfo, UNKNOWN, VOID


@dataclass
class SourceLocation:
    """Where a declaration starts (1-based line, 0-based column)."""

    file_path: str
    line: int
    column: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"filePath": self.file_path, "line": self.line, "column": self.column}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SourceLocation":
        return cls(data["filePath"], int(data["line"]), int(data.get("column", 0)))


def _location_to_dict(location: Optional[SourceLocation]) -> Optional[Dict[str, Any]]:
    return location.to_dict() if location else None


def _location_from_dict(data: Optional[Dict[str, Any]]) -> Optional[SourceLocation]:
    return SourceLocation.from_dict(data) if data else None


@dataclass
class Param:
    """A function or constructor parameter."""

    name: str
    type: TypeInfo = UNKNOWN
    description: str = ""
    optional: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type.to_dict(),
            "description": self.description,
            "optional": self.optional,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Param":
        return cls(
            name=data["name"],
            type=TypeInfo.from_dict(data["type"]),
            description=data.get("description", ""),
            optional=bool(data.get("optional", False)),
        )


@dataclass
class Function:
    """A callable signature; several may share a name (overloads)."""

    name: str
    params: List[Param] = field(default_factory=list)
    returns: TypeInfo = VOID
    description: str = ""
    location: Optional[SourceLocation] = None

    @property
    def required_count(self) -> int:
        """Number of parameters left after dropping trailing optional ones."""
        count = len(self.params)
        while count > 0 and self.params[count - 1].optional:
            count -= 1
        return count

    def same_signature(self, other: "Function") -> bool:
        return (
            self.name == other.name
            and self.returns == other.returns
            and [p.to_dict() for p in self.params] == [p.to_dict() for p in other.params]
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "params": [p.to_dict() for p in self.params],
            "returns": self.returns.to_dict(),
            "description": self.description,
            "location": _location_to_dict(self.location),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Function":
        return cls(
            name=data["name"],
            params=[Param.from_dict(p) for p in data.get("params", [])],
            returns=TypeInfo.from_dict(data["returns"]),
            description=data.get("description", ""),
            location=_location_from_dict(data.get("location")),
        )


@dataclass
class Variable:
    """A variable, constant or property."""

    name: str
    type: TypeInfo = UNKNOWN
    description: str = ""
    deprecated: Optional[str] = None
    location: Optional[SourceLocation] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type.to_dict(),
            "description": self.description,
            "deprecated": self.deprecated,
            "location": _location_to_dict(self.location),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Variable":
        return cls(
            name=data["name"],
            type=TypeInfo.from_dict(data["type"]),
            description=data.get("description", ""),
            deprecated=data.get("deprecated"),
            location=_location_from_dict(data.get("location")),
        )


@dataclass
class Class:
    """A constructor-style class: a function whose body assigns to `this.<name>`."""

    name: str
    description: str = ""
    params: List[Param] = field(default_factory=list)
    methods: List[Function] = field(default_factory=list)
    variables: List[Variable] = field(default_factory=list)
    extends: Optional[str] = None
    location: Optional[SourceLocation] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "params": [p.to_dict() for p in self.params],
            "methods": [m.to_dict() for m in self.methods],
            "variables": [v.to_dict() for v in self.variables],
            "extends": self.extends,
            "location": _location_to_dict(self.location),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Class":
        return cls(
            name=data["name"],
            description=data.get("description", ""),
            params=[Param.from_dict(p) for p in data.get("params", [])],
            methods=[Function.from_dict(m) for m in data.get("methods", [])],
            variables=[Variable.from_dict(v) for v in data.get("variables", [])],
            extends=data.get("extends"),
            location=_location_from_dict(data.get("location")),
        )


@dataclass
class ExtractionResult:
    """Everything extracted from one script file."""

    functions: List[Function] = field(default_factory=list)
    variables: List[Variable] = field(default_factory=list)
    classes: List[Class] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "functions": [f.to_dict() for f in self.functions],
            "variables": [v.to_dict() for v in self.variables],
            "classes": [c.to_dict() for c in self.classes],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExtractionResult":
        return cls(
            functions=[Function.from_dict(f) for f in data.get("functions", [])],
            variables=[Variable.from_dict(v) for v in data.get("variables", [])],
            classes=[Class.from_dict(c) for c in data.get("classes", [])],
        )
