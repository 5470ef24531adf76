"""
TypeInfo model for representing resolved script types.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class TypeInfo:
    """A normalized type as seen by completion, hover and diagnostics."""

    name: str  # base type identifier (string, number, JSFoundset, ...)
    optional: bool = False
    is_array: bool = False
    array_depth: int = 0
    generic_args: Tuple["TypeInfo", ...] = field(default_factory=tuple)
    db_table_ref: Optional[str] = None  # "server/table" from a db:/ generic argument

    def __post_init__(self):
        if self.array_depth < 0:
            raise ValueError(f"array_depth must be >= 0, got {self.array_depth}")
        if self.is_array and self.array_depth < 1:
            object.__setattr__(self, "array_depth", 1)
        if not isinstance(self.generic_args, tuple):
            object.__setattr__(self, "generic_args", tuple(self.generic_args))

    def with_optional(self, optional: bool = True) -> "TypeInfo":
        return TypeInfo(self.name, optional, self.is_array, self.array_depth,
                        self.generic_args, self.db_table_ref)

    def as_array(self, extra_depth: int = 1) -> "TypeInfo":
        """Wrap this type in `extra_depth` more array levels."""
        return TypeInfo(self.name, self.optional, True, self.array_depth + extra_depth,
                        self.generic_args, self.db_table_ref)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name}
        if self.optional:
            data["optional"] = True
        if self.is_array:
            data["isArray"] = True
            data["arrayDepth"] = self.array_depth
        if self.generic_args:
            data["genericArgs"] = [arg.to_dict() for arg in self.generic_args]
        if self.db_table_ref is not None:
            data["dbTableRef"] = self.db_table_ref
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TypeInfo":
        return cls(
            name=data["name"],
            optional=bool(data.get("optional", False)),
            is_array=bool(data.get("isArray", False)),
            array_depth=int(data.get("arrayDepth", 0)),
            generic_args=tuple(cls.from_dict(arg) for arg in data.get("genericArgs", [])),
            db_table_ref=data.get("dbTableRef"),
        )


ANY = TypeInfo("any")
UNKNOWN = TypeInfo("unknown")
VOID = TypeInfo("void")
NULL = TypeInfo("null")
