"""
Diagnostic result models, shaped after the editor protocol's diagnostics.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, List

from ..constants import DIAGNOSTIC_SOURCE


class Severity(IntEnum):
    ERROR = 1
    WARNING = 2
    INFORMATION = 3
    HINT = 4


@dataclass(frozen=True)
class Position:
    line: int  # 0-based
    character: int  # 0-based, in code points

    def to_dict(self) -> Dict[str, int]:
        return {"line": self.line, "character": self.character}


@dataclass(frozen=True)
class Range:
    start: Position
    end: Position

    def to_dict(self) -> Dict[str, Any]:
        return {"start": self.start.to_dict(), "end": self.end.to_dict()}


@dataclass
class Diagnostic:
    """One reported problem at a source range."""

    message: str
    range: Range
    severity: Severity = Severity.ERROR
    source: str = DIAGNOSTIC_SOURCE
    mismatches: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "range": self.range.to_dict(),
            "severity": int(self.severity),
            "source": self.source,
        }
