"""
SolutionInfo model for a deployable project unit.
"""

from dataclasses import dataclass
from typing import NamedTuple, Tuple


@dataclass(frozen=True)
class SolutionInfo:
    """A unit discovered from its settings file."""

    path: str  # unit root directory
    settings_path: str
    name: str
    uuid: str
    references: Tuple[str, ...] = ()  # declared dependency names


class ModuleRef(NamedTuple):
    """A script module visible from some unit."""

    module_name: str
    origin_unit: str
