"""
Unit dependency graph.

Each unit maps to the units visible from it: itself plus its declared
references. Visibility is direct only; `resolve_transitive` computes the
full closure but no public query uses it.
"""

from typing import Dict, Iterable, List, Mapping, Set, Tuple

from ..models import SolutionInfo

DependencyGraph = Dict[str, Tuple[str, ...]]


def direct_references(solution: SolutionInfo) -> Tuple[str, ...]:
    """The unit itself followed by its distinct declared references."""
    seen = [solution.name]
    for ref in solution.references:
        if ref not in seen:
            seen.append(ref)
    return tuple(seen)


def build_dependency_graph(solutions: Iterable[SolutionInfo]) -> DependencyGraph:
    return {solution.name: direct_references(solution) for solution in solutions}


def resolve_transitive(graph: Mapping[str, Iterable[str]], entry: str) -> Set[str]:
    """
    Every unit reachable from `entry`, excluding `entry` itself.

    Depth-first with a visited set, so cycles terminate.
    """
    visited: Set[str] = set()
    stack: List[str] = [entry]

    while stack:
        current = stack.pop()
        if current in visited:
            continue
        visited.add(current)
        for ref in graph.get(current, ()):
            if ref not in visited:
                stack.append(ref)

    visited.discard(entry)
    return visited
