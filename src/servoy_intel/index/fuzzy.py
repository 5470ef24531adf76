"""
Fuzzy name matching for completion and object search.
"""

from typing import List, Sequence


def levenshtein_distance(source: str, target: str) -> int:
    """Classic edit distance (single-character insert, delete, substitute)."""
    if len(source) < len(target):
        source, target = target, source
    previous = list(range(len(target) + 1))
    for i, source_char in enumerate(source, start=1):
        current = [i]
        for j, target_char in enumerate(target, start=1):
            current.append(min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + (source_char != target_char),
            ))
        previous = current
    return previous[-1]


def fuzzy_search(candidates: Sequence[str], partial: str) -> List[str]:
    """
    Filter and rank candidates against a partially typed name.

    A candidate is kept when its case-insensitive edit distance to `partial`
    is at most ``max(2, len(partial) // 3)`` or when it starts with `partial`
    (case-insensitive). Prefix matches come first, then smaller distance,
    then shorter names; original order breaks remaining ties.
    """
    partial = partial.lower()
    tolerance = max(2, len(partial) // 3)

    ranked = []
    for position, name in enumerate(candidates):
        lower = name.lower()
        distance = levenshtein_distance(partial, lower)
        is_prefix = lower.startswith(partial)
        if distance <= tolerance or is_prefix:
            ranked.append((0 if is_prefix else 1, distance, len(name), position, name))

    ranked.sort()
    return [entry[-1] for entry in ranked]
