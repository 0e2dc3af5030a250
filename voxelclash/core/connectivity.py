"""Connected-component analysis over same-side cells (6-connectivity)."""

from __future__ import annotations

from typing import AbstractSet, FrozenSet, List

from voxelclash.core.grid import NEIGHBORS, check_index


def connected_group(seed: int, owned: AbstractSet[int]) -> FrozenSet[int]:
    """Maximal set reachable from ``seed`` through neighbors in ``owned``.

    The seed is always part of the result, even when it is not in ``owned``.
    Callers testing a hypothetical claim should pass ``owned | {seed}``.

    Args:
        seed: Starting cell index
        owned: Cells currently held by one side

    Returns:
        The connected group as a frozenset of indices
    """
    check_index(seed)
    group = {seed}
    stack = [seed]
    while stack:
        current = stack.pop()
        for n in NEIGHBORS[current]:
            if n in owned and n not in group:
                group.add(n)
                stack.append(n)
    return frozenset(group)


def clusters(owned: AbstractSet[int]) -> List[FrozenSet[int]]:
    """Partition ``owned`` into maximal clusters, ordered by smallest index."""
    seen: set[int] = set()
    result = []
    for index in sorted(owned):
        if index in seen:
            continue
        group = connected_group(index, owned)
        seen |= group
        result.append(group)
    return result
