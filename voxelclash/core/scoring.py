"""
Scoring engine.

Each member of a cluster of size k >= 3 adds the cluster value
``10 + 5*(k-3)``, so the cluster as a whole is worth ``k * (10 + 5*(k-3))``.
Scores are always recomputed from the full owned set, never incrementally.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, FrozenSet

from voxelclash.core.connectivity import connected_group
from voxelclash.core.constants import CLUSTER_BASE_POINTS, CLUSTER_STEP_POINTS, MIN_CLUSTER_SIZE


@dataclass(frozen=True)
class ScoreBreakdown:
    """Score of one side plus the cells that are part of a scoring cluster."""

    score: int
    combo_cells: FrozenSet[int]


def cluster_value(size: int) -> int:
    if size < MIN_CLUSTER_SIZE:
        return 0
    return CLUSTER_BASE_POINTS + CLUSTER_STEP_POINTS * (size - MIN_CLUSTER_SIZE)


def evaluate(owned: AbstractSet[int]) -> ScoreBreakdown:
    score = 0
    combo: set[int] = set()
    for index in owned:
        group = connected_group(index, owned)
        if len(group) >= MIN_CLUSTER_SIZE:
            score += cluster_value(len(group))
            combo |= group
    return ScoreBreakdown(score=score, combo_cells=frozenset(combo))


def compute_score(owned: AbstractSet[int]) -> int:
    """Score for one side's owned cells (0 for an empty set)."""
    return evaluate(owned).score


def combo_cells(owned: AbstractSet[int]) -> FrozenSet[int]:
    """Cells belonging to any cluster of size >= 3."""
    return evaluate(owned).combo_cells
