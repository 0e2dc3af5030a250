"""Grid occupancy model for the 3x3x3 voxel board.

Cells are addressed by an index in [0, 26] with ``index = x*9 + y*3 + z``.
Ownership is write-once per cell for the lifetime of a playthrough; only the
turn controller resets the grid between games.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet, List, Tuple

from voxelclash.core.constants import CELL_COUNT, GRID_SIZE, NEIGHBOR_OFFSETS, Owner
from voxelclash.core.errors import InvalidIndexError

Coords = Tuple[int, int, int]


class ClaimStatus(Enum):
    OK = "OK"
    CELL_ALREADY_OCCUPIED = "CellAlreadyOccupied"


def is_valid_index(index: int) -> bool:
    return isinstance(index, int) and not isinstance(index, bool) and 0 <= index < CELL_COUNT


def check_index(index: int) -> int:
    """Return ``index`` unchanged or raise InvalidIndexError."""
    if not is_valid_index(index):
        raise InvalidIndexError(
            f"Cell index out of range: {index!r}",
            user_message="That cell does not exist.",
            context={"index": index, "cell_count": CELL_COUNT},
        )
    return index


def coords_to_index(x: int, y: int, z: int) -> int:
    for c in (x, y, z):
        if not (0 <= c < GRID_SIZE):
            raise InvalidIndexError(
                f"Coordinates out of range: ({x}, {y}, {z})",
                user_message="That cell does not exist.",
                context={"coords": (x, y, z)},
            )
    return x * GRID_SIZE * GRID_SIZE + y * GRID_SIZE + z


def index_to_coords(index: int) -> Coords:
    check_index(index)
    return index // (GRID_SIZE * GRID_SIZE), index % (GRID_SIZE * GRID_SIZE) // GRID_SIZE, index % GRID_SIZE


def _compute_neighbors(index: int) -> Tuple[int, ...]:
    x, y, z = index_to_coords(index)
    result = []
    for dx, dy, dz in NEIGHBOR_OFFSETS:
        nx, ny, nz = x + dx, y + dy, z + dz
        if 0 <= nx < GRID_SIZE and 0 <= ny < GRID_SIZE and 0 <= nz < GRID_SIZE:
            result.append(coords_to_index(nx, ny, nz))
    return tuple(result)


# Adjacency never changes, so it is computed once
NEIGHBORS: Tuple[Tuple[int, ...], ...] = tuple(_compute_neighbors(i) for i in range(CELL_COUNT))


def neighbors(index: int) -> Tuple[int, ...]:
    """Orthogonal neighbors of a cell (3 for corners up to 6 for the body center)."""
    return NEIGHBORS[check_index(index)]


class GridModel:
    """Cell ownership for one playthrough.

    Example:
        >>> grid = GridModel()
        >>> grid.claim(13, Owner.PLAYER)
        <ClaimStatus.OK: 'OK'>
        >>> grid.claim(13, Owner.COMPUTER)
        <ClaimStatus.CELL_ALREADY_OCCUPIED: 'CellAlreadyOccupied'>
    """

    def __init__(self) -> None:
        self._cells: List[Owner] = [Owner.UNCLAIMED] * CELL_COUNT

    def owner(self, index: int) -> Owner:
        return self._cells[check_index(index)]

    def is_unclaimed(self, index: int) -> bool:
        return self.owner(index) is Owner.UNCLAIMED

    def claim(self, index: int, side: Owner) -> ClaimStatus:
        """Occupy a cell for ``side``.

        Args:
            index: Cell index in [0, 26]
            side: Owner.PLAYER or Owner.COMPUTER

        Returns:
            ClaimStatus.OK, or CELL_ALREADY_OCCUPIED without any mutation

        Raises:
            InvalidIndexError: index outside the grid
            ValueError: side is Owner.UNCLAIMED
        """
        check_index(index)
        if side is Owner.UNCLAIMED:
            raise ValueError("Cannot claim a cell for UNCLAIMED")
        if self._cells[index] is not Owner.UNCLAIMED:
            return ClaimStatus.CELL_ALREADY_OCCUPIED
        self._cells[index] = side
        return ClaimStatus.OK

    def owned_by(self, side: Owner) -> FrozenSet[int]:
        return frozenset(i for i, owner in enumerate(self._cells) if owner is side)

    def unclaimed(self) -> List[int]:
        """Unclaimed cell indices in ascending order."""
        return [i for i, owner in enumerate(self._cells) if owner is Owner.UNCLAIMED]

    def claimed_count(self) -> int:
        return sum(1 for owner in self._cells if owner is not Owner.UNCLAIMED)

    def is_full(self) -> bool:
        return all(owner is not Owner.UNCLAIMED for owner in self._cells)

    def reset(self) -> None:
        self._cells = [Owner.UNCLAIMED] * CELL_COUNT

    def copy(self) -> GridModel:
        clone = GridModel()
        clone._cells = list(self._cells)
        return clone

    def as_dict(self) -> Dict[int, Owner]:
        return dict(enumerate(self._cells))

    def render_layers(self, marks: Dict[Owner, str] | None = None) -> str:
        """Plain-text view, one block per x layer with y rows and z columns."""
        marks = marks or {Owner.UNCLAIMED: ".", Owner.PLAYER: "P", Owner.COMPUTER: "C"}
        lines = []
        for x in range(GRID_SIZE):
            lines.append(f"Layer x={x}:")
            for y in range(GRID_SIZE):
                row = " ".join(marks[self._cells[coords_to_index(x, y, z)]] for z in range(GRID_SIZE))
                lines.append(f"  {row}")
        return "\n".join(lines)

    def __len__(self) -> int:
        return CELL_COUNT

    def __repr__(self) -> str:
        return f"GridModel(claimed={self.claimed_count()}/{CELL_COUNT})"
