"""Flooded/dry state of every cell in a simulation run."""

import numpy as np
from typing import Set, Tuple

from .exceptions import OutOfBoundsError
from .grid import GridPoint


class FloodState:
    """
    Dense boolean grid tracking which cells are under water.

    Cells only ever go from dry to flooded. Marking a flooded cell again
    changes nothing.
    """

    def __init__(self, rows: int, cols: int):
        self._flooded = np.zeros((rows, cols), dtype=bool)

    @classmethod
    def for_map(cls, world) -> "FloodState":
        """Create an all-dry state matching a world map's dimensions."""
        rows, cols = world.dimensions
        return cls(rows, cols)

    @property
    def dimensions(self) -> Tuple[int, int]:
        return self._flooded.shape

    def _check(self, point: GridPoint):
        rows, cols = self._flooded.shape
        if not (0 <= point[0] < rows and 0 <= point[1] < cols):
            raise OutOfBoundsError(point, self._flooded.shape)

    def is_flooded(self, point: GridPoint) -> bool:
        self._check(point)
        return bool(self._flooded[point[0], point[1]])

    def mark_flooded(self, point: GridPoint) -> bool:
        """
        Mark a cell as flooded.

        Returns:
            True if the cell was dry before this call, False if it was
            already flooded
        """
        self._check(point)
        if self._flooded[point[0], point[1]]:
            return False
        self._flooded[point[0], point[1]] = True
        return True

    @property
    def flooded_count(self) -> int:
        return int(np.count_nonzero(self._flooded))

    def flooded_points(self) -> Set[GridPoint]:
        return {GridPoint(int(r), int(c)) for r, c in np.argwhere(self._flooded)}

    def as_array(self) -> np.ndarray:
        """Read-only copy of the flooded grid."""
        snapshot = self._flooded.copy()
        snapshot.setflags(write=False)
        return snapshot

    def __eq__(self, other) -> bool:
        if not isinstance(other, FloodState):
            return NotImplemented
        return np.array_equal(self._flooded, other._flooded)

    __hash__ = None

    def __repr__(self) -> str:
        rows, cols = self._flooded.shape
        return f"FloodState({rows}x{cols}, flooded={self.flooded_count})"
