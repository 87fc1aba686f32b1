"""
World map: the elevation surface a flood runs over.

This module holds:
- The elevation grid and flood threshold
- The list of water sources seeding the flood
- Bounds and threshold predicates used by the propagation engine
- Summary statistics for reporting
"""

import numpy as np
from typing import Iterable, Optional, Sequence, Tuple
from dataclasses import dataclass

from .exceptions import ConfigurationError, OutOfBoundsError
from .grid import GridPoint


@dataclass(frozen=True)
class MapStatistics:
    """Summary of a world map."""

    rows: int
    cols: int
    min_elevation: float
    max_elevation: float
    mean_elevation: float
    threshold: float
    floodable_cells: int
    water_sources: int

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols


class WorldMap:
    """
    Read-only elevation grid with a flood threshold and water sources.

    A cell is submersible when its elevation is at or below the threshold.
    Dimensions never change once the map is built.
    """

    def __init__(
        self,
        elevations,
        threshold: float,
        water_sources: Optional[Iterable[Sequence[int]]] = None,
    ):
        """
        Build a world map.

        Args:
            elevations: 2D array-like of elevation values
            threshold: Flood threshold; cells at or below it can flood
            water_sources: (row, col) pairs where water starts

        Raises:
            ConfigurationError: If the grid is empty or not rectangular, or a
                water source lies outside the grid
        """
        try:
            grid = np.array(elevations, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Elevations must be a rectangular numeric grid: {e}") from e

        if grid.ndim != 2 or grid.size == 0:
            raise ConfigurationError(
                f"Elevations must be a non-empty 2D grid, got shape {grid.shape}"
            )
        if not np.all(np.isfinite(grid)):
            raise ConfigurationError("Elevations must be finite numbers")

        grid.setflags(write=False)
        self._elevations = grid
        self.threshold = float(threshold)

        sources = []
        for source in water_sources or ():
            point = GridPoint(int(source[0]), int(source[1]))
            if not self.contains(point):
                raise ConfigurationError(
                    f"Water source {point} is outside the {self.rows}x{self.cols} map"
                )
            sources.append(point)
        self._water_sources = tuple(sources)

    @property
    def rows(self) -> int:
        return self._elevations.shape[0]

    @property
    def cols(self) -> int:
        return self._elevations.shape[1]

    @property
    def dimensions(self) -> Tuple[int, int]:
        return self._elevations.shape

    @property
    def elevations(self) -> np.ndarray:
        """Read-only view of the elevation grid."""
        return self._elevations

    @property
    def water_sources(self) -> Tuple[GridPoint, ...]:
        return self._water_sources

    @property
    def min_elevation(self) -> float:
        return float(self._elevations.min())

    @property
    def max_elevation(self) -> float:
        return float(self._elevations.max())

    def contains(self, point: GridPoint) -> bool:
        """Check if a point is on the map. Negative indices never wrap."""
        return 0 <= point[0] < self.rows and 0 <= point[1] < self.cols

    def elevation(self, point: GridPoint) -> float:
        """Elevation at a point; raises OutOfBoundsError off the map."""
        if not self.contains(point):
            raise OutOfBoundsError(point, self.dimensions)
        return float(self._elevations[point[0], point[1]])

    def is_above_threshold(self, point: GridPoint) -> bool:
        """Check if a point is too high to flood; raises OutOfBoundsError off the map."""
        return self.elevation(point) > self.threshold

    def is_floodable(self, point: GridPoint) -> bool:
        """On the map and at or below the flood threshold. Never raises."""
        return self.contains(point) and bool(self._elevations[point[0], point[1]] <= self.threshold)

    def floodable_mask(self) -> np.ndarray:
        """Boolean grid of cells at or below the threshold."""
        return self._elevations <= self.threshold

    def floodable_count(self) -> int:
        return int(np.count_nonzero(self.floodable_mask()))

    def statistics(self) -> MapStatistics:
        return MapStatistics(
            rows=self.rows,
            cols=self.cols,
            min_elevation=self.min_elevation,
            max_elevation=self.max_elevation,
            mean_elevation=float(self._elevations.mean()),
            threshold=self.threshold,
            floodable_cells=self.floodable_count(),
            water_sources=len(self._water_sources),
        )

    def __repr__(self) -> str:
        return (
            f"WorldMap(rows={self.rows}, cols={self.cols}, "
            f"threshold={self.threshold}, sources={len(self._water_sources)})"
        )
