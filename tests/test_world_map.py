"""Tests for the world map surface."""

import numpy as np
import pytest

from py_flood.core.exceptions import ConfigurationError, OutOfBoundsError
from py_flood.core.grid import GridPoint
from py_flood.core.world_map import WorldMap


@pytest.fixture
def world():
    elevations = [
        [1.0, 2.0, 9.0],
        [4.0, 5.0, 6.0],
    ]
    return WorldMap(elevations, threshold=5.0, water_sources=[(0, 0), (1, 2)])


class TestWorldMap:
    """Test the query contract used by the propagation engine."""

    def test_dimensions(self, world):
        assert world.dimensions == (2, 3)
        assert world.rows == 2
        assert world.cols == 3

    def test_elevation(self, world):
        assert world.elevation(GridPoint(0, 2)) == 9.0
        assert world.elevation(GridPoint(1, 1)) == 5.0

    def test_threshold_is_inclusive(self, world):
        assert world.is_above_threshold(GridPoint(1, 1)) is False
        assert world.is_above_threshold(GridPoint(1, 2)) is True

    @pytest.mark.parametrize("point", [(-1, 0), (0, -1), (2, 0), (0, 3), (5, 5)])
    def test_out_of_bounds(self, world, point):
        point = GridPoint(*point)
        assert world.contains(point) is False
        assert world.is_floodable(point) is False
        with pytest.raises(OutOfBoundsError):
            world.elevation(point)
        with pytest.raises(OutOfBoundsError):
            world.is_above_threshold(point)

    def test_out_of_bounds_is_index_error(self, world):
        with pytest.raises(IndexError):
            world.elevation(GridPoint(-1, -1))

    def test_is_floodable(self, world):
        assert world.is_floodable(GridPoint(0, 0)) is True
        assert world.is_floodable(GridPoint(1, 1)) is True
        assert world.is_floodable(GridPoint(0, 2)) is False

    def test_water_sources(self, world):
        assert world.water_sources == (GridPoint(0, 0), GridPoint(1, 2))

    def test_no_water_sources(self):
        world = WorldMap([[0]], threshold=0)
        assert world.water_sources == ()

    def test_min_max(self, world):
        assert world.min_elevation == 1.0
        assert world.max_elevation == 9.0

    def test_statistics(self, world):
        stats = world.statistics()
        assert stats.rows == 2
        assert stats.cols == 3
        assert stats.total_cells == 6
        assert stats.mean_elevation == pytest.approx(27.0 / 6)
        assert stats.floodable_cells == 4
        assert stats.water_sources == 2

    def test_elevations_read_only(self, world):
        with pytest.raises(ValueError):
            world.elevations[0, 0] = 100.0

    def test_input_array_is_copied(self):
        grid = np.zeros((2, 2))
        world = WorldMap(grid, threshold=0)
        grid[0, 0] = 50
        assert world.elevation(GridPoint(0, 0)) == 0.0


class TestWorldMapValidation:
    """Test rejection of malformed maps."""

    @pytest.mark.parametrize("elevations", [[], [[]], [1, 2, 3], [[[1]]]])
    def test_rejects_bad_shapes(self, elevations):
        with pytest.raises(ConfigurationError):
            WorldMap(elevations, threshold=1)

    def test_rejects_ragged_rows(self):
        with pytest.raises(ConfigurationError):
            WorldMap([[1, 2], [3]], threshold=1)

    def test_rejects_non_finite(self):
        with pytest.raises(ConfigurationError):
            WorldMap([[1, float("nan")]], threshold=1)

    @pytest.mark.parametrize("source", [(-1, 0), (0, 2), (2, 0)])
    def test_rejects_sources_off_map(self, source):
        with pytest.raises(ConfigurationError, match="outside"):
            WorldMap([[1, 2], [3, 4]], threshold=1, water_sources=[source])
