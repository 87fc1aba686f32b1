"""Exceptions raised by the flood simulation."""


class FloodSimError(Exception):
    """Base class for all py_flood errors."""


class OutOfBoundsError(FloodSimError, IndexError):
    """A grid point lies outside the map.

    This is the normal signal for "this neighbor does not exist". The
    propagation engine never lets it escape.
    """

    def __init__(self, point, dimensions):
        self.point = point
        self.dimensions = dimensions
        super().__init__(f"Point {tuple(point)} is not on a {dimensions[0]}x{dimensions[1]} map")


class ConfigurationError(FloodSimError, ValueError):
    """Invalid run parameters, reported before any propagation starts."""


class MapFormatError(ConfigurationError):
    """A map file could not be read or is malformed."""
