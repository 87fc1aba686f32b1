"""
Core flood simulation functionality.
"""

from .exceptions import FloodSimError, OutOfBoundsError, ConfigurationError, MapFormatError
from .grid import GridPoint
from .world_map import WorldMap, MapStatistics
from .flood_state import FloodState
from .propagation import FloodSimulation, SimulationResult, Strategy, simulate
from .map_loader import load_world_map

__all__ = ['FloodSimError', 'OutOfBoundsError', 'ConfigurationError', 'MapFormatError',
           'GridPoint', 'WorldMap', 'MapStatistics', 'FloodState',
           'FloodSimulation', 'SimulationResult', 'Strategy', 'simulate',
           'load_world_map']
