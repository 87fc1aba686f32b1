"""
Flood propagation over a world map.

This module implements three interchangeable traversal strategies:
- Breadth-first flooding with a FIFO queue
- Depth-first flooding with an explicit stack
- Depth-first flooding with recursion

All strategies flood exactly the cells reachable from a water source through
4-connected cells at or below the flood threshold. They differ only in the
order cells are marked, which is what the intermediate frames show.
"""

import sys
import time
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Deque, List, Optional, Set, Union

import structlog

from ..config import Settings, settings as default_settings
from .exceptions import ConfigurationError
from .flood_state import FloodState
from .grid import GridPoint
from .world_map import WorldMap

logger = structlog.get_logger()

# Frame sinks read the state and the map; they must not modify either
FrameSink = Callable[[FloodState, WorldMap], None]

# Frames for helpers and sinks called from the deepest recursive visit
_RECURSION_HEADROOM = 100


class Strategy(str, Enum):
    """Traversal strategy identifiers."""

    BREADTH_FIRST = "breadth-first"
    DEPTH_FIRST_STACK = "depth-first-stack"
    DEPTH_FIRST_RECURSIVE = "depth-first-recursive"

    @classmethod
    def parse(cls, value: Union["Strategy", str]) -> "Strategy":
        """
        Resolve a strategy from its identifier or short alias.

        Accepts "breadth-first", "depth-first-stack", "depth-first-recursive"
        and the aliases "queue", "stack" and "recursive", ignoring case.

        Raises:
            ConfigurationError: If the identifier is not recognized
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        if key in STRATEGY_ALIASES:
            return STRATEGY_ALIASES[key]
        try:
            return cls(key)
        except ValueError:
            valid = ", ".join([s.value for s in cls] + list(STRATEGY_ALIASES))
            raise ConfigurationError(
                f"Invalid algorithm: {value!r}. Valid algorithms are: {valid}"
            ) from None


STRATEGY_ALIASES = {
    "queue": Strategy.BREADTH_FIRST,
    "stack": Strategy.DEPTH_FIRST_STACK,
    "recursive": Strategy.DEPTH_FIRST_RECURSIVE,
}


@dataclass
class SimulationResult:
    """Outcome of one simulation run."""

    strategy: Strategy
    state: FloodState
    visit_order: List[GridPoint] = field(default_factory=list)
    frames: int = 0

    @property
    def flooded_count(self) -> int:
        return self.state.flooded_count

    def flooded_points(self) -> Set[GridPoint]:
        return self.state.flooded_points()


class FloodSimulation:
    """
    A single flood simulation run.

    Owns the flood state and the traversal bookkeeping for one run over a
    world map. Build a new instance for every run.
    """

    def __init__(
        self,
        world: WorldMap,
        strategy: Union[Strategy, str],
        visualize: bool = False,
        sink: Optional[FrameSink] = None,
        frame_delay: float = 0.0,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize a simulation run.

        Args:
            world: Map to flood
            strategy: Strategy enum member, identifier or alias
            visualize: Emit a frame after every newly flooded cell
            sink: Called with (state, world) for every frame
            frame_delay: Seconds to sleep after each frame
            settings: Settings overriding the module defaults

        Raises:
            ConfigurationError: For a missing map, unknown strategy or
                negative frame delay
        """
        if world is None:
            raise ConfigurationError("A world map is required")
        if frame_delay < 0:
            raise ConfigurationError(f"Frame delay must not be negative, got {frame_delay}")

        self.world = world
        self.strategy = Strategy.parse(strategy)
        self.visualize = bool(visualize)
        self.sink = sink
        self.frame_delay = frame_delay
        self.settings = settings or default_settings

        self.state = FloodState.for_map(world)
        self.visit_order: List[GridPoint] = []
        self.frames = 0
        self._finished = False

    def run(self) -> SimulationResult:
        """
        Flood the map with the selected strategy.

        A frame is emitted before and after the run regardless of the
        visualize flag.

        Raises:
            ConfigurationError: If this simulation has already run, or the
                recursive strategy is chosen for a map with more floodable
                cells than the configured recursion budget
        """
        if self._finished:
            raise ConfigurationError("This simulation has already run; create a new one")
        if self.strategy is Strategy.DEPTH_FIRST_RECURSIVE:
            self._check_recursion_budget()
        self._finished = True

        logger.info(
            "Starting flood simulation",
            strategy=self.strategy.value,
            rows=self.world.rows,
            cols=self.world.cols,
            threshold=self.world.threshold,
            sources=len(self.world.water_sources),
        )

        self._emit_frame()

        if self.strategy is Strategy.BREADTH_FIRST:
            self._flood_with_queue()
        elif self.strategy is Strategy.DEPTH_FIRST_STACK:
            self._flood_with_stack()
        else:
            self._flood_recursive()

        self._emit_frame()

        logger.info(
            "Flood simulation complete",
            strategy=self.strategy.value,
            flooded=self.state.flooded_count,
            frames=self.frames,
        )

        return SimulationResult(
            strategy=self.strategy,
            state=self.state,
            visit_order=self.visit_order,
            frames=self.frames,
        )

    def _emit_frame(self):
        self.frames += 1
        if self.sink is not None:
            self.sink(self.state, self.world)
        if self.frame_delay > 0:
            time.sleep(self.frame_delay)

    def _flood(self, point: GridPoint):
        """Mark a dry floodable cell and emit a frame if animating."""
        self.state.mark_flooded(point)
        self.visit_order.append(point)
        if self.visualize:
            self._emit_frame()

    def _can_enter(self, point: GridPoint) -> bool:
        return self.world.is_floodable(point) and not self.state.is_flooded(point)

    def _flood_with_queue(self):
        self._flood_frontier(deque.popleft)

    def _flood_with_stack(self):
        self._flood_frontier(deque.pop)

    def _flood_frontier(self, take: Callable[[Deque[GridPoint]], GridPoint]):
        """
        Shared worklist loop for the queue and stack strategies.

        Water sources are seeded unconditionally. Neighbors are pushed only
        when they are floodable, so the worklist never holds points off the
        map. The same point may be pushed from several directions; the
        flooded check on removal drops the repeats.

        Args:
            take: deque.popleft for FIFO order, deque.pop for LIFO order
        """
        frontier: Deque[GridPoint] = deque(self.world.water_sources)

        while frontier:
            point = take(frontier)
            if self.state.is_flooded(point):
                continue

            if self.world.is_floodable(point):
                self._flood(point)
            else:
                logger.debug("Water source above threshold", point=str(point))

            for neighbor in point.neighbors():
                if self._can_enter(neighbor):
                    frontier.append(neighbor)

    def _check_recursion_budget(self):
        floodable = self.world.floodable_count()
        if floodable > self.settings.max_recursion_depth:
            raise ConfigurationError(
                f"Map has {floodable} floodable cells, more than the recursion budget of "
                f"{self.settings.max_recursion_depth}; use the depth-first-stack strategy"
            )

    def _flood_recursive(self):
        """
        Recursive depth-first flooding.

        Recursion depth grows with the size of the flooded region, so the
        interpreter limit is raised to cover every floodable cell for the
        duration of the run.
        """
        previous_limit = sys.getrecursionlimit()
        needed = self.world.floodable_count() + _RECURSION_HEADROOM + _call_depth()
        if needed > previous_limit:
            sys.setrecursionlimit(needed)
        try:
            for source in self.world.water_sources:
                if self.world.is_floodable(source):
                    self._visit(source)
                else:
                    # Sources seed the flood even when they stay dry themselves
                    logger.debug("Water source above threshold", point=str(source))
                    for neighbor in source.neighbors():
                        self._visit(neighbor)
        finally:
            sys.setrecursionlimit(previous_limit)

    def _visit(self, point: GridPoint):
        if not self._can_enter(point):
            return
        self._flood(point)
        self._visit(point.up())
        self._visit(point.down())
        self._visit(point.left())
        self._visit(point.right())


def _call_depth() -> int:
    """Number of frames currently on the Python call stack."""
    depth = 0
    frame = sys._getframe()
    while frame is not None:
        depth += 1
        frame = frame.f_back
    return depth


def simulate(
    world: WorldMap,
    strategy: Union[Strategy, str] = Strategy.BREADTH_FIRST,
    visualize: bool = False,
    sink: Optional[FrameSink] = None,
    frame_delay: float = 0.0,
    settings: Optional[Settings] = None,
) -> SimulationResult:
    """Run one flood simulation and return its result."""
    simulation = FloodSimulation(
        world,
        strategy,
        visualize=visualize,
        sink=sink,
        frame_delay=frame_delay,
        settings=settings,
    )
    return simulation.run()
