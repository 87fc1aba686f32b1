"""
Text renderings of a flood state.

Renderers take (state, world) and return the frame as a string; they never
modify either argument.
"""

import sys
from typing import Callable, Dict, Optional, TextIO

from ..core.flood_state import FloodState
from ..core.world_map import WorldMap

Renderer = Callable[[FloodState, WorldMap], str]

CLEAR_SCREEN_LINES = 50

SHADES = ("░░", "▒▒", "▓▓", "██")


def render_basic(state: FloodState, world: WorldMap) -> str:
    """Flooded cells shaded, dry cells as elevations truncated to integers."""
    flooded = state.as_array()
    lines = []
    for r in range(world.rows):
        cells = []
        for c in range(world.cols):
            if flooded[r, c]:
                cells.append("░░ ")
            else:
                cells.append(f"{world.elevations[r, c]:2.0f} ")
        lines.append("".join(cells))
    return "\n".join(lines) + "\n"


def render_values(state: FloodState, world: WorldMap) -> str:
    """Flooded cells as XXX, dry cells with one decimal place."""
    flooded = state.as_array()
    lines = []
    for r in range(world.rows):
        cells = []
        for c in range(world.cols):
            if flooded[r, c]:
                cells.append(" XXX ")
            else:
                cells.append(f" {world.elevations[r, c]:3.1f} ")
        lines.append("".join(cells))
    return "\n".join(lines) + "\n"


def shade(elevation: float, low: float, quarter_range: float) -> str:
    """Shade for an elevation by quartile of the map's elevation range."""
    if elevation < low + quarter_range:
        return SHADES[0]
    elif elevation < low + 2 * quarter_range:
        return SHADES[1]
    elif elevation < low + 3 * quarter_range:
        return SHADES[2]
    return SHADES[3]


def render_shade(state: FloodState, world: WorldMap) -> str:
    """
    Boxed map with dry cells shaded by elevation quartile.

    Flooded cells are blank. On a flat map every dry cell gets the highest
    shade.
    """
    low = world.min_elevation
    quarter_range = (world.max_elevation - low) / 4
    flooded = state.as_array()

    lines = ["╔" + "══" * world.cols + "╗"]
    for r in range(world.rows):
        cells = []
        for c in range(world.cols):
            if flooded[r, c]:
                cells.append("  ")
            else:
                cells.append(shade(world.elevations[r, c], low, quarter_range))
        lines.append("║" + "".join(cells) + "║")
    lines.append("╚" + "══" * world.cols + "╝")
    return "\n".join(lines) + "\n"


RENDERERS: Dict[str, Renderer] = {
    "basic": render_basic,
    "values": render_values,
    "shade": render_shade,
}


class ConsoleSink:
    """Frame sink writing rendered frames to a text stream."""

    def __init__(self, renderer: Renderer = render_shade, stream: Optional[TextIO] = None, clear_screen: bool = False):
        self.renderer = renderer
        self.stream = stream if stream is not None else sys.stdout
        self.clear_screen = clear_screen

    def __call__(self, state: FloodState, world: WorldMap) -> None:
        if self.clear_screen:
            self.stream.write("\n" * CLEAR_SCREEN_LINES)
        self.stream.write(self.renderer(state, world))
        self.stream.flush()
