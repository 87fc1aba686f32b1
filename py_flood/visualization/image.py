"""Raster image of a flood state."""

from pathlib import Path
from typing import Union

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import structlog

from ..core.flood_state import FloodState
from ..core.world_map import WorldMap

logger = structlog.get_logger()


def save_flood_image(
    state: FloodState, world: WorldMap, path: Union[str, Path], dpi: int = 100
) -> Path:
    """
    Save the map as a PNG: terrain colors for elevation, flooded cells in blue.

    Args:
        state: Flood state to draw
        world: Map the state belongs to
        path: Output image path
        dpi: Output resolution

    Returns:
        Path of the written image
    """
    path = Path(path)
    flooded = state.as_array()

    fig, ax = plt.subplots(figsize=(max(4, world.cols / 10), max(4, world.rows / 10)))
    try:
        terrain = ax.imshow(world.elevations, cmap="terrain", interpolation="nearest")
        water = np.ma.masked_where(~flooded, np.ones(flooded.shape))
        ax.imshow(water, cmap="Blues", vmin=0, vmax=1.2, alpha=0.85, interpolation="nearest")

        fig.colorbar(terrain, ax=ax, label="Elevation")
        ax.set_title(f"Flooded {state.flooded_count} of {world.rows * world.cols} cells")
        ax.set_xticks([])
        ax.set_yticks([])

        fig.savefig(path, dpi=dpi, bbox_inches="tight")
    finally:
        plt.close(fig)

    logger.info("Flood image saved", path=str(path), flooded=state.flooded_count)
    return path
