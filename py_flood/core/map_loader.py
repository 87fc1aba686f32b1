"""
Map file loading.

Two formats are supported:

JSON (``.json``)::

    {"threshold": 5, "elevations": [[1, 2], [3, 9]], "sources": [[0, 0]]}

Plain text (any other suffix): whitespace separated elevation rows, plus
``#`` directive lines for the flood threshold and the water sources::

    # threshold: 5
    # source: 0 0
    1 2
    3 9

Other lines starting with ``#`` are comments.
"""

import json
import re
from pathlib import Path
from typing import List, Tuple, Union

import numpy as np
import structlog
from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigurationError, MapFormatError
from .world_map import WorldMap

logger = structlog.get_logger()

_THRESHOLD_RE = re.compile(r"^#\s*threshold\s*:\s*(\S+)\s*$", re.IGNORECASE)
_SOURCE_RE = re.compile(r"^#\s*source\s*:(.*)$", re.IGNORECASE)
_SOURCE_ARGS_RE = re.compile(r"^\s*(-?\d+)[\s,]+(-?\d+)\s*$")


class MapDocument(BaseModel):
    """JSON map document."""

    threshold: float = Field(..., description="Flood threshold")
    elevations: List[List[float]] = Field(..., description="Elevation rows")
    sources: List[Tuple[int, int]] = Field(default_factory=list, description="Water sources")

    @field_validator("elevations")
    @classmethod
    def rectangular(cls, rows: List[List[float]]) -> List[List[float]]:
        if not rows or not rows[0]:
            raise ValueError("elevation grid is empty")
        width = len(rows[0])
        for i, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"row {i} has {len(row)} values, expected {width}")
        return rows


def load_world_map(path: Union[str, Path]) -> WorldMap:
    """
    Load a world map from a JSON or plain-text map file.

    Args:
        path: Map file path; ``.json`` files are read as JSON, anything else
            as plain text

    Returns:
        The loaded WorldMap

    Raises:
        MapFormatError: If the file is missing or malformed
    """
    path = Path(path)
    if not path.is_file():
        raise MapFormatError(f"File not found: {path}")

    logger.info("Loading map", path=str(path))

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MapFormatError(f"Cannot read {path}: {e}") from e

    if path.suffix.lower() == ".json":
        world = parse_json_map(text)
    else:
        world = parse_text_map(text)

    stats = world.statistics()
    logger.info(
        "Map loaded",
        rows=stats.rows,
        cols=stats.cols,
        min_elevation=stats.min_elevation,
        max_elevation=stats.max_elevation,
        threshold=stats.threshold,
        sources=stats.water_sources,
    )
    return world


def parse_json_map(text: str) -> WorldMap:
    try:
        document = MapDocument.model_validate(json.loads(text))
    except json.JSONDecodeError as e:
        raise MapFormatError(f"Invalid JSON map: {e}") from e
    except ValidationError as e:
        raise MapFormatError(f"Invalid map document: {e}") from e
    return _build(document.elevations, document.threshold, document.sources)


def parse_text_map(text: str) -> WorldMap:
    threshold = None
    sources = []
    data_lines = []

    for line_no, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue
        if not line.startswith("#"):
            data_lines.append(line)
            continue

        match = _THRESHOLD_RE.match(line)
        if match:
            if threshold is not None:
                raise MapFormatError(f"Line {line_no}: threshold given more than once")
            try:
                threshold = float(match.group(1))
            except ValueError:
                raise MapFormatError(
                    f"Line {line_no}: invalid threshold {match.group(1)!r}"
                ) from None
            continue

        match = _SOURCE_RE.match(line)
        if match:
            args = _SOURCE_ARGS_RE.match(match.group(1))
            if args is None:
                raise MapFormatError(
                    f"Line {line_no}: invalid source {match.group(1).strip()!r}, expected <row> <col>"
                )
            sources.append((int(args.group(1)), int(args.group(2))))

    if threshold is None:
        raise MapFormatError("Map file has no '# threshold: <value>' line")
    if not data_lines:
        raise MapFormatError("Map file has no elevation rows")

    try:
        elevations = np.loadtxt(data_lines, dtype=np.float64, ndmin=2)
    except ValueError as e:
        raise MapFormatError(f"Invalid elevation rows: {e}") from e

    return _build(elevations, threshold, sources)


def _build(elevations, threshold, sources) -> WorldMap:
    try:
        return WorldMap(elevations, threshold, sources)
    except ConfigurationError as e:
        raise MapFormatError(str(e)) from e
