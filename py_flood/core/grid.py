"""Grid coordinates on a rectangular elevation map."""

from typing import NamedTuple, Tuple


class GridPoint(NamedTuple):
    """A (row, col) position on the map.

    Derived neighbors are plain values; they may lie outside the map and
    must be checked by the caller (see ``WorldMap.contains``).
    """

    row: int
    col: int

    def up(self) -> "GridPoint":
        return GridPoint(self.row - 1, self.col)

    def down(self) -> "GridPoint":
        return GridPoint(self.row + 1, self.col)

    def left(self) -> "GridPoint":
        return GridPoint(self.row, self.col - 1)

    def right(self) -> "GridPoint":
        return GridPoint(self.row, self.col + 1)

    def neighbors(self) -> Tuple["GridPoint", "GridPoint", "GridPoint", "GridPoint"]:
        """4-connected neighbors in the order up, down, left, right."""
        return (self.up(), self.down(), self.left(), self.right())

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"
