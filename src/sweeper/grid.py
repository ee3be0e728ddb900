"""
Grid module for Minesweeper.

Provides the coordinate type, flat row-major boolean storage and the
iteration helpers used to walk a cell's neighbourhood or the whole grid.
"""
from typing import Iterator, NamedTuple

import numpy as np


# ============================================================================
# Coordinate
# ============================================================================

class Coordinate(NamedTuple):
    """A (row, col) position on the grid."""

    row: int
    col: int


# ============================================================================
# Grid Range
# ============================================================================

class GridRange:
    """
    Rectangular block of coordinates, iterated in row-major order.

    The range is lazy and restartable: every call to ``iter()`` walks the
    block from the start again.

    Attributes:
        start: Inclusive top-left corner.
        end: Exclusive bottom-right corner.
    """

    def __init__(self, start: Coordinate, end: Coordinate) -> None:
        self.start = start
        self.end = end

    @classmethod
    def all(cls, size: Coordinate) -> "GridRange":
        """Range covering a whole grid of the given size."""
        return cls(Coordinate(0, 0), size)

    @classmethod
    def around(cls, size: Coordinate, center: Coordinate) -> "GridRange":
        """3x3 block centred on ``center``, clipped to the grid bounds."""
        start = Coordinate(max(center.row - 1, 0), max(center.col - 1, 0))
        end = Coordinate(
            min(center.row + 2, size.row), min(center.col + 2, size.col)
        )
        return cls(start, end)

    def __iter__(self) -> Iterator[Coordinate]:
        for row in range(self.start.row, self.end.row):
            for col in range(self.start.col, self.end.col):
                yield Coordinate(row, col)

    def __len__(self) -> int:
        rows = max(self.end.row - self.start.row, 0)
        cols = max(self.end.col - self.start.col, 0)
        return rows * cols

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, tuple) or len(item) != 2:
            return False
        row, col = item
        return (
            self.start.row <= row < self.end.row
            and self.start.col <= col < self.end.col
        )

    def __repr__(self) -> str:
        return f"GridRange({tuple(self.start)}, {tuple(self.end)})"


# ============================================================================
# Grid
# ============================================================================

class Grid:
    """
    Fixed-size 2D boolean grid stored as a flat row-major array.

    Accessors do not check bounds; coordinates are expected to come from
    ``around``/``neighbors``/``all`` or from a bounds-checked translation.
    """

    def __init__(self, size: Coordinate) -> None:
        self.size = Coordinate(*size)
        self.data = np.zeros(self.size.row * self.size.col, dtype=bool)

    def position(self, coord: Coordinate) -> int:
        """Flat index of a coordinate."""
        return coord[0] * self.size.col + coord[1]

    def get(self, coord: Coordinate) -> bool:
        return bool(self.data[self.position(coord)])

    def set(self, coord: Coordinate, value: bool) -> None:
        self.data[self.position(coord)] = value

    def around(self, coord: Coordinate) -> GridRange:
        """Coordinates of the 3x3 block around ``coord``, centre included."""
        return GridRange.around(self.size, Coordinate(*coord))

    def neighbors(self, coord: Coordinate) -> Iterator[Coordinate]:
        """Adjacent coordinates of ``coord`` (up to 8), centre excluded."""
        center = Coordinate(*coord)
        return (index for index in self.around(center) if index != center)

    def all(self) -> GridRange:
        """Every coordinate of the grid in row-major order."""
        return GridRange.all(self.size)

    def sum_neighbors(self, coord: Coordinate) -> int:
        """Count adjacent cells holding True."""
        return sum(1 for index in self.neighbors(coord) if self.get(index))

    def count(self) -> int:
        """Count cells holding True."""
        return int(np.count_nonzero(self.data))

    def as_array(self) -> np.ndarray:
        """2D view of the grid, shape (rows, cols)."""
        return self.data.reshape(self.size.row, self.size.col)
