"""
Grid data structures and sample maze configuration for the pathfinder.

This module defines:
- Cell: an immutable (x, y) coordinate, compatible with plain tuples.
- GridKind: the three supported cell-cost representations.
- GridMap: a read-only view over a dense grid buffer that resolves the axis
  orientation once and precomputes the wall mask and the normalized cell
  costs with a single scan.
- BinaryMazeConfig and IntegerMazeConfig: dataclass-based sample mazes with
  their start/end cells, used by the command line demo.

Keeping the orientation and wall rules here lets the search engine and the
renderers agree on what a cell is without repeating the index arithmetic.
"""


from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, NamedTuple, Tuple

import numpy as np

from grid_pathfinder.errors import MissingGridError


class Cell(NamedTuple):
    x: int
    y: int


class GridKind(Enum):
    """
    Cell-cost representation of a grid buffer, derived from its dtype.

    BINARY grids hold walkable/blocked flags. INTEGER and FLOAT grids hold a
    cost per cell where the largest value in the grid marks a wall.
    """
    BINARY = auto()
    INTEGER = auto()
    FLOAT = auto()

    @property
    def is_scalar(self):
        return self is not GridKind.BINARY

    @classmethod
    def from_dtype(cls, dtype):
        if np.issubdtype(dtype, np.bool_):
            return cls.BINARY
        if np.issubdtype(dtype, np.integer):
            return cls.INTEGER
        if np.issubdtype(dtype, np.floating):
            return cls.FLOAT
        raise TypeError(f"Unsupported grid element type: {dtype}")


class GridMap:
    """
    Read-only, orientation-resolved view of a grid buffer.

    The buffer is addressed ``buffer[y][x]`` when ``invert_axes`` is True (row
    is y) and ``buffer[x][y]`` otherwise. Internally the buffer is stored in
    the first layout, transposing once when needed, so every lookup below is
    ``[y, x]``.

    For scalar grids the global minimum and maximum are found once. A cell
    holding the maximum is a wall. When every value is equal there is no wall
    marker and every cell is open. NaN cells are walls and are left out of the
    min/max scan.

    :ivar cells: Buffer in ``[y, x]`` layout.
    :type cells: numpy.ndarray
    :ivar kind: Cell-cost representation.
    :type kind: GridKind
    :ivar width: Number of valid x coordinates.
    :type width: int
    :ivar height: Number of valid y coordinates.
    :type height: int
    :ivar min_value: Smallest cost value (0.0 for binary grids).
    :type min_value: int or float
    :ivar max_value: Largest cost value (1.0 for binary grids).
    :type max_value: int or float
    :ivar wall_mask: True where a cell cannot be entered, ``[y, x]`` layout.
    :type wall_mask: numpy.ndarray
    :ivar normalized_costs: ``(value - min) / (max - min)`` per cell, 0 for
        binary and uniform grids, ``[y, x]`` layout.
    :type normalized_costs: numpy.ndarray
    """
    def __init__(self, grid, invert_axes=True):
        if grid is None:
            raise MissingGridError("No grid supplied")

        buffer = grid if isinstance(grid, np.ndarray) else np.asarray(grid)
        if buffer.size == 0:
            raise MissingGridError(f"Grid has no cells, got shape {buffer.shape}")
        if buffer.ndim != 2:
            raise ValueError(f"Grid must be two dimensional, got shape {buffer.shape}")

        self.kind = GridKind.from_dtype(buffer.dtype)
        self.invert_axes = bool(invert_axes)
        self.cells = buffer if self.invert_axes else buffer.T
        self.height, self.width = self.cells.shape

        if self.kind is GridKind.BINARY:
            self.min_value, self.max_value = 0.0, 1.0
            self.wall_mask = ~self.cells
            self.normalized_costs = np.zeros(self.cells.shape, dtype=float)
        else:
            self._scan_scalar()

        # Nested lists index faster than numpy scalars inside the search loop
        self._walls = self.wall_mask.tolist()
        self._norm = self.normalized_costs.tolist()

    def _scan_scalar(self):
        if self.kind is GridKind.INTEGER:
            self._scan_integer()
            return

        values = self.cells.astype(float)
        missing = np.isnan(values)

        if missing.all():
            self.min_value = self.max_value = 0.0
            self.wall_mask = missing
            self.normalized_costs = np.zeros(values.shape, dtype=float)
            return

        self.min_value = float(np.nanmin(values))
        self.max_value = float(np.nanmax(values))
        span = self.max_value - self.min_value

        if span > 0:
            self.wall_mask = missing | (values >= self.max_value)
            normalized = (values - self.min_value) / span
            self.normalized_costs = np.where(missing, 0.0, normalized)
        else:
            self.wall_mask = missing
            self.normalized_costs = np.zeros(values.shape, dtype=float)

    def _scan_integer(self):
        # Compare in the native dtype, float64 cannot tell large neighbours apart
        lo, hi = self.cells.min(), self.cells.max()
        self.min_value, self.max_value = lo.item(), hi.item()
        span = self.max_value - self.min_value

        if span > 0:
            self.wall_mask = self.cells == hi
            # Offsets from the minimum always fit in uint64, wraparound keeps them exact
            offsets = np.subtract(self.cells, lo, dtype=np.uint64, casting="unsafe")
            self.normalized_costs = offsets.astype(float) / float(span)
        else:
            self.wall_mask = np.zeros(self.cells.shape, dtype=bool)
            self.normalized_costs = np.zeros(self.cells.shape, dtype=float)

    def in_bounds(self, cell):
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def is_wall(self, cell):
        x, y = cell
        return self._walls[y][x]

    def value(self, cell):
        x, y = cell
        return self.cells[y, x].item()

    def normalized(self, cell):
        x, y = cell
        return self._norm[y][x]

    def to_buffer_layout(self, array):
        """Map an ``[y, x]`` array back to the layout of the input buffer."""
        return array if self.invert_axes else array.T


def maze_from_strings(rows, wall="#"):
    """
    Build a binary grid from text rows, one character per cell.

    :param rows: Equal-length strings, row index is y.
    :param wall: Character marking a blocked cell; anything else is walkable.
    :return: Boolean array, True where walkable.
    """
    if len({len(row) for row in rows}) > 1:
        raise ValueError("Maze rows must all have the same length")
    return np.array([[ch != wall for ch in row] for row in rows], dtype=bool)


@dataclass
class BinaryMazeConfig:
    """
    Sample 20x20 walkable/blocked maze.

    :ivar MAZE: Maze rows, ``#`` is a wall and ``.`` is walkable.
    :type MAZE: List[str]
    :ivar START_CELL: (x, y) start of the demo search.
    :type START_CELL: Tuple[int, int]
    :ivar END_CELL: (x, y) end of the demo search.
    :type END_CELL: Tuple[int, int]
    """
    MAZE: List[str] = field(default_factory=lambda: [
        "...#.....#.....#....",
        ".#.#.###.#.###.###..",
        ".#.....#.....#...#..",
        ".#####.#####.###.##.",
        ".....#.....#...#....",
        "####.#####.###.####.",
        "...#.....#...#....#.",
        ".#.#####.###.####.#.",
        ".#.....#...#....#...",
        ".#####.###.####.###.",
        ".....#...#....#.....",
        ".###.###.####.#####.",
        "...#...#....#.....#.",
        ".#.###.####.#####.#.",
        ".#...#....#.....#...",
        ".###.####.#####.###.",
        "...#....#.....#.....",
        ".#.####.#####.####..",
        ".#....#.....#....#..",
        "....................",
    ])

    START_CELL: Tuple[int, int] = (0, 0)
    END_CELL: Tuple[int, int]   = (5, 12)

    def grid(self):
        return maze_from_strings(self.MAZE)


@dataclass
class IntegerMazeConfig:
    """
    Sample 30x30 integer cost maze.

    Values range from -9 to 10; 10 is the largest value and therefore the
    wall. Doors between rooms are cheap cells (1 or -1) in the wall lines.

    :ivar MAZE: Cost rows, row index is y.
    :type MAZE: List[List[int]]
    :ivar START_CELL: (x, y) start of the demo search.
    :type START_CELL: Tuple[int, int]
    :ivar END_CELL: (x, y) end of the demo search.
    :type END_CELL: Tuple[int, int]
    """
    MAZE: List[List[int]] = field(default_factory=lambda: [
        [10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10],
        [10,-3, 1, 2, 3, 4, 5,10, 6, 7, 8,10, 9, 0,-1,10, 1, 2, 3,10, 4, 5, 6,10, 7, 8, 9,10, 0,10],
        [10,-4, 2, 3, 4, 5, 6, 1, 7, 8, 9, 1, 0,-1,-2, 1, 2, 3, 4, 1, 5, 6, 7, 1, 8, 9, 0, 1,-1,10],
        [10,-5, 3, 4, 5, 6, 7,10, 8, 9, 0,10,-1,-2,-3,10, 3, 4, 5,10, 6, 7, 8,10, 9, 0,-1,10,-2,10],
        [10,10,10, 1,10,10,10,10,10, 1,10,10,10, 1,10,10,10, 1,10,10,10, 1,10,10,10, 1,10,10,10,10],
        [10,-6, 4, 5, 6, 7, 8,10, 9, 0,-1,10,-2,-3,-4,10, 4, 5, 6,10, 7, 8, 9,10, 0,-1,-2,10,-3,10],
        [10,-7, 5, 6, 7, 8, 9, 1, 0,-1,-2, 1,-3,-4,-5, 1, 5, 6, 7, 1, 8, 9, 0, 1,-1,-2,-3, 1,-4,10],
        [10,-8, 6, 7, 8, 9, 0,10,-1,-2,-3,10,-4,-5,-6,10, 6, 7, 8,10, 9, 0,-1,10,-2,-3,-4,10,-5,10],
        [10,-9, 7, 8, 9, 0,-1,-1,-2,-3,-4,10,-5,-6,-7,10, 7, 8, 9,10, 0,-1,-2,10,-3,-4,-5,10,-6,10],
        [10,10, 1,10,10,-1,10,10,10, 1,10,10,10, 1,10,10,10, 1,10,10,10, 1,10,10,10, 1,10,10,10,10],
        [10, 0,-1,-2,-3,-4,-5,10,-6,-7,-8,10,-9, 1, 2,10, 3, 4, 5,10, 6, 7, 8,10, 9, 0,-1,10,-2,10],
        [10, 1,-2,-3,-4,-5,-6, 1,-7,-8,-9,10, 0, 2, 3,10, 4, 5, 6,10, 7, 8, 9,10, 0, 1, 2,10,-3,10],
        [10, 2,-3,-4,-5,-6,-7,10,-8,-9, 0, 1, 1, 3, 4,-1, 5, 6, 7, 1, 8, 9, 0, 1, 1, 2, 3, 1,-4,10],
        [10, 3,-4,-5,-6,-7,-8,10,-9, 0, 1,10, 2, 4, 5,10, 6, 7, 8,10, 9, 0, 1,10, 2, 3, 4,10,-5,10],
        [10,10,10, 1,10,10,10,10,10, 1,10,10,10, 1,10,10,10, 1,10,10,10, 1,10,10,10, 1,10,10,10,10],
        [10, 4, 5, 6, 7, 8, 9,10, 0,-1,-2,10,-3,-4,-5,10, 5, 6, 7,10, 8, 9, 0,10,-1,-2,-3,10,-4,10],
        [10, 5, 6, 7, 8, 9, 0, 1,-1,-2,-3,10,-4,-5,-6,10, 6, 7, 8,10, 9, 0,-1,10,-2,-3,-4,10,-5,10],
        [10, 6, 7, 8, 9, 0,-1,10,-2,-3,-4, 1,-5,-6,-7, 1, 7, 8, 9, 1, 0,-1,-2,-1,-3,-4,-5, 1,-6,10],
        [10, 7, 8, 9, 0,-1,-2,10,-3,-4,-5,10,-6,-7,-8,10, 8, 9, 0,10,-1,-2,-3,10,-4,-5,-6,10,-7,10],
        [10,10,10,10, 1,10,10,10,10, 1,10,10,10, 1,10,10,10, 1,10,10,10,-1,10,10,10, 1,10,10,10,10],
        [10, 8, 9, 0,-1,-2,-3,10,-4,-5,-6,10,-7,-8,-9,10, 9, 0, 1,10, 2, 3, 4,10, 5, 6, 7,10,-8,10],
        [10, 9, 0,-1,-2,-3,-4, 1,-5,-6,-7,10,-8,-9, 0,10, 1, 2, 3,10, 4, 5, 6,10, 7, 8, 9,10,-9,10],
        [10, 0,-1,-2,-3,-4,-5,10,-6,-7,-8, 1,-9, 0, 1, 1, 2, 3, 4, 1, 5, 6, 7, 1, 8, 9, 0, 1, 1,10],
        [10, 1,-2,-3,-4,-5,-6,10,-7,-8,-9,10, 0, 1, 2,10, 3, 4, 5,10, 6, 7, 8,10, 9, 0, 1,10, 2,10],
        [10,10,10, 1,10,10,10,10,10, 1,10,10,10, 1,10,10,10, 1,10,10,10, 1,10,10,10, 1,10,10,10,10],
        [10, 2, 3, 4, 5, 6, 7,10, 8, 9, 0,10, 1, 2, 3,10, 4, 5, 6,10, 7, 8, 9,10, 0, 1, 2,10, 3,10],
        [10, 3, 4, 5, 6, 7, 8, 1, 9, 0, 1,10, 2, 3, 4,10, 5, 6, 7,10, 8, 9, 0,10, 1, 2, 3,10, 4,10],
        [10, 4, 5, 6, 7, 8, 9,10, 0, 1, 2, 1, 3, 4, 5, 1, 6, 7, 8, 1, 9, 0, 1, 1, 2, 3, 4, 1, 5,10],
        [10, 5, 6, 7, 8, 9, 0,10, 1, 2, 3,10, 4, 5, 6,10, 7, 8, 9,10, 0, 1, 2,10, 3, 4, 5,10, 6,10],
        [10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10],
    ])

    START_CELL: Tuple[int, int] = (1, 1)
    END_CELL: Tuple[int, int]   = (28, 28)

    def grid(self):
        return np.array(self.MAZE, dtype=int)


SAMPLE_MAZES = {
    "binary": BinaryMazeConfig,
    "integer": IntegerMazeConfig,
}
