class PathfinderError(Exception):
    """Base class for caller errors raised before a search starts."""


class OutOfRangeError(PathfinderError, IndexError):
    """
    A start or end cell lies outside the grid under the active orientation.

    :ivar name: Which argument was rejected, ``"start"``, ``"end"`` or ``"path"``.
    :ivar cell: The rejected coordinate.
    """
    def __init__(self, name, cell, width, height):
        self.name = name
        self.cell = cell
        super().__init__(f"{name} {tuple(cell)} is outside the {width}x{height} grid")


class MissingGridError(PathfinderError, ValueError):
    """No grid was supplied, or the supplied grid has no cells."""
