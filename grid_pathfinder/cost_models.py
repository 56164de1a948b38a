"""
Cost models for the A* search.

A cost model answers the three questions the search asks about a grid: can a
cell be entered, what does one step cost, and how far is the goal at best.
The search engine is written once against this interface and the model is
picked from the grid kind at call time.

- BinaryCostModel: walkable/blocked grids. Costs are integers scaled by 1000
  (orthogonal 1000, diagonal 1414) so accumulated costs stay exact.
- ScalarCostModel: integer and float cost grids. A step costs 1.0 or sqrt(2)
  plus the normalized cost of the destination cell.

Both use the Chebyshev distance to the goal in their own unit, which never
overestimates the cost of 8-directional movement.
"""


import math

from grid_pathfinder.map_info import GridKind

SQRT2 = math.sqrt(2)


def chebyshev(a, b):
    """Chebyshev distance between two cells, the 8-directional move count."""
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))


class BinaryCostModel:
    SCALE = 1000
    ORTHOGONAL_COST = 1000
    DIAGONAL_COST = 1414

    def __init__(self, grid_map):
        self.grid_map = grid_map
        self.scale = self.SCALE

    def is_traversable(self, cell):
        return not self.grid_map.is_wall(cell)

    def step_cost(self, current, neighbor):
        if current[0] != neighbor[0] and current[1] != neighbor[1]:
            return self.DIAGONAL_COST
        return self.ORTHOGONAL_COST

    def heuristic(self, cell, goal):
        return self.SCALE * chebyshev(cell, goal)


class ScalarCostModel:
    """
    Step costs for integer and float grids.

    Entering a cell costs the move's base (1.0 orthogonal, sqrt(2) diagonal)
    plus that cell's cost normalized into [0, 1) against the grid's global
    minimum and maximum.
    """
    ORTHOGONAL_COST = 1.0
    DIAGONAL_COST = SQRT2

    def __init__(self, grid_map):
        self.grid_map = grid_map
        self.scale = 1

    def is_traversable(self, cell):
        return not self.grid_map.is_wall(cell)

    def step_cost(self, current, neighbor):
        if current[0] != neighbor[0] and current[1] != neighbor[1]:
            base = self.DIAGONAL_COST
        else:
            base = self.ORTHOGONAL_COST
        return base + self.grid_map.normalized(neighbor)

    def heuristic(self, cell, goal):
        return float(chebyshev(cell, goal))


def cost_model_for(grid_map):
    """
    Select the cost model matching the grid's kind.

    :param grid_map: Orientation-resolved grid.
    :type grid_map: GridMap
    :return: A BinaryCostModel or ScalarCostModel bound to ``grid_map``.
    """
    if grid_map.kind is GridKind.BINARY:
        return BinaryCostModel(grid_map)
    return ScalarCostModel(grid_map)
