# a_star_pathfinding.py
import heapq
import math

import numpy as np

from grid_pathfinder.cost_models import chebyshev, cost_model_for
from grid_pathfinder.errors import OutOfRangeError
from grid_pathfinder.log import logger
from grid_pathfinder.map_info import Cell, GridMap

# 8 possible moves as (dx, dy): N, S, W, E, NW, NE, SW, SE
DIRECTIONS = [
    (0, -1), (0, 1), (-1, 0), (1, 0),     # straight moves
    (-1, -1), (1, -1), (-1, 1), (1, 1),   # diagonals
]


def _as_cell(name, cell):
    x, y = cell
    for v in (x, y):
        if isinstance(v, bool) or not isinstance(v, (int, np.integer)):
            raise TypeError(f"{name} must be integer (x, y) coordinates, got {tuple(cell)!r}")
    return Cell(int(x), int(y))


def _prepare(grid, start, end, invert_axes):
    grid_map = GridMap(grid, invert_axes)
    start = _as_cell("start", start)
    end = _as_cell("end", end)

    if not grid_map.in_bounds(start):
        raise OutOfRangeError("start", start, grid_map.width, grid_map.height)
    if not grid_map.in_bounds(end):
        raise OutOfRangeError("end", end, grid_map.width, grid_map.height)

    return grid_map, cost_model_for(grid_map), start, end


def _search(grid_map, model, start, end):
    """
    Run A* from start to end.

    Returns the path (empty when unreachable) and the best-cost table in the
    model's internal unit.
    """
    if not model.is_traversable(start) or not model.is_traversable(end):
        logger.debug("Start %s or end %s is a wall, no path", start, end)
        return [], {}

    best_cost = {start: 0}
    came_from = {}

    # Min-heap priority queue: (f_score, h_score, x, y, g_score)
    h_start = model.heuristic(start, end)
    open_set = [(h_start, h_start, start.x, start.y, 0)]
    expanded = 0

    while open_set:
        _, _, x, y, g = heapq.heappop(open_set)
        current = Cell(x, y)

        # A cheaper route was found after this entry was pushed
        if g > best_cost[current]:
            continue

        if current == end:
            path = [current]
            while current in came_from:
                current = came_from[current]
                path.append(current)
            path.reverse()
            logger.debug("Path of %d cells found after %d expansions", len(path), expanded)
            return path, best_cost

        expanded += 1
        for dx, dy in DIRECTIONS:
            neighbor = Cell(x + dx, y + dy)
            if not grid_map.in_bounds(neighbor) or not model.is_traversable(neighbor):
                continue

            # No squeezing diagonally between two blocked orthogonal cells
            if dx != 0 and dy != 0:
                if not model.is_traversable((x + dx, y)) or not model.is_traversable((x, y + dy)):
                    continue

            new_cost = g + model.step_cost(current, neighbor)
            if new_cost < best_cost.get(neighbor, math.inf):
                best_cost[neighbor] = new_cost
                came_from[neighbor] = current
                h = model.heuristic(neighbor, end)
                heapq.heappush(open_set, (new_cost + h, h, neighbor.x, neighbor.y, new_cost))

    logger.debug("No path from %s to %s after %d expansions", start, end, expanded)
    return [], best_cost


def find_path(start, end, grid, invert_axes=True):
    """
    Find the cheapest 8-directional path between two cells.

    Args:
        start (tuple[int, int]): (x, y) start cell
        end (tuple[int, int]): (x, y) goal cell
        grid (array-like): 2D buffer of bool (True = walkable), int or float
            costs. In cost grids the largest value marks a wall.
        invert_axes (bool): True when the buffer is addressed grid[y][x],
            False for grid[x][y]

    Returns:
        list[Cell]: cells from start to end inclusive, or an empty list when
            either end is a wall or the goal cannot be reached

    Raises:
        MissingGridError: grid is None or has no cells
        OutOfRangeError: start or end is outside the grid
        TypeError: start or end has non-integer coordinates
    """
    grid_map, model, start, end = _prepare(grid, start, end, invert_axes)
    logger.debug("A* on %s grid %dx%d from %s to %s",
                 grid_map.kind.name.lower(), grid_map.width, grid_map.height, start, end)
    path, _ = _search(grid_map, model, start, end)
    return path


def a_star(grid, start, end, invert_axes=True):
    """
    Perform A* pathfinding and also report the cost to reach each cell.

    Args:
        grid (array-like): 2D buffer, see find_path
        start (tuple[int, int]): (x, y) start position
        end (tuple[int, int]): (x, y) goal position
        invert_axes (bool): buffer orientation, see find_path

    Returns:
        path (list[Cell]): cells from start to end, empty if unreachable
        cost_grid (numpy.ndarray): best known cost from start per cell, in
            grid units, shaped like the input buffer; inf where never reached
    """
    grid_map, model, start, end = _prepare(grid, start, end, invert_axes)
    path, best_cost = _search(grid_map, model, start, end)

    cost_grid = np.full((grid_map.height, grid_map.width), math.inf)
    for cell, cost in best_cost.items():
        cost_grid[cell.y, cell.x] = cost / model.scale

    return path, grid_map.to_buffer_layout(cost_grid)


def path_cost(path, grid, invert_axes=True):
    """
    Accumulated step cost of a path, in grid units.

    Walls and corner cutting are not checked, only that every cell is inside
    the grid and every step moves to one of the 8 neighbours.
    """
    grid_map = GridMap(grid, invert_axes)
    model = cost_model_for(grid_map)
    for cell in path:
        if not grid_map.in_bounds(cell):
            raise OutOfRangeError("path", tuple(cell), grid_map.width, grid_map.height)

    total = 0
    for current, neighbor in zip(path, path[1:]):
        if chebyshev(current, neighbor) != 1:
            raise ValueError(f"{tuple(current)} -> {tuple(neighbor)} is not a single step")
        total += model.step_cost(current, neighbor)
    return total / model.scale
