from grid_pathfinder.a_star_pathfinding import a_star, find_path, path_cost
from grid_pathfinder.errors import MissingGridError, OutOfRangeError, PathfinderError
from grid_pathfinder.map_info import Cell, GridKind, GridMap

__version__ = "0.1.0"
