"""
Text and image rendering of grids and paths.

The search engine never draws anything; these helpers take a grid and an
optional path and produce something to look at:
- render_rows / print_grid: one text line per grid row, two characters per
  cell, colored with ANSI escape codes.
- draw_grid_image / save_grid_image: a BGR image drawn with OpenCV.

Walls, path cells and open cells are always distinct. Open cells of integer
and float grids are additionally colored by a nine band heat ramp over their
normalized cost.
"""


import cv2
import numpy as np

from grid_pathfinder.map_info import GridMap
from grid_pathfinder.settings import Settings


def gradient_band(norm, bands=9):
    """Index of the heat ramp band for a normalized cost in [0, 1]."""
    return max(0, min(int(norm * 10), bands - 1))


def _path_set(path):
    return set(map(tuple, path)) if path else set()


def render_rows(grid, path=None, invert_axes=True, color=True):
    """
    Render a grid and optional path as text rows.

    :param grid: 2D buffer accepted by the pathfinder.
    :param path: Cells to mark as path, in any order.
    :param invert_axes: Buffer orientation, True for grid[y][x].
    :param color: Wrap each cell in ANSI color codes.
    :return: One string per row (y), two characters per cell (x).
    """
    grid_map = GridMap(grid, invert_axes)
    path_cells = _path_set(path)

    rows = []
    for y in range(grid_map.height):
        row = ""
        for x in range(grid_map.width):
            cell = (x, y)
            if grid_map.is_wall(cell):
                glyph, ansi = Settings.WALL_GLYPH, Settings.WALL_ANSI
            elif cell in path_cells:
                glyph, ansi = Settings.PATH_GLYPH, Settings.PATH_ANSI
            elif grid_map.kind.is_scalar:
                glyph = Settings.OPEN_GLYPH
                ansi = Settings.GRADIENT_ANSI[gradient_band(grid_map.normalized(cell))]
            else:
                glyph, ansi = Settings.OPEN_GLYPH, Settings.OPEN_ANSI

            row += f"{ansi}{glyph}{Settings.ANSI_RESET}" if color else glyph
        rows.append(row)
    return rows


def print_grid(grid, path=None, invert_axes=True, color=True):
    for row in render_rows(grid, path, invert_axes, color):
        print(row)


def _cell_edges(image, grid_rows, grid_cols):
    h, w = image.shape[:2]
    x_edges = np.linspace(0, w, grid_cols + 1, dtype=int)
    y_edges = np.linspace(0, h, grid_rows + 1, dtype=int)
    return x_edges, y_edges


def _fill_cell(image, x_edges, y_edges, cell, color):
    x, y = cell
    cv2.rectangle(image,
                  (int(x_edges[x]), int(y_edges[y])),
                  (int(x_edges[x + 1]) - 1, int(y_edges[y + 1]) - 1),
                  color, -1)


def draw_cells(image, grid_map):
    """Fill every cell with its wall, open or heat ramp color."""
    x_edges, y_edges = _cell_edges(image, grid_map.height, grid_map.width)

    for y in range(grid_map.height):
        for x in range(grid_map.width):
            cell = (x, y)
            if grid_map.is_wall(cell):
                color = Settings.WALL_COLOR
            elif grid_map.kind.is_scalar:
                color = Settings.GRADIENT_COLORS[gradient_band(grid_map.normalized(cell))]
            else:
                color = Settings.OPEN_COLOR
            _fill_cell(image, x_edges, y_edges, cell, color)
    return image


def draw_astar_path(image, path, grid_rows, grid_cols,
                    color=Settings.PATH_COLOR, endpoint_color=Settings.ENDPOINT_COLOR):
    x_edges, y_edges = _cell_edges(image, grid_rows, grid_cols)

    for i, cell in enumerate(path):
        is_endpoint = i == 0 or i == len(path) - 1
        _fill_cell(image, x_edges, y_edges, cell, endpoint_color if is_endpoint else color)
    return image


def draw_grid(image, grid_rows, grid_cols, color=Settings.GRID_COLOR, thickness=1):
    """
    Mark the boundaries between cells with thin lines, in place.

    Lines run along the same edges _fill_cell uses, so they sit exactly on
    cell borders. The outer border of the image is left untouched.
    """
    map_h, map_w = image.shape[:2]
    x_edges, y_edges = _cell_edges(image, grid_rows, grid_cols)

    # skip first and last to avoid drawing the border twice
    for x in x_edges[1:-1]:
        cv2.line(image, (int(x), 0), (int(x), map_h), color, thickness)

    for y in y_edges[1:-1]:
        cv2.line(image, (0, int(y)), (map_w, int(y)), color, thickness)

    return image


def draw_grid_image(grid, path=None, invert_axes=True, cell_size=Settings.IMAGE_CELL_SIZE):
    """
    Draw a grid and optional path as a BGR image.

    :param grid: 2D buffer accepted by the pathfinder.
    :param path: Ordered path cells; the first and last get the endpoint color.
    :param invert_axes: Buffer orientation, True for grid[y][x].
    :param cell_size: Edge length of one cell in pixels.
    :return: ``uint8`` array of shape (height * cell_size, width * cell_size, 3).
    """
    if cell_size < 1:
        raise ValueError(f"cell_size must be positive, got {cell_size}")

    grid_map = GridMap(grid, invert_axes)
    rows, cols = grid_map.height, grid_map.width
    image = np.zeros((rows * cell_size, cols * cell_size, 3), dtype=np.uint8)

    draw_cells(image, grid_map)
    if path:
        draw_astar_path(image, path, rows, cols)
    if cell_size > 2:
        draw_grid(image, rows, cols)

    return image


def save_grid_image(file_path, grid, path=None, invert_axes=True, cell_size=Settings.IMAGE_CELL_SIZE):
    image = draw_grid_image(grid, path, invert_axes, cell_size)
    if not cv2.imwrite(str(file_path), image):
        raise OSError(f"Could not write image to {file_path}")
    return image
