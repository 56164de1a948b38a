"""
Building walkable grids from maze images.

A maze image is split into an evenly spaced grid of cells. A cell is
walkable when enough of its pixels fall inside the open intensity band
(light floor by default); everything else is a wall. Manual overrides can then
open or close individual cells before the grid is handed to the pathfinder.
"""


import cv2
import numpy as np

from grid_pathfinder.log import logger


def to_gray(image):
    """Return a single channel view of a grayscale, BGR or BGRA image."""
    if image.ndim == 2:
        return image
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)


def create_grid(image, grid_rows, grid_cols, valid_point_ratio=.5, open_thresh_low=128, open_thresh_high=255):
    """
    Create a binary grid representation of an image based on the ratio of open
    pixels within regions defined by grid rows and columns.

    This function partitions the input image into a grid defined by the specified
    number of rows and columns. For each cell in the grid, it calculates the ratio
    of pixels falling within the open intensity range. If this ratio exceeds the
    threshold, the cell is walkable (True); otherwise it is a wall (False).

    :param image: A grayscale or BGR image.
    :param grid_rows: Number of rows in the grid partition (grid height).
    :param grid_cols: Number of columns in the grid partition (grid width).
    :param valid_point_ratio: Share of open pixels a cell needs to be walkable.
    :param open_thresh_low: Lower bound of open pixel intensity values.
    :param open_thresh_high: Upper bound of open pixel intensity values.
    :return: Boolean array of shape (grid_rows, grid_cols), addressed [y][x].
    :rtype: numpy.ndarray
    """
    gray = to_gray(image)
    h, w = gray.shape[:2]
    if grid_rows < 1 or grid_cols < 1 or grid_rows > h or grid_cols > w:
        raise ValueError(f"Cannot split a {w}x{h} image into {grid_cols}x{grid_rows} cells")

    # Boolean mask for open pixels
    open_mask = (gray >= open_thresh_low) & (gray <= open_thresh_high)

    # Precompute exact pixel boundaries
    x_edges = np.linspace(0, w, grid_cols + 1, dtype=int)
    y_edges = np.linspace(0, h, grid_rows + 1, dtype=int)

    grid = np.zeros((grid_rows, grid_cols), dtype=bool)

    for r in range(grid_rows):
        for c in range(grid_cols):
            y1, y2 = y_edges[r], y_edges[r + 1]
            x1, x2 = x_edges[c], x_edges[c + 1]

            cell_mask = open_mask[y1:y2, x1:x2]
            grid[r, c] = np.count_nonzero(cell_mask) / cell_mask.size > valid_point_ratio

    return grid


def modify_grid(grid, add_valid_cells=(), remove_valid_cells=()):
    """
    Opens and closes individual cells of a binary grid in place.

    :param grid: Boolean array addressed [y][x].
    :param add_valid_cells: (x, y) cells to make walkable.
    :param remove_valid_cells: (x, y) cells to make walls.
    :return: The same grid.
    """
    for x, y in add_valid_cells:
        grid[y, x] = True

    for x, y in remove_valid_cells:
        grid[y, x] = False

    return grid


def load_grid_image(file_path, grid_rows, grid_cols, **kwargs):
    """
    Read a maze image from disk and turn it into a binary grid.

    Extra keyword arguments are passed to create_grid.
    """
    image = cv2.imread(str(file_path), cv2.IMREAD_GRAYSCALE)
    if image is None:
        raise FileNotFoundError(f"Could not read image {file_path}")

    grid = create_grid(image, grid_rows, grid_cols, **kwargs)
    logger.info("Loaded %dx%d grid from %s, %d walkable cells",
                grid_cols, grid_rows, file_path, int(grid.sum()))
    return grid
