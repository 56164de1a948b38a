import heapq
import math

import numpy as np
import pytest

from grid_pathfinder import a_star_pathfinding
from grid_pathfinder.a_star_pathfinding import a_star, find_path, path_cost
from grid_pathfinder.errors import MissingGridError, OutOfRangeError, PathfinderError


def brute_force_cost(grid, start, end, invert_axes=True):
    """Dijkstra over every cell with the same step and corner rules, no heuristic."""
    cells = np.asarray(grid)
    if not invert_axes:
        cells = cells.T
    h, w = cells.shape

    if cells.dtype == bool:
        walls = ~cells
        norm = np.zeros(cells.shape)
        diagonal = 1.414
    else:
        values = cells.astype(float)
        lo, hi = values.min(), values.max()
        if hi > lo:
            walls = values == hi
            norm = (values - lo) / (hi - lo)
        else:
            walls = np.zeros(cells.shape, dtype=bool)
            norm = np.zeros(cells.shape)
        diagonal = math.sqrt(2)

    def is_open(x, y):
        return 0 <= x < w and 0 <= y < h and not walls[y, x]

    if not is_open(*start) or not is_open(*end):
        return None

    dist = {start: 0.0}
    pq = [(0.0, start)]
    while pq:
        d, (x, y) = heapq.heappop(pq)
        if d > dist[(x, y)]:
            continue
        if (x, y) == end:
            return d
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                if dx == 0 and dy == 0:
                    continue
                nx, ny = x + dx, y + dy
                if not is_open(nx, ny):
                    continue
                if dx and dy and (not is_open(x + dx, y) or not is_open(x, y + dy)):
                    continue
                nd = d + (diagonal if dx and dy else 1.0) + norm[ny, nx]
                if nd < dist.get((nx, ny), math.inf):
                    dist[(nx, ny)] = nd
                    heapq.heappush(pq, (nd, (nx, ny)))
    return None


def random_grid(rng, kind, shape):
    if kind == "binary":
        return rng.random(shape) > 0.3
    if kind == "integer":
        return rng.integers(0, 6, size=shape)
    values = rng.random(shape)
    values[rng.random(shape) < 0.2] = 1.0
    return values


def random_cell(rng, shape):
    rows, cols = shape
    return int(rng.integers(0, cols)), int(rng.integers(0, rows))


def assert_valid_path(path, grid, start, end):
    walls = ~np.asarray(grid) if np.asarray(grid).dtype == bool else None
    if walls is None:
        values = np.asarray(grid, dtype=float)
        walls = values == values.max() if values.max() > values.min() else np.zeros(values.shape, dtype=bool)

    assert path[0] == start
    assert path[-1] == end
    for (x0, y0), (x1, y1) in zip(path, path[1:]):
        dx, dy = x1 - x0, y1 - y0
        assert max(abs(dx), abs(dy)) == 1
        assert not walls[y1, x1]
        if dx and dy:
            assert not walls[y0, x0 + dx]
            assert not walls[y0 + dy, x0]


def test_corner_cutting_guard_forces_route_around_blocked_centre():
    grid = np.ones((3, 3), dtype=bool)
    grid[1, 1] = False

    path = find_path((0, 0), (2, 2), grid)

    assert path == [(0, 0), (0, 1), (0, 2), (1, 2), (2, 2)]
    assert path_cost(path, grid) == pytest.approx(4.0)


def test_diagonal_gap_between_two_walls_is_not_passable():
    grid = np.array([[True, False],
                     [False, True]])
    assert find_path((0, 0), (1, 1), grid) == []


def test_open_grid_takes_the_diagonal():
    grid = np.ones((4, 4), dtype=bool)
    assert find_path((0, 0), (3, 3), grid) == [(0, 0), (1, 1), (2, 2), (3, 3)]


@pytest.mark.parametrize("grid", [
    np.ones((4, 5), dtype=bool),
    np.arange(20).reshape(4, 5),
    np.linspace(0.0, 1.0, 20).reshape(4, 5),
])
def test_start_equals_end_returns_single_cell(grid):
    assert find_path((2, 1), (2, 1), grid) == [(2, 1)]


def test_start_equals_end_on_wall_returns_empty():
    grid = np.ones((3, 3), dtype=bool)
    grid[1, 1] = False
    assert find_path((1, 1), (1, 1), grid) == []


def test_enclosed_start_is_unreachable():
    grid = np.ones((5, 5), dtype=bool)
    grid[1:4, 1:4] = False
    grid[2, 2] = True

    assert find_path((2, 2), (0, 0), grid) == []
    assert find_path((0, 0), (2, 2), grid) == []


@pytest.mark.parametrize("grid", [
    np.array([[True, False], [True, True]]),
    np.array([[0, 7], [0, 0]]),
    np.array([[0.0, 2.5], [0.0, 0.0]]),
])
def test_blocked_start_or_end_returns_empty(grid):
    assert find_path((1, 0), (0, 1), grid) == []
    assert find_path((0, 1), (1, 0), grid) == []


@pytest.mark.parametrize("start, end", [
    ((-1, 0), (0, 0)),
    ((5, 0), (0, 0)),
    ((0, 0), (0, 3)),
    ((0, 0), (0, -1)),
])
def test_out_of_range_raises(start, end):
    grid = np.ones((3, 5), dtype=bool)
    with pytest.raises(OutOfRangeError):
        find_path(start, end, grid)


def test_out_of_range_follows_orientation():
    grid = np.ones((3, 5), dtype=bool)

    assert find_path((0, 0), (4, 2), grid, invert_axes=True)[-1] == (4, 2)
    with pytest.raises(OutOfRangeError):
        find_path((0, 0), (4, 2), grid, invert_axes=False)
    assert find_path((0, 0), (2, 4), grid, invert_axes=False)[-1] == (2, 4)


def test_out_of_range_is_checked_before_blocked_start():
    grid = np.array([[False, True], [True, True]])
    with pytest.raises(OutOfRangeError) as excinfo:
        find_path((0, 0), (9, 9), grid)
    assert excinfo.value.name == "end"


@pytest.mark.parametrize("grid", [None, [], np.zeros((0, 4), dtype=bool)])
def test_missing_grid_raises(grid):
    with pytest.raises(MissingGridError):
        find_path((0, 0), (0, 0), grid)


def test_errors_share_a_base_class():
    assert issubclass(OutOfRangeError, PathfinderError)
    assert issubclass(OutOfRangeError, IndexError)
    assert issubclass(MissingGridError, PathfinderError)


def test_nested_lists_are_accepted():
    grid = [[True, True, True],
            [False, False, True],
            [True, True, True]]
    path = find_path((0, 0), (0, 2), grid)

    assert path == [(0, 0), (1, 0), (2, 0), (2, 1), (2, 2), (1, 2), (0, 2)]


def test_scalar_maximum_is_a_wall():
    grid = np.array([[0, 0, 0],
                     [0, 9, 0],
                     [0, 0, 0]])
    path = find_path((0, 0), (2, 2), grid)

    assert len(path) == 5
    assert (1, 1) not in path
    assert path_cost(path, grid) == pytest.approx(4.0)


def test_scalar_costs_steer_the_path():
    grid = np.array([[0.0, 0.9, 0.0],
                     [0.0, 0.0, 0.0],
                     [1.0, 1.0, 1.0]])
    path = find_path((0, 0), (2, 0), grid)

    assert path == [(0, 0), (1, 1), (2, 0)]
    assert path_cost(path, grid) == pytest.approx(2 * math.sqrt(2))


def test_negative_integer_costs_are_normalized_against_the_minimum():
    grid = np.array([[-5, 1, -5],
                     [10, -5, -5]])
    path = find_path((0, 0), (2, 1), grid)

    assert path == [(0, 0), (1, 0), (2, 1)]
    assert path_cost(path, grid) == pytest.approx(1.0 + 0.4 + math.sqrt(2))


@pytest.mark.parametrize("start, end", [((0, 0), (5, 0)), ((0, 0), (3, 3)), ((5, 5), (2, 2))])
def test_uniform_scalar_grid_matches_open_binary_grid(start, end):
    binary = np.ones((6, 6), dtype=bool)
    uniform = np.full((6, 6), 3.5)

    assert find_path(start, end, uniform) == find_path(start, end, binary)


def test_uniform_scalar_grid_cost_matches_open_binary_grid():
    binary = np.ones((6, 6), dtype=bool)
    uniform = np.full((6, 6), 2, dtype=int)

    binary_cost = path_cost(find_path((0, 0), (5, 2), binary), binary)
    uniform_cost = path_cost(find_path((0, 0), (5, 2), uniform), uniform)

    assert uniform_cost == pytest.approx(binary_cost, rel=1e-3)


@pytest.mark.parametrize("kind", ["binary", "integer", "float"])
@pytest.mark.parametrize("seed", range(15))
def test_path_is_optimal_and_valid_on_small_grids(kind, seed):
    rng = np.random.default_rng(seed)
    shape = (int(rng.integers(2, 7)), int(rng.integers(2, 7)))
    grid = random_grid(rng, kind, shape)
    start, end = random_cell(rng, shape), random_cell(rng, shape)

    path = find_path(start, end, grid)
    expected = brute_force_cost(grid, start, end)

    if expected is None:
        assert path == []
    else:
        assert path, "reachable goal returned no path"
        assert_valid_path(path, grid, start, end)
        assert path_cost(path, grid) == pytest.approx(expected, rel=1e-9)


@pytest.mark.parametrize("kind", ["binary", "integer", "float"])
@pytest.mark.parametrize("seed", range(10))
def test_transposed_buffer_with_flipped_orientation_gives_same_path(kind, seed):
    rng = np.random.default_rng(100 + seed)
    shape = (int(rng.integers(2, 8)), int(rng.integers(2, 8)))
    grid = random_grid(rng, kind, shape)
    start, end = random_cell(rng, shape), random_cell(rng, shape)

    assert find_path(start, end, grid, True) == find_path(start, end, grid.T, False)


def test_a_star_cost_grid_matches_path():
    grid = np.ones((3, 5), dtype=bool)
    grid[0:2, 2] = False

    path, cost_grid = a_star(grid, (0, 0), (4, 0))

    assert cost_grid.shape == grid.shape
    assert cost_grid[0, 0] == 0
    assert cost_grid[0, 4] == pytest.approx(path_cost(path, grid))
    assert math.isinf(cost_grid[0, 2])
    assert a_star_pathfinding.find_path((0, 0), (4, 0), grid) == path


def test_a_star_cost_grid_keeps_buffer_layout_when_not_inverted():
    grid = np.ones((3, 5), dtype=bool)

    path, cost_grid = a_star(grid, (0, 0), (2, 4), invert_axes=False)

    assert cost_grid.shape == (3, 5)
    assert cost_grid[2, 4] == pytest.approx(path_cost(path, grid, invert_axes=False))
    assert cost_grid[0, 1] == pytest.approx(1.0)


def test_a_star_unreachable_returns_empty_path():
    grid = np.array([[True, False, True]])
    path, cost_grid = a_star(grid, (0, 0), (2, 0))

    assert path == []
    assert cost_grid[0, 0] == 0
    assert math.isinf(cost_grid[0, 2])


def test_path_cost_rejects_jumps():
    grid = np.ones((3, 3), dtype=bool)
    with pytest.raises(ValueError):
        path_cost([(0, 0), (2, 2)], grid)


def test_path_cost_of_single_cell_is_zero():
    assert path_cost([(1, 1)], np.ones((3, 3), dtype=bool)) == 0


def test_path_cost_rejects_cells_outside_the_grid():
    grid = np.ones((3, 3), dtype=bool)
    with pytest.raises(OutOfRangeError) as excinfo:
        path_cost([(-1, 0), (0, 0)], grid)
    assert excinfo.value.name == "path"

    with pytest.raises(OutOfRangeError):
        path_cost([(3, 3)], grid)


def test_large_integer_maximum_still_blocks():
    grid = np.array([[2**53, 2**53 + 1, 2**53]], dtype=np.int64)
    assert find_path((0, 0), (2, 0), grid) == []


@pytest.mark.parametrize("start, end", [
    ((1.7, 0), (0, 0)),
    ((0, 0), (2, 0.5)),
    ((True, 0), (0, 0)),
    (("1", 0), (0, 0)),
])
def test_non_integer_coordinates_raise(start, end):
    grid = np.ones((3, 3), dtype=bool)
    with pytest.raises(TypeError):
        find_path(start, end, grid)


def test_numpy_integer_coordinates_are_accepted():
    grid = np.ones((3, 3), dtype=bool)
    path = find_path((np.int64(0), np.int32(0)), (np.int64(2), np.uint8(2)), grid)

    assert path == [(0, 0), (1, 1), (2, 2)]
    assert all(type(v) is int for cell in path for v in cell)
