"""
Command line demo for the grid pathfinder.

Solves one of the bundled sample mazes, or a maze read from an image, prints
the path as a chain of (x, y) cells and draws the grid with the path in the
terminal. Optionally writes the same picture to an image file.

Usage examples:
  grid-pathfinder
  grid-pathfinder --maze integer
  grid-pathfinder --maze binary --start 0,0 --end 19,19 --no-color
  grid-pathfinder --image maze.png --rows 20 --cols 20 --start 0,0 --end 19,19
  grid-pathfinder --maze integer --save-image path.png
"""


import argparse
import sys

from grid_pathfinder import a_star_pathfinding, display_grid, image_processing, map_info
from grid_pathfinder.errors import PathfinderError
from grid_pathfinder.log import configure_logging, logger
from grid_pathfinder.settings import Settings


def parse_cell(text):
    try:
        x, y = (int(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected X,Y, got {text!r}")
    return x, y


def build_parser():
    ap = argparse.ArgumentParser(prog="grid-pathfinder",
                                 description="Find and draw an A* path on a 2D grid.")
    ap.add_argument("--maze", choices=sorted(map_info.SAMPLE_MAZES), default="binary",
                    help="Bundled sample maze to solve (default: binary).")
    ap.add_argument("--image", help="Read the maze from this image instead of a sample.")
    ap.add_argument("--rows", type=int, help="Grid rows when reading --image.")
    ap.add_argument("--cols", type=int, help="Grid columns when reading --image.")
    ap.add_argument("--start", type=parse_cell, help="Start cell as X,Y.")
    ap.add_argument("--end", type=parse_cell, help="End cell as X,Y.")
    ap.add_argument("--no-invert", action="store_true",
                    help="Address the buffer as grid[x][y] instead of grid[y][x].")
    ap.add_argument("--no-color", action="store_true", help="Plain text output without ANSI colors.")
    ap.add_argument("--save-image", nargs="?", const=str(Settings.OUTPUT_IMAGE_PATH),
                    help="Also write the rendered grid to an image file.")
    ap.add_argument("--cell-size", type=int, default=Settings.IMAGE_CELL_SIZE,
                    help="Pixels per cell in the saved image.")
    ap.add_argument("--log-level", default=Settings.LOG_LEVEL,
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"], type=str.upper)
    ap.add_argument("--log-file", help="Write log messages to this file instead of stderr.")
    return ap


def load_maze(args, parser):
    if args.image:
        if args.rows is None or args.cols is None:
            parser.error("--image needs --rows and --cols")
        if args.start is None or args.end is None:
            parser.error("--image needs --start and --end")
        grid = image_processing.load_grid_image(args.image, args.rows, args.cols)
        return grid, args.start, args.end

    config = map_info.SAMPLE_MAZES[args.maze]()
    start = args.start if args.start is not None else config.START_CELL
    end = args.end if args.end is not None else config.END_CELL
    return config.grid(), start, end


def format_path(path):
    return " -> ".join(f"({x}, {y})" for x, y in path)


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, args.log_file)

    try:
        grid, start, end = load_maze(args, parser)
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    invert_axes = not args.no_invert
    try:
        path = a_star_pathfinding.find_path(start, end, grid, invert_axes)
    except PathfinderError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if path:
        cost = a_star_pathfinding.path_cost(path, grid, invert_axes)
        print(format_path(path))
        print(f"{len(path)} cells, cost {cost:.3f}")
    else:
        print("No path found.")

    display_grid.print_grid(grid, path, invert_axes, color=not args.no_color)

    if args.save_image:
        display_grid.save_grid_image(args.save_image, grid, path, invert_axes, args.cell_size)
        logger.info("Saved grid image to %s", args.save_image)

    return 0


if __name__ == "__main__":
    sys.exit(main())
