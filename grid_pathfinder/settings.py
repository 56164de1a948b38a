from pathlib import Path


class Settings:
    """
    Contains configuration settings and constants for the pathfinder.

    Central place for the values shared by the renderers and the command line
    entry point. The CLI copies what it needs from here and lets options
    override them for a single run; nothing mutates this class at runtime.

    :ivar WALL_GLYPH: Two-character marker for wall cells in text output.
    :ivar PATH_GLYPH: Two-character marker for path cells in text output.
    :ivar OPEN_GLYPH: Two-character marker for ordinary cells in text output.
    :ivar WALL_ANSI: ANSI color code used for walls.
    :ivar PATH_ANSI: ANSI color code used for path cells.
    :ivar OPEN_ANSI: ANSI color code used for open cells of binary grids.
    :ivar GRADIENT_ANSI: Nine ANSI color codes forming the heat ramp for open
        cells of scalar grids, from lowest to highest normalized cost.
    :ivar WALL_COLOR: BGR color for walls in rendered images.
    :ivar OPEN_COLOR: BGR color for open cells of binary grids in images.
    :ivar PATH_COLOR: BGR color for path cells in images.
    :ivar ENDPOINT_COLOR: BGR color for the first and last path cell in images.
    :ivar GRID_COLOR: BGR color for the cell separator lines in images.
    :ivar GRADIENT_COLORS: Nine BGR colors matching GRADIENT_ANSI.
    :ivar IMAGE_CELL_SIZE: Pixel size of one grid cell in rendered images.
    :ivar LOG_LEVEL: Default log level of the command line entry point.
    :ivar OUTPUT_IMAGE_PATH: Default file for ``--save-image`` without a name,
        relative to the working directory.
    """
    WALL_GLYPH = "▓▓"
    PATH_GLYPH = "▒▒"
    OPEN_GLYPH = "░░"

    ANSI_RESET = "\033[0m"
    WALL_ANSI  = "\033[97m"   # bright white
    PATH_ANSI  = "\033[35m"   # magenta
    OPEN_ANSI  = "\033[37m"   # gray

    GRADIENT_ANSI = [
        "\033[32m",  # dark green
        "\033[92m",  # green
        "\033[36m",  # dark cyan
        "\033[96m",  # cyan
        "\033[94m",  # blue
        "\033[33m",  # dark yellow
        "\033[93m",  # yellow
        "\033[31m",  # dark red
        "\033[91m",  # red
    ]

    WALL_COLOR     = (255, 255, 255)
    OPEN_COLOR     = (90, 90, 90)
    PATH_COLOR     = (255, 0, 255)
    ENDPOINT_COLOR = (0, 255, 0)
    GRID_COLOR     = (40, 40, 40)

    GRADIENT_COLORS = [
        (0, 100, 0),
        (0, 200, 0),
        (139, 139, 0),
        (255, 255, 0),
        (255, 0, 0),
        (0, 140, 200),
        (0, 255, 255),
        (0, 0, 139),
        (0, 0, 255),
    ]

    IMAGE_CELL_SIZE = 16

    LOG_LEVEL = "WARNING"

    OUTPUT_IMAGE_PATH = Path("path.png")
