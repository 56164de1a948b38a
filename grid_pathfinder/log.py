import logging

# Library modules log through this logger; handlers are attached by the CLI only
logger = logging.getLogger("grid_pathfinder")
logger.addHandler(logging.NullHandler())

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level="WARNING", filename=None):
    """
    Attach a handler to the package logger.

    Writes to stderr by default, or to ``filename`` (overwritten each run).
    """
    if filename:
        handler = logging.FileHandler(filename, mode="w")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    for old in list(logger.handlers):
        if not isinstance(old, logging.NullHandler):
            logger.removeHandler(old)
    logger.addHandler(handler)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    return logger
