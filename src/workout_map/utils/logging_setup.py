"""Logging configuration shared by the CLI and the API."""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install a stderr handler on the workout_map logger.

    Safe to call more than once; the handler is only added the first time.

    Args:
        level: Level name such as "DEBUG" or "INFO"
    """
    logger = logging.getLogger("workout_map")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if any(getattr(h, "_workout_map_handler", False) for h in logger.handlers):
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._workout_map_handler = True
    logger.addHandler(handler)
