"""Logging configuration for the gitlabctl CLI."""
import logging
import sys
from typing import Optional, TextIO

_LOGGER_NAME = "gitlabctl"
_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "WARNING", stream: Optional[TextIO] = None) -> logging.Logger:
    """Send gitlabctl diagnostics to stderr at the given level.

    Handlers from a previous call are replaced so repeated invocations in
    one process do not duplicate output.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
