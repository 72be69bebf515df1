# SPDX-License-Identifier: MIT

import logging

from rich.console import Console
from rich.logging import RichHandler

from studianta.configuration import APP_NAME

LOG_FORMAT = "%(message)s"


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """
    Route the application's log records to stderr through rich.

    Calling this again replaces the handler instead of stacking another one.

    Args:
        level: Name of the minimum level to emit, e.g. "INFO"

    Returns:
        The application's root logger
    """
    logger = logging.getLogger(APP_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    level_value = logging.getLevelName(level.upper())
    if not isinstance(level_value, int):
        level_value = logging.WARNING
    logger.setLevel(level_value)
    logger.propagate = False
    return logger
