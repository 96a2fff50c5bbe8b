"""Logging setup for Pocket Calc."""

import logging
from typing import Union

from rich.console import Console
from rich.logging import RichHandler


LOGGER_NAME = "pocket_calc"


def setup_logging(level: Union[int, str] = logging.WARNING) -> logging.Logger:
    """Configure the package logger with a rich handler on stderr.

    Calling it again only updates the level.

    Args:
        level: Logging level (name or number).

    Returns:
        The configured package logger.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)

    return logger
