"""Logging setup for the ``pipelinemonitor`` logger hierarchy.

Log records go to stderr through Rich so they never interleave with the
report printed on stdout.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "pipelinemonitor"


def configure_logging(level: str | int = "WARNING") -> logging.Logger:
    """Install a single RichHandler on the package logger.

    Calling this again replaces the previous handler, so the CLI callback
    can run more than once in the same process (as it does under tests).
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
