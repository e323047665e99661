"""Logging setup for the rsvp command line and reader."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "rsvp_reader"

_configured = False


def setup_logging(verbose: bool = False, console: Console | None = None) -> logging.Logger:
    """Attach a RichHandler to the package logger once.

    Later calls only adjust the level.
    """
    global _configured

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    if not _configured:
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.propagate = False
        _configured = True

    return logger
