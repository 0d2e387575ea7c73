"""
Logging setup for the ``wavegrid`` namespace.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: int = logging.INFO, console: Optional[Console] = None) -> logging.Logger:
    """
    Route the package logger through a rich handler.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO).
        console: Console to write to. A new stderr console is used when omitted.

    Returns:
        logging.Logger: The configured ``wavegrid`` logger.
    """
    logger = logging.getLogger("wavegrid")
    logger.setLevel(level)

    # Avoid duplicate lines when called more than once.
    if logger.hasHandlers():
        logger.handlers.clear()
    # end if

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)

    return logger
# end def setup_logging
