"""Logging configuration using Rich and standard logging."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(verbose: bool = False) -> None:
    """Send memhotplug logs to stderr; DEBUG when verbose, WARNING otherwise."""
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger("memhotplug")
    logger.setLevel(level)

    # Avoid duplicate handlers when invoked repeatedly (tests, CliRunner)
    if logger.handlers:
        logger.handlers.clear()

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        show_time=False,
        markup=False,
    )
    handler.setLevel(level)
    logger.addHandler(handler)
