"""Logging configuration for multisearch."""

import logging
import sys

from multisearch.core.config import get_settings


def setup_logging(debug: bool | None = None) -> None:
    """Configure process-wide logging.

    Level is DEBUG when debug (or settings.debug) is True, otherwise INFO.
    Output goes to stdout.
    """
    if debug is None:
        debug = get_settings().debug
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name.

    Args:
        name: Usually __name__ of the calling module.
    """
    return logging.getLogger(name)
