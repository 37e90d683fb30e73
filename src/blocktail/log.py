"""Loguru configuration for the command-line entry point.

The library disables its own logger on import so that embedding
applications see nothing unless they opt in. The CLI re-enables it here.
"""

from __future__ import annotations

import sys

from loguru import logger

PACKAGE = "blocktail"


def setup_logging(verbose: bool = False) -> None:
    """Route blocktail log records to stderr.

    Shows warnings and errors by default, and block-level debug detail
    when *verbose* is set.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "WARNING",
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> - <level>{message}</level>",
    )
    logger.enable(PACKAGE)
