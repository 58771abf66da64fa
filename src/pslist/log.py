"""Logging setup for pslist."""

import logging
import sys
from typing import TextIO


def configure_logging(verbose: bool = False, stream: TextIO | None = None) -> logging.Logger:
    """
    Configure the ``pslist`` logger.

    Diagnostics go to stderr so they never mix with the report table on stdout.

    Args:
        verbose: Log at DEBUG instead of WARNING.
        stream: Destination stream. Defaults to ``sys.stderr``.

    Returns:
        The configured package logger.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger("pslist")
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt="[%(levelname)s] %(message)s"))
    logger.addHandler(handler)

    logger.propagate = False
    return logger
