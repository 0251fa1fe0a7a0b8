"""Logging setup for the exporter CLI."""

import sys

from loguru import logger

_FORMAT = "{level.icon} {message}"
# Per-note and per-attachment diagnostics are only readable with their origin.
_VERBOSE_FORMAT = "{level.icon} <dim>{name}</dim> {message}"


def configure_logging(*, verbose: bool = False) -> None:
    """Route loguru to stderr; DEBUG and module names with verbose, INFO otherwise."""
    logger.remove()
    if verbose:
        logger.add(sys.stderr, level="DEBUG", format=_VERBOSE_FORMAT)
    else:
        logger.add(sys.stderr, level="INFO", format=_FORMAT)
