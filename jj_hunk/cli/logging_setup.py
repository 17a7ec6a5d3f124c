"""Logging configuration for the jj-hunk CLI."""

import logging
import sys

LOGGER_NAME = "jj_hunk"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Send jj_hunk.* logs to stderr.

    stdout carries listing output, so logs never go there.

    Args:
        verbose: Log at DEBUG instead of WARNING.

    Returns:
        The configured package logger.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    ))

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Remove any existing handlers to avoid duplicates on reconfigure
    logger.handlers.clear()
    logger.addHandler(console_handler)
    logger.propagate = False
    return logger
