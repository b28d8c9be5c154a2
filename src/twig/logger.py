"""Logging configuration for twig."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(f"twig.{name}")


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Configure logging for twig.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logger = logging.getLogger("twig")
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    # Logs go to stderr so they never interleave with the branch listing
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            show_time=False,
            show_path=False,
        )
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(logger.level)

    # Don't propagate to root logger
    logger.propagate = False
    return logger
