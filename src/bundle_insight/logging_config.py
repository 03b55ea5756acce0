"""
Logging configuration for Bundle Insight.

Provides structured logging with rich formatting for terminal output.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from .config import InsightConfig


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """
    Configure logging with rich handler for colored output.

    Args:
        verbose: Enable DEBUG level logging
        quiet: Suppress all but ERROR level logging (wins over verbose)

    Returns:
        Configured logger instance for bundle_insight
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    # Logs go to stderr so JSON on stdout stays clean
    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        markup=True,
        show_time=True,
        show_path=verbose,
    )
    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=[handler])

    logger = logging.getLogger("bundle_insight")
    logger.setLevel(level)

    return logger


def setup_logging_from_config(config: InsightConfig) -> logging.Logger:
    """Configure logging from the merged ``verbosity`` setting."""
    return setup_logging(
        verbose=config.verbosity == "verbose",
        quiet=config.verbosity == "quiet",
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Module name (e.g., 'bundle_insight.specifiers' or 'specifiers')

    Returns:
        Logger instance namespaced under bundle_insight
    """
    if not name.startswith("bundle_insight"):
        name = f"bundle_insight.{name}"

    return logging.getLogger(name)
