"""
Logging configuration for Module Insight.

Log output goes to stderr through a rich handler so it never mixes with
command output such as ``modules --format json``.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "module_insight"


def log_level(verbose: bool = False, quiet: bool = False) -> int:
    """Map the CLI's -v/-q flags to a level; quiet wins over verbose."""
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """
    Configure the module_insight logger for a CLI run.

    Args:
        verbose: Enable DEBUG level logging (per-module inclusion messages)
        quiet: Suppress all but ERROR level logging

    Returns:
        Configured logger instance for module_insight
    """
    level = log_level(verbose, quiet)

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        markup=False,
        show_time=True,
        show_path=verbose,
    )
    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=[handler])

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Module name (e.g., 'module_insight.resolution.resolver')
              If None, returns the root module_insight logger
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER)

    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"

    return logging.getLogger(name)
