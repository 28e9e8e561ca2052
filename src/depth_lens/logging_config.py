"""
Logging configuration for depth-lens.

All package loggers hang off the ``depth_lens`` logger. ``setup_logging``
configures that logger only: the host application's root logger and its
handlers are left alone, and calling it again replaces the handlers it
installed earlier instead of stacking new ones.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "depth_lens"

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Attribute marking handlers installed by setup_logging
_OWNED = "_depth_lens_handler"


def level_for(verbose: bool = False, quiet: bool = False) -> int:
    """Map CLI verbosity flags to a logging level (quiet wins)."""
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Route depth-lens logs to a rich handler on stderr.

    Args:
        verbose: Enable DEBUG level logging, with source paths and locals
            in tracebacks
        quiet: Suppress all but ERROR level logging
        log_file: Optional file path to append plain-text logs to

    Returns:
        The configured ``depth_lens`` logger
    """
    level = level_for(verbose, quiet)
    logger = logging.getLogger(LOGGER_NAME)

    for handler in [h for h in logger.handlers if getattr(h, _OWNED, False)]:
        logger.removeHandler(handler)
        handler.close()

    # stderr keeps JSON on stdout parseable; module ids may contain [brackets]
    rich_handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        markup=False,
        show_time=True,
        show_path=verbose,
    )
    rich_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    handlers: list[logging.Handler] = [rich_handler]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    for handler in handlers:
        setattr(handler, _OWNED, True)
        logger.addHandler(handler)

    logger.setLevel(level)
    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get the logger for a package module.

    Args:
        name: Module name (e.g., 'depth_lens.insights.kernel'). Names outside
              the package are nested under it; None returns the package logger.
    """
    if name is None:
        return logging.getLogger(LOGGER_NAME)

    if name != LOGGER_NAME and not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"

    return logging.getLogger(name)
