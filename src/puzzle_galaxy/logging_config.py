"""
Logging configuration for Puzzle Galaxy.

Handlers are attached to the ``puzzle_galaxy`` logger (and to ``httpx``,
whose per-request INFO lines are only shown in verbose mode) rather than to
the root logger, so embedding applications keep their own setup.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

from .config import Verbosity

ROOT_LOGGER = "puzzle_galaxy"
HANDLER_NAME = "puzzle_galaxy"

LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

# Third-party loggers routed through our handlers, with their level per verbosity
LIBRARY_LEVELS = {
    "httpx": {"quiet": logging.ERROR, "normal": logging.WARNING, "verbose": logging.INFO},
    "httpcore": {"quiet": logging.ERROR, "normal": logging.WARNING, "verbose": logging.WARNING},
}


def setup_logging(
    verbosity: Verbosity = "normal",
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Configure rich terminal logging for a verbosity level.

    Safe to call more than once: handlers installed by an earlier call are
    replaced, not duplicated.

    Args:
        verbosity: ``quiet`` (errors only), ``normal`` (warnings) or
            ``verbose`` (debug, with paths and locals in tracebacks)
        log_file: Optional file that also receives every record at the
            chosen level

    Returns:
        The configured ``puzzle_galaxy`` logger
    """
    if verbosity not in LEVELS:
        raise ValueError(f"unknown verbosity '{verbosity}'")
    level = LEVELS[verbosity]
    verbose = verbosity == "verbose"

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=verbose,
            show_path=verbose,
        )
    ]
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)
    for handler in handlers:
        handler.set_name(HANDLER_NAME)

    logger = logging.getLogger(ROOT_LOGGER)
    _install(logger, level, handlers)
    for name, levels in LIBRARY_LEVELS.items():
        _install(logging.getLogger(name), levels[verbosity], handlers)

    return logger


def reset_logging() -> None:
    """Remove handlers installed by :func:`setup_logging`."""
    for name in (ROOT_LOGGER, *LIBRARY_LEVELS):
        _remove_ours(logging.getLogger(name))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Module name (e.g., 'puzzle_galaxy.graph')
              If None, returns the root puzzle_galaxy logger

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER)

    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"

    return logging.getLogger(name)


def _install(logger: logging.Logger, level: int, handlers: list[logging.Handler]) -> None:
    _remove_ours(logger)
    logger.setLevel(level)
    for handler in handlers:
        logger.addHandler(handler)


def _remove_ours(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        if handler.get_name() == HANDLER_NAME:
            logger.removeHandler(handler)
            handler.close()
