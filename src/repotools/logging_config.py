"""Logging configuration for the repotools commands."""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "repotools"
LOG_LEVEL_ENV = "REPOTOOLS_LOG_LEVEL"
LOG_FILE_ENV = "REPOTOOLS_LOG_FILE"


def _level_from_verbosity(verbose: int) -> int:
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


def setup_logging(verbose: int = 0, log_file: Optional[str] = None) -> logging.Logger:
    """Set up the `repotools` logger.

    Warnings and errors always reach stderr. Verbosity raises the level to INFO
    (-v) or DEBUG (-vv).

    Env vars:
        REPOTOOLS_LOG_LEVEL: Explicit log level name, overrides verbosity
        REPOTOOLS_LOG_FILE: Also append log records to this file
    """
    level = _level_from_verbosity(verbose)
    level_str = os.getenv(LOG_LEVEL_ENV)
    if level_str:
        resolved = logging.getLevelName(level_str.upper())
        if isinstance(resolved, int):
            level = resolved
        else:
            print(f"Invalid log level: {level_str}. Using {logging.getLevelName(level)}.", file=sys.stderr)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    rich_handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_level=True,
        show_path=level <= logging.DEBUG,
        markup=False,
        rich_tracebacks=True,
    )
    logger.addHandler(rich_handler)

    log_file_str = log_file or os.getenv(LOG_FILE_ENV)
    if log_file_str:
        path = Path(log_file_str).expanduser()
        if path.is_dir():
            raise ValueError(f"Log file path {path} is a directory, not a file.")
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, mode="a", encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter(fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
        )
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name.

    Args:
        name: Name for the logger, typically __name__

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger
