"""
Logging utilities for the methylation KDE analysis.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Python warnings (pandas, openpyxl) are emitted here once captured
WARNINGS_LOGGER = "py.warnings"


def _reset_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def _build_handlers(
    level: int,
    log_file: Optional[Union[str, Path]],
    console: bool
) -> List[logging.Handler]:
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: List[logging.Handler] = []

    if console:
        handlers.append(logging.StreamHandler(sys.stdout))

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def setup_logger(
    name: str = "methyl_kde",
    level: int = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    console: bool = True,
    capture_warnings: bool = False
) -> logging.Logger:
    """
    Set up a logger with console and optional file handlers.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        name: Logger name
        level: Logging level (default: INFO)
        log_file: Optional path to log file
        console: Whether to output to console
        capture_warnings: Also route Python warnings raised while reading
            input (e.g. by openpyxl) to the same handlers

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    _reset_handlers(logger)

    for handler in _build_handlers(level, log_file, console):
        logger.addHandler(handler)

    warnings_logger = logging.getLogger(WARNINGS_LOGGER)
    _reset_handlers(warnings_logger)
    logging.captureWarnings(capture_warnings)
    if capture_warnings:
        warnings_logger.propagate = False
        for handler in _build_handlers(logging.WARNING, log_file, console):
            warnings_logger.addHandler(handler)
    else:
        warnings_logger.propagate = True

    return logger
