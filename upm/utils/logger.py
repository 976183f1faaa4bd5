"""Logging setup: rich console output on stderr plus a rotating workspace log file."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

MAX_LOG_BYTES = 1024 * 1024
LOG_BACKUPS = 3

# the workspace log keeps model changes even when the console only shows warnings
FILE_LOG_LEVEL = logging.INFO


def level_for_flags(verbose: bool = False, quiet: bool = False) -> int:
    """Map the global -v/-q flags to a log level (WARNING when neither is set)."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


def _console_handler(level: int, no_color: bool) -> RichHandler:
    handler = RichHandler(
        console=Console(stderr=True, no_color=no_color),
        level=level,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter('%(message)s', datefmt='%H:%M:%S'))
    return handler


def _file_handler(log_dir: Path, name: str, level: int) -> RotatingFileHandler:
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / f'{name}.log',
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUPS,
        encoding='utf-8',
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    return handler


def setup_logger(
    name: str = 'upm',
    log_dir: Optional[str] = None,
    level: int = logging.WARNING,
    log_to_file: bool = True,
    log_to_console: bool = True,
    no_color: bool = False,
) -> logging.Logger:
    """
    Configure the package logger.

    Earlier handlers are closed and replaced, so the CLI can call this once
    per invocation.

    Args:
        name: Logger name; module loggers below it propagate here
        log_dir: Directory for the rotating log file (default: .upm/logs)
        level: Console level; the file records INFO and up (DEBUG with -v)
        log_to_file: Enable file logging
        log_to_console: Enable console logging on stderr
        no_color: Plain console output

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    file_level = min(level, FILE_LOG_LEVEL)
    logger.setLevel(file_level if log_to_file else level)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    if log_to_console:
        logger.addHandler(_console_handler(level, no_color))

    if log_to_file:
        logger.addHandler(_file_handler(Path(log_dir or '.upm/logs'), name, file_level))

    return logger


def get_logger(name: str = 'upm') -> logging.Logger:
    """Module-level logger; pass __name__ to hang it under 'upm'."""
    return logging.getLogger(name)
