"""Utility modules for helpers, logging and error handling."""

from .logger import setup_logger, get_logger, level_for_flags
from .helpers import to_serializable, dumps, load_yaml, save_yaml, load_json, save_json, dump_yaml
from .exceptions import (
    UpmError,
    ConfigError,
    TaskNotFoundError,
    PlanNotFoundError,
    ValidationFailedError,
    ManifestError,
    FileOperationError,
)
from .error_handling import cli_error_handler

__all__ = [
    'setup_logger',
    'get_logger',
    'level_for_flags',
    'to_serializable',
    'dumps',
    'load_yaml',
    'save_yaml',
    'load_json',
    'save_json',
    'dump_yaml',
    # Exceptions
    'UpmError',
    'ConfigError',
    'TaskNotFoundError',
    'PlanNotFoundError',
    'ValidationFailedError',
    'ManifestError',
    'FileOperationError',
    # Error handling
    'cli_error_handler',
]
