# This file makes the 'utils' directory a Python package.

from .errors import (
    AppError,
    FileIOError,
    DecodeError,
    EncodeError,
    ConfigurationError,
    ErrorCategory,
    format_user_error,
)
from .logger import get_logger, set_log_level

__all__ = [
    # Errors
    'AppError',
    'FileIOError',
    'DecodeError',
    'EncodeError',
    'ConfigurationError',
    'ErrorCategory',
    'format_user_error',
    # Logging
    'get_logger',
    'set_log_level',
]
