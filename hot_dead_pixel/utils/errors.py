# Centralized error types
"""
Provides consistent error types across the application.

This module defines:
- Custom exception classes for the I/O boundary and configuration
- A helper for turning errors into short user-facing messages

The detection core itself raises none of these: geometry violations there
are programming errors and are caught by assertions.
"""

from typing import Optional, Union
from enum import Enum


class ErrorCategory(Enum):
    """Categories of errors for consistent handling."""
    FILE_IO = "file_io"              # File system / codec errors
    CONFIGURATION = "configuration"  # Settings/config errors
    FATAL = "fatal"                  # Unrecoverable errors


class AppError(Exception):
    """Base exception for application-specific errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.FATAL,
        original_error: Optional[Exception] = None,
        user_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.category = category
        self.original_error = original_error
        self.user_message = user_message or message

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.args[0]} (caused by: {type(self.original_error).__name__})"
        return self.args[0]


class FileIOError(AppError):
    """File I/O related errors."""

    def __init__(self, message: str, file_path: Optional[str] = None, **kwargs):
        super().__init__(message, category=ErrorCategory.FILE_IO, **kwargs)
        self.file_path = file_path


class DecodeError(FileIOError):
    """Raised when a source image cannot be read or decoded."""


class EncodeError(FileIOError):
    """Raised when an image cannot be encoded or written."""

    def __init__(self, message: str, file_path: Optional[str] = None,
                 format_name: Optional[str] = None, **kwargs):
        super().__init__(message, file_path=file_path, **kwargs)
        self.format_name = format_name


class ConfigurationError(AppError):
    """Configuration/settings errors."""

    def __init__(self, message: str, setting_name: Optional[str] = None, **kwargs):
        super().__init__(message, category=ErrorCategory.CONFIGURATION, **kwargs)
        self.setting_name = setting_name


def format_user_error(error: Union[Exception, str], context: Optional[str] = None) -> str:
    """
    Format an error message for user display.

    Args:
        error: The error or error message.
        context: Optional context about what operation failed.

    Returns:
        User-friendly error message.
    """
    if isinstance(error, AppError):
        return error.user_message

    error_str = str(error)

    # Clean up common technical error messages
    if "No such file or directory" in error_str:
        return f"File not found{f' while {context}' if context else ''}"
    if "Permission denied" in error_str:
        return f"Permission denied{f' while {context}' if context else ''}"
    if "out of memory" in error_str.lower():
        return "Not enough memory to complete this operation. Try with a smaller image."

    # Generic fallback
    if context:
        return f"Error {context}: {error_str}"
    return f"An error occurred: {error_str}"
