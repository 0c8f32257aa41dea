"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,

    # Import
    EmptyFileError,
    DecodeError,
    UnsupportedFileTypeError,
    FileTooLargeError,

    # Browsing
    SessionNotFoundError,
    ProductNotFoundError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",

    # Import
    "EmptyFileError",
    "DecodeError",
    "UnsupportedFileTypeError",
    "FileTooLargeError",

    # Browsing
    "SessionNotFoundError",
    "ProductNotFoundError",
]
