"""
Security Layer - Input validation for the file store

Keeps caller-supplied names and paths from escaping the managed directory.
"""

from .sanitization import (
    MAX_FILENAME_LENGTH,
    FileNameValidator,
    get_validator,
    is_within_directory,
    validate_file_name,
)

__all__ = [
    "MAX_FILENAME_LENGTH",
    "FileNameValidator",
    "get_validator",
    "is_within_directory",
    "validate_file_name",
]
