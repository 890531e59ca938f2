"""
Storage Layer - Local file storage management

Provides file system storage operations:
- FileStore: serialized CRUD over one application directory
- Base directory selection (documents, caches, ...) per user or machine
- Typed errors for every storage failure
"""

from .errors import (
    DocumentsDirectoryIsEmptyError,
    DocumentsDirectoryNotFoundError,
    FileNotFoundInStoreError,
    FileOperationError,
    FileStoreError,
    InvalidFileNameError,
    OutputDirectoryNotFoundError,
)
from .directories import BaseDirectory, SearchDomain, resolve_base_directory
from .local import FileStore

__all__ = [
    "BaseDirectory",
    "DocumentsDirectoryIsEmptyError",
    "DocumentsDirectoryNotFoundError",
    "FileNotFoundInStoreError",
    "FileOperationError",
    "FileStore",
    "FileStoreError",
    "InvalidFileNameError",
    "OutputDirectoryNotFoundError",
    "SearchDomain",
    "resolve_base_directory",
]
