"""
localstore - Serialized file management for one application directory.

    >>> store = FileStore("Recordings")
    >>> await store.create("take-1.m4a", audio_bytes)
    >>> await store.resolve("take-1.m4a")
    PosixPath('/home/me/Documents/Recordings/take-1.m4a')
"""

from localstore.data.storage import (
    BaseDirectory,
    DocumentsDirectoryIsEmptyError,
    DocumentsDirectoryNotFoundError,
    FileNotFoundInStoreError,
    FileOperationError,
    FileStore,
    FileStoreError,
    InvalidFileNameError,
    OutputDirectoryNotFoundError,
    SearchDomain,
)

__version__ = "1.0.0"

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
]
