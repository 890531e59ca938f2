"""
Storage Errors - Typed failures raised by the file store

@.architecture
Incoming: data/storage/local.py, security/sanitization.py --- {failed filesystem calls, rejected file names, missing base/destination directories}
Processing: FileStoreError.__init__() --- {1 job: error_description}
Outgoing: Callers of FileStore --- {FileStoreError subclasses with human-readable str() and the offending path}

Every failure surfaced by FileStore is one of these. ``str(error)`` is the
message meant for users; ``description`` is the fixed text for the kind.
"""

from pathlib import Path
from typing import Optional, Union


class FileStoreError(Exception):
    """Base class for all file store failures."""

    description = "File store error"

    def __init__(
        self,
        message: Optional[str] = None,
        path: Optional[Union[str, Path]] = None
    ):
        """
        Initialize error.

        Args:
            message: Detail message (defaults to the kind's description)
            path: Path or name the failure refers to
        """
        self.path = path
        super().__init__(message or self.description)


class DocumentsDirectoryNotFoundError(FileStoreError):
    """Base directory can't be resolved, or the destination does not exist yet."""

    description = "User documents directory can't be reached"


class OutputDirectoryNotFoundError(FileStoreError):
    """Reserved, no operation raises it yet."""

    description = "Output directory not found"


class FileNotFoundInStoreError(FileStoreError):
    """Requested file does not exist in the destination directory."""

    description = "Request file not found at documents directory"


class DocumentsDirectoryIsEmptyError(FileStoreError):
    """Reserved, no operation raises it yet."""

    description = "Directory is empty"


class InvalidFileNameError(FileStoreError):
    """Name is not a single path component, or a path escapes the destination."""

    description = "Invalid file name"


class FileOperationError(FileStoreError):
    """Host filesystem call failed. The underlying OSError is chained as __cause__."""

    description = "File operation failed"

    def __init__(self, operation: str, path: Union[str, Path]):
        self.operation = operation
        super().__init__(f"{self.description}: could not {operation} {path}", path)
