"""
File Name Validation - Security Layer

Keeps every file a store touches inside its destination directory. Names are
accepted only as a single path component; paths handed back for deletion must
sit below the destination.

@.architecture
Incoming: data/storage/local.py --- {str file name, str/Path target path, Path destination directory}
Processing: validate_file_name(), is_within_directory() --- {2 jobs: name_validation, containment_check}
Outgoing: data/storage/local.py --- {str validated name, bool containment, raises InvalidFileNameError}
"""

import logging
import os
import re
from pathlib import Path
from typing import Optional, Union

from localstore.data.storage.errors import InvalidFileNameError

logger = logging.getLogger(__name__)


MAX_FILENAME_LENGTH = 255


class FileNameValidator:
    """
    Validates caller-supplied file names.

    Rejects:
    - Non-string and empty names
    - Names longer than the configured limit
    - Path separators (``/`` and ``\\``) and NUL bytes
    - The special components ``.`` and ``..``
    """

    def __init__(self, max_length: int = MAX_FILENAME_LENGTH):
        """
        Initialize validator.

        Args:
            max_length: Maximum accepted name length in characters
        """
        self.max_length = max_length
        self._forbidden_chars = re.compile(r"[/\\\x00]")

    def validate(self, name: str) -> str:
        """
        Validate a file name.

        Args:
            name: File name to validate

        Returns:
            The name, unchanged

        Raises:
            InvalidFileNameError: If the name is not a safe single component
        """
        if not isinstance(name, str):
            raise InvalidFileNameError(
                f"Expected string file name, got {type(name).__name__}", name
            )

        if not name:
            raise InvalidFileNameError("File name cannot be empty", name)

        if len(name) > self.max_length:
            raise InvalidFileNameError(
                f"File name length {len(name)} exceeds maximum {self.max_length}", name
            )

        if self._forbidden_chars.search(name) or name in (".", ".."):
            logger.warning(f"Rejected file name: {name!r}")
            raise InvalidFileNameError(f"File name must be a single path component: {name!r}", name)

        return name


def is_within_directory(path: Union[str, Path], directory: Union[str, Path]) -> bool:
    """
    Check that ``path`` lies strictly below ``directory``.

    ``..`` segments are collapsed first. Symlinks are resolved for every
    component except the last, so a link inside the directory can't be used
    to reach files elsewhere while the link entry itself still counts as inside.

    Args:
        path: Candidate path
        directory: Containing directory

    Returns:
        True if path is inside directory (and is not the directory itself)
    """
    try:
        candidate = os.path.abspath(os.fspath(path))
        if candidate == os.path.abspath(os.fspath(directory)):
            return False
        root = os.path.realpath(directory)
        parent = os.path.realpath(os.path.dirname(candidate))
        return os.path.commonpath([parent, root]) == root
    except (TypeError, ValueError):
        return False


_default_validator: Optional[FileNameValidator] = None


def get_validator() -> FileNameValidator:
    """Get the shared validator with default limits."""
    global _default_validator
    if _default_validator is None:
        _default_validator = FileNameValidator()
    return _default_validator


def validate_file_name(name: str) -> str:
    """Validate file name using the shared validator."""
    return get_validator().validate(name)
