"""
Local File Store - Serialized access to one application directory

@.architecture
Incoming: Embedding applications, config/settings.py, Local filesystem (base directory) --- {file create/resolve/list/delete requests, str name, bytes content, Path targets, Settings}
Processing: is_valid_directory(), resolve(), list_all(), create(), delete(), delete_path(), _run(), _destination_path(), _remove() --- {6 jobs: serialization, path_resolution, name_validation, file_crud, error_translation, metrics_recording}
Outgoing: Local filesystem (Path.write_bytes/iterdir/unlink), Callers --- {Path values, List[Path] snapshots, FileStoreError subclasses, operation metrics}

Provides a file store with:
- One flat destination directory under a platform base directory
- Lazy creation of the destination on first write
- One-at-a-time execution of operations per store instance
- Typed errors for every filesystem failure

The filesystem is the source of truth; nothing is cached between calls.
"""

import asyncio
import contextvars
import os
import shutil
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Callable, List, Optional, Union

from localstore.config.settings import Settings, get_settings
from localstore.data.storage.directories import (
    BaseDirectory,
    BaseDirectorySelector,
    SearchDomain,
    resolve_base_directory,
)
from localstore.data.storage.errors import (
    DocumentsDirectoryNotFoundError,
    FileNotFoundInStoreError,
    FileOperationError,
    InvalidFileNameError,
)
from localstore.monitoring.logging import get_logger, set_operation_context
from localstore.monitoring.metrics import MetricsRegistry, setup_store_metrics
from localstore.security.sanitization import (
    MAX_FILENAME_LENGTH,
    FileNameValidator,
    get_validator,
    is_within_directory,
)

logger = get_logger(__name__)

PathInput = Union[str, os.PathLike]
Content = Union[bytes, bytearray, memoryview, str]


class FileStore:
    """
    Manages the files of one destination directory.

    Every operation is submitted to a single worker thread owned by the
    instance, so at most one operation per store is in flight and
    operations run in submission order. Separate stores have separate
    workers and do not wait on each other.

    A task cancelled while its operation is still queued skips it; an
    operation that already started runs to completion.

    Directory Structure:
        <base directory>/
        └── <destination_directory_name>/
            ├── file-a
            └── file-b
    """

    def __init__(
        self,
        destination_directory_name: str,
        base_directory: BaseDirectorySelector = BaseDirectory.DOCUMENTS,
        domain: SearchDomain = SearchDomain.USER,
        max_filename_length: int = MAX_FILENAME_LENGTH,
        metrics_registry: Optional[MetricsRegistry] = None,
        metrics_enabled: bool = True,
    ):
        """
        Initialize file store. Nothing is created on disk until the first write.

        Args:
            destination_directory_name: Name of the managed directory
            base_directory: BaseDirectory member, or an explicit base path
            domain: User or machine-wide variant of a BaseDirectory member
            max_filename_length: Longest accepted file name
            metrics_registry: Registry for operation metrics (global if None)
            metrics_enabled: Record operation metrics

        Raises:
            InvalidFileNameError: If destination_directory_name is not a single component
        """
        if max_filename_length == MAX_FILENAME_LENGTH:
            self._validator = get_validator()
        else:
            self._validator = FileNameValidator(max_length=max_filename_length)
        self._destination_directory_name = self._validator.validate(destination_directory_name)
        self._base_directory = base_directory
        self._domain = SearchDomain(domain)
        self._metrics = setup_store_metrics(metrics_registry) if metrics_enabled else None
        self._executor = ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix=f"localstore-{destination_directory_name}"
        )
        self._closed = False

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "FileStore":
        """
        Build a store from settings.

        Args:
            settings: Settings to use (loaded via get_settings() if None)

        Returns:
            Configured FileStore
        """
        settings = settings or get_settings()
        storage = settings.storage
        return cls(
            storage.destination_directory_name,
            base_directory=storage.base_path or storage.base_directory,
            domain=storage.domain,
            max_filename_length=storage.max_filename_length,
            metrics_enabled=settings.monitoring.metrics_enabled,
        )

    @property
    def destination_directory_name(self) -> str:
        return self._destination_directory_name

    def __repr__(self) -> str:
        return f"FileStore({self._destination_directory_name!r}, base_directory={self._base_directory!r})"

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def close(self) -> None:
        """Wait for queued operations, then stop the worker thread."""
        self._closed = True
        self._executor.shutdown(wait=True)

    async def __aenter__(self) -> "FileStore":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await asyncio.get_running_loop().run_in_executor(None, self.close)

    # =========================================================================
    # FILE OPERATIONS
    # =========================================================================

    async def is_valid_directory(self, path: PathInput) -> bool:
        """
        Check whether a filesystem entry exists at ``path``.

        Args:
            path: Path to check

        Returns:
            True if something exists there; False otherwise, including
            for paths that can't be checked at all
        """
        return await self._run("is_valid_directory", self._exists, path)

    async def resolve(self, name: str) -> Path:
        """
        Get the path of an existing file.

        Args:
            name: File name

        Returns:
            Absolute path of the file

        Raises:
            FileNotFoundInStoreError: If the file (or the directory) does not exist
            InvalidFileNameError: If name is not a single path component
        """
        return await self._run("resolve", self._resolve, name)

    async def list_all(self) -> List[Path]:
        """
        List every entry of the destination directory.

        Order is whatever the filesystem reports. The list is a snapshot;
        later changes are not reflected in it.

        Returns:
            Paths of all entries

        Raises:
            DocumentsDirectoryNotFoundError: If the directory can't be resolved or doesn't exist yet
            FileOperationError: If the directory can't be read
        """
        return await self._run("list_all", self._list_all)

    async def create(self, name: str, content: Optional[Content] = None) -> None:
        """
        Write a file, replacing any existing file of the same name.

        Args:
            name: File name
            content: File bytes (str is encoded as UTF-8); empty file if None

        Raises:
            DocumentsDirectoryNotFoundError: If the base directory can't be resolved
            InvalidFileNameError: If name is not a single path component
            FileOperationError: If the directory or file can't be written
        """
        await self._run("create", self._create, name, content)

    async def delete(self, name: str) -> None:
        """
        Delete a file by name.

        Raises:
            FileNotFoundInStoreError: If the file does not exist
            InvalidFileNameError: If name is not a single path component
            FileOperationError: If removal fails
        """
        await self._run("delete", self._delete, name)

    async def delete_path(self, path: PathInput) -> None:
        """
        Delete an entry by path, e.g. one returned by list_all().

        Directories are removed with their contents.

        Args:
            path: Path inside the destination directory

        Raises:
            DocumentsDirectoryNotFoundError: If the base directory can't be resolved
            InvalidFileNameError: If path is outside the destination directory
            FileNotFoundInStoreError: If nothing exists at path
            FileOperationError: If removal fails
        """
        await self._run("delete_path", self._delete_path, path)

    # =========================================================================
    # SERIALIZATION
    # =========================================================================

    async def _run(self, operation: str, func: Callable[..., Any], *args: Any) -> Any:
        """Run ``func`` on the store's worker and record the outcome."""
        if self._closed:
            raise RuntimeError(f"{self!r} is closed")

        context = contextvars.copy_context()
        started = time.perf_counter()
        future = asyncio.get_running_loop().run_in_executor(
            self._executor, context.run, self._invoke, operation, func, args
        )

        status = "error"
        try:
            result = await future
            status = "success"
            return result
        except asyncio.CancelledError:
            status = "cancelled"
            raise
        finally:
            self._record(operation, status, time.perf_counter() - started)

    def _invoke(self, operation: str, func: Callable[..., Any], args: tuple) -> Any:
        set_operation_context(operation=operation, store=self._destination_directory_name)
        return func(*args)

    def _record(self, operation: str, status: str, duration: float) -> None:
        if self._metrics is None:
            return
        self._metrics['operations_total'].inc(operation=operation, status=status)
        self._metrics['operation_duration_seconds'].observe(duration, operation=operation)

    # =========================================================================
    # WORKER-SIDE IMPLEMENTATIONS
    # =========================================================================

    def _destination_path(self) -> Optional[Path]:
        """Base directory + destination name, or None if the base can't be resolved."""
        base = resolve_base_directory(self._base_directory, self._domain)
        if base is None:
            return None
        return base / self._destination_directory_name

    def _require_destination(self) -> Path:
        destination = self._destination_path()
        if destination is None:
            logger.error("Base directory can't be resolved", base_directory=str(self._base_directory))
            raise DocumentsDirectoryNotFoundError()
        return destination

    @staticmethod
    def _exists(path: PathInput) -> bool:
        try:
            return Path(path).exists()
        except (OSError, TypeError, ValueError):
            return False

    def _resolve(self, name: str) -> Path:
        self._validator.validate(name)

        destination = self._destination_path()
        if destination is None or not self._exists(destination / name):
            logger.warning("File not found", name=name)
            raise FileNotFoundInStoreError(
                f"{FileNotFoundInStoreError.description}: {name}", name
            )

        return destination / name

    def _list_all(self) -> List[Path]:
        destination = self._destination_path()
        if destination is None or not self._exists(destination):
            logger.warning("Destination directory not found", destination=str(destination))
            raise DocumentsDirectoryNotFoundError(path=destination)

        try:
            entries = list(destination.iterdir())
        except OSError as e:
            logger.exception("Failed to list directory", destination=str(destination))
            raise FileOperationError("list", destination) from e

        logger.debug(f"Listed {len(entries)} entries", destination=str(destination))
        return entries

    def _create(self, name: str, content: Optional[Content]) -> None:
        self._validator.validate(name)
        destination = self._require_destination()

        if content is None:
            data = b""
        elif isinstance(content, str):
            data = content.encode("utf-8")
        else:
            data = bytes(content)

        file_path = destination / name
        try:
            destination.mkdir(parents=True, exist_ok=True)
            file_path.write_bytes(data)
        except OSError as e:
            logger.exception("Failed to create file", path=str(file_path))
            raise FileOperationError("create", file_path) from e

        logger.info(f"Created file ({len(data)} bytes)", path=str(file_path))

    def _delete(self, name: str) -> None:
        self._remove(self._resolve(name))

    def _delete_path(self, path: PathInput) -> None:
        destination = self._require_destination()
        if not is_within_directory(path, destination):
            logger.warning("Refused to delete path outside destination", path=str(path))
            raise InvalidFileNameError(f"Path is outside {destination}: {path}", path)

        self._remove(Path(path))

    def _remove(self, path: Path) -> None:
        try:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            else:
                path.unlink()
        except FileNotFoundError as e:
            logger.warning("File not found", path=str(path))
            raise FileNotFoundInStoreError(
                f"{FileNotFoundInStoreError.description}: {path.name}", path
            ) from e
        except OSError as e:
            logger.exception("Failed to delete file", path=str(path))
            raise FileOperationError("delete", path) from e

        logger.info("Deleted file", path=str(path))
