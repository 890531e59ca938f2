"""
Base Directories - Platform locations a file store can live under

@.architecture
Incoming: data/storage/local.py, config/settings.py --- {BaseDirectory member or explicit path, SearchDomain}
Processing: resolve_base_directory() --- {2 jobs: platform_lookup, path_expansion}
Outgoing: data/storage/local.py --- {Optional[Path] base directory}

Each BaseDirectory exists per user (SearchDomain.USER) and, for some kinds,
machine-wide (SearchDomain.LOCAL). Combinations the platform has no location
for resolve to None.
"""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

import platformdirs

logger = logging.getLogger(__name__)


class BaseDirectory(str, Enum):
    """Kinds of platform directory a store can be rooted in."""
    DOCUMENTS = "documents"
    DOWNLOADS = "downloads"
    APPLICATION_SUPPORT = "application_support"
    CACHES = "caches"
    CONFIG = "config"


class SearchDomain(str, Enum):
    """Per-user or machine-wide variant of a base directory."""
    USER = "user"
    LOCAL = "local"


# platformdirs function names, looked up at call time
_PLATFORM_LOOKUPS: Dict[Tuple[BaseDirectory, SearchDomain], str] = {
    (BaseDirectory.DOCUMENTS, SearchDomain.USER): "user_documents_dir",
    (BaseDirectory.DOWNLOADS, SearchDomain.USER): "user_downloads_dir",
    (BaseDirectory.APPLICATION_SUPPORT, SearchDomain.USER): "user_data_dir",
    (BaseDirectory.APPLICATION_SUPPORT, SearchDomain.LOCAL): "site_data_dir",
    (BaseDirectory.CACHES, SearchDomain.USER): "user_cache_dir",
    (BaseDirectory.CACHES, SearchDomain.LOCAL): "site_cache_dir",
    (BaseDirectory.CONFIG, SearchDomain.USER): "user_config_dir",
    (BaseDirectory.CONFIG, SearchDomain.LOCAL): "site_config_dir",
}


BaseDirectorySelector = Union[BaseDirectory, str, os.PathLike]


def resolve_base_directory(
    base_directory: BaseDirectorySelector = BaseDirectory.DOCUMENTS,
    domain: SearchDomain = SearchDomain.USER
) -> Optional[Path]:
    """
    Resolve a base directory selector to an absolute path.

    Args:
        base_directory: BaseDirectory member or its value (e.g. "documents"),
            or an explicit path. Use Path("documents") for a relative
            directory that shares a member's name.
        domain: Domain used for BaseDirectory members (ignored for paths)

    Returns:
        Base directory path, or None if the platform has no such location
    """
    if isinstance(base_directory, str) and not isinstance(base_directory, BaseDirectory):
        try:
            base_directory = BaseDirectory(base_directory)
        except ValueError:
            pass

    if not isinstance(base_directory, BaseDirectory):
        return Path(base_directory).expanduser().absolute()

    domain = SearchDomain(domain)
    lookup = _PLATFORM_LOOKUPS.get((base_directory, domain))
    if lookup is None:
        logger.debug(f"No {domain.value} location for {base_directory.value} on this platform")
        return None

    try:
        location = getattr(platformdirs, lookup)()
    except OSError as e:
        logger.warning(f"Failed to resolve {base_directory.value} directory: {e}")
        return None

    if not location:
        return None
    return Path(location).expanduser().absolute()
