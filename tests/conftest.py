"""
Pytest Configuration and Shared Fixtures

Provides temporary base directories, file store factories, isolated metrics
registries and settings/logging resets for the unit tests.
"""

import logging
import tempfile
from pathlib import Path
from typing import Callable, Generator, List

import pytest

from localstore.config.settings import ENV_OVERRIDES, get_settings, reload_settings
from localstore.data.storage.local import FileStore
from localstore.monitoring.metrics import MetricsRegistry


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that test individual components"
    )
    config.addinivalue_line(
        "markers", "concurrency: Tests that exercise operation serialization"
    )


# =============================================================================
# Settings Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove settings overrides from the environment and reset the cache."""
    for env_name in [*ENV_OVERRIDES, "LOCALSTORE_CONFIG", "LOCALSTORE_ENVIRONMENT"]:
        monkeypatch.delenv(env_name, raising=False)
    reload_settings()
    yield
    # Tests may leave invalid overrides behind until monkeypatch undoes them
    get_settings.cache_clear()


@pytest.fixture
def restore_root_logger() -> Generator[logging.Logger, None, None]:
    """Restore root logger handlers and level after a test reconfigures logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


# =============================================================================
# Temporary Directory Fixtures
# =============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def base_dir(temp_dir: Path) -> Path:
    """Base directory stores are rooted in."""
    base = temp_dir / "Documents"
    base.mkdir()
    return base


# =============================================================================
# Store Fixtures
# =============================================================================

@pytest.fixture
def registry() -> MetricsRegistry:
    """Metrics registry isolated from the global one."""
    return MetricsRegistry()


@pytest.fixture
def make_store(base_dir: Path, registry: MetricsRegistry) -> Generator[Callable[..., FileStore], None, None]:
    """Factory for stores rooted in the temporary base directory."""
    stores: List[FileStore] = []

    def factory(name: str = "TestDirectory", **kwargs) -> FileStore:
        kwargs.setdefault("base_directory", base_dir)
        kwargs.setdefault("metrics_registry", registry)
        store = FileStore(name, **kwargs)
        stores.append(store)
        return store

    yield factory

    for store in stores:
        store.close()


@pytest.fixture
def store(make_store) -> FileStore:
    """Store named "TestDirectory" rooted in the temporary base directory."""
    return make_store()
