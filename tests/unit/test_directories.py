"""
Unit Tests: Base Directories

Tests for resolving base directory selectors through platformdirs.
"""

from pathlib import Path

import pytest

from localstore.data.storage import directories
from localstore.data.storage.directories import BaseDirectory, SearchDomain, resolve_base_directory


class TestResolveBaseDirectory:
    """Test base directory resolution."""

    def test_documents_for_user(self, monkeypatch, temp_dir):
        """Documents resolves through platformdirs for the user domain."""
        monkeypatch.setattr(directories.platformdirs, "user_documents_dir", lambda: str(temp_dir))

        assert resolve_base_directory(BaseDirectory.DOCUMENTS, SearchDomain.USER) == temp_dir

    def test_local_domain_uses_site_directories(self, monkeypatch, temp_dir):
        """Machine-wide variants map to site_* locations."""
        monkeypatch.setattr(directories.platformdirs, "site_cache_dir", lambda: str(temp_dir))

        assert resolve_base_directory(BaseDirectory.CACHES, SearchDomain.LOCAL) == temp_dir

    @pytest.mark.parametrize("base", [BaseDirectory.DOCUMENTS, BaseDirectory.DOWNLOADS])
    def test_no_local_variant(self, base):
        """Per-user only directories have no machine-wide location."""
        assert resolve_base_directory(base, SearchDomain.LOCAL) is None

    def test_domain_accepts_plain_strings(self, monkeypatch, temp_dir):
        """Domains given as their values are accepted."""
        monkeypatch.setattr(directories.platformdirs, "user_config_dir", lambda: str(temp_dir))

        assert resolve_base_directory(BaseDirectory.CONFIG, "user") == temp_dir

    def test_base_directory_accepts_plain_strings(self, monkeypatch, temp_dir):
        """Member values select the platform location, not a relative path."""
        monkeypatch.setattr(directories.platformdirs, "user_documents_dir", lambda: str(temp_dir))
        monkeypatch.chdir(temp_dir)

        assert resolve_base_directory("documents") == temp_dir
        assert resolve_base_directory("downloads", SearchDomain.LOCAL) is None

    def test_path_sharing_member_name_is_a_path(self, monkeypatch, temp_dir):
        """Path objects are always explicit paths."""
        monkeypatch.chdir(temp_dir)

        assert resolve_base_directory(Path("documents")) == Path.cwd() / "documents"

    def test_platform_failure(self, monkeypatch):
        """Lookup errors resolve to None."""
        def broken():
            raise OSError("no home directory")

        monkeypatch.setattr(directories.platformdirs, "user_data_dir", broken)

        assert resolve_base_directory(BaseDirectory.APPLICATION_SUPPORT) is None

    def test_explicit_path(self, temp_dir):
        """Explicit paths are used as given."""
        assert resolve_base_directory(temp_dir) == temp_dir
        assert resolve_base_directory(str(temp_dir)) == temp_dir

    def test_explicit_path_expands_home(self, monkeypatch, temp_dir):
        """``~`` is expanded."""
        monkeypatch.setenv("HOME", str(temp_dir))

        assert resolve_base_directory("~/Documents") == temp_dir / "Documents"

    def test_relative_path_is_made_absolute(self, monkeypatch, temp_dir):
        """Relative paths are anchored at the working directory."""
        monkeypatch.chdir(temp_dir)

        resolved = resolve_base_directory("data")

        assert resolved.is_absolute()
        assert resolved == Path.cwd() / "data"
