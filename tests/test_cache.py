"""Tests for the installation cache."""

from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest
from conftest import FakeProber

from claude_locator.cache import (
    DEFAULT_PATH_KEY,
    DEFAULT_PREFERENCE_KEY,
    CacheError,
    InstallationCache,
)
from claude_locator.types import ProbeResult


@pytest.fixture
def binary(tmp_path: Path) -> Path:
    """Create a file standing in for an installed binary."""
    path = tmp_path / "bin" / "claude"
    path.parent.mkdir()
    path.write_text("#!/bin/sh\n")
    return path


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Location of the settings database."""
    return tmp_path / "data" / "agents.db"


@pytest.fixture
def unreachable_db(tmp_path: Path) -> Path:
    """Database location the OS refuses to resolve (name too long)."""
    return tmp_path / ("x" * 300) / "agents.db"


def make_cache(db_path: Path, *working: Path) -> InstallationCache:
    prober = FakeProber({str(p): ProbeResult(functional=True, version="1.0.0") for p in working})
    return InstallationCache.create(db_path, prober)


def stored_rows(db_path: Path) -> dict[str, str]:
    conn = sqlite3.connect(db_path)
    try:
        return dict(conn.execute("SELECT key, value FROM app_settings").fetchall())
    finally:
        conn.close()


class TestRead:
    """Tests for InstallationCache.read."""

    def test_no_database(self, db_path: Path, binary: Path) -> None:
        """Test a missing database reads as no cache."""
        cache = make_cache(db_path, binary)

        assert cache.read() is None
        assert not db_path.exists()

    def test_round_trip(self, db_path: Path, binary: Path) -> None:
        """Test a written working path is read back."""
        cache = make_cache(db_path, binary)

        cache.write(str(binary))

        assert cache.read() == str(binary)

    def test_deleted_file_invalidates(self, db_path: Path, binary: Path) -> None:
        """Test a cached path that no longer exists is cleared."""
        cache = make_cache(db_path, binary)
        cache.write(str(binary))
        binary.unlink()

        assert cache.read() is None
        assert DEFAULT_PATH_KEY not in stored_rows(db_path)

    def test_directory_invalidates(self, db_path: Path, tmp_path: Path) -> None:
        """Test a cached path that is a directory is cleared."""
        cache = make_cache(db_path, tmp_path)
        cache.write(str(tmp_path))

        assert cache.read() is None
        assert cache.stored_path() is None

    def test_failing_probe_invalidates(self, db_path: Path, binary: Path) -> None:
        """Test a cached file that no longer runs is cleared."""
        cache = make_cache(db_path)
        cache.write(str(binary))

        assert cache.read() is None
        assert cache.stored_path() is None

    def test_table_missing(self, db_path: Path, binary: Path) -> None:
        """Test a database without the settings table reads as no cache."""
        db_path.parent.mkdir(parents=True)
        sqlite3.connect(db_path).close()
        cache = make_cache(db_path, binary)

        assert cache.read() is None

    def test_corrupt_database(self, db_path: Path, binary: Path) -> None:
        """Test an unreadable database raises CacheError."""
        db_path.parent.mkdir(parents=True)
        db_path.write_bytes(b"this is not a database" * 100)
        cache = make_cache(db_path, binary)

        with pytest.raises(CacheError):
            cache.read()


class TestWrite:
    """Tests for InstallationCache.write."""

    def test_creates_database(self, db_path: Path, binary: Path) -> None:
        """Test the directory, database and table are created."""
        cache = make_cache(db_path, binary)

        cache.write(str(binary))

        assert stored_rows(db_path) == {DEFAULT_PATH_KEY: str(binary)}

    def test_overwrites(self, db_path: Path, binary: Path) -> None:
        """Test a second write replaces the first."""
        cache = make_cache(db_path, binary)

        cache.write("/first/claude")
        cache.write(str(binary))

        assert stored_rows(db_path) == {DEFAULT_PATH_KEY: str(binary)}

    def test_keeps_other_settings(self, db_path: Path, binary: Path) -> None:
        """Test unrelated settings rows survive writes and clears."""
        cache = make_cache(db_path, binary)
        cache.write(str(binary))
        conn = sqlite3.connect(db_path)
        with conn:
            conn.execute("INSERT INTO app_settings VALUES ('theme', 'dark')")
        conn.close()

        cache.clear()

        assert stored_rows(db_path) == {"theme": "dark"}

    def test_unwritable_location(self, tmp_path: Path, binary: Path) -> None:
        """Test a data directory blocked by a file raises CacheError."""
        blocker = tmp_path / "blocked"
        blocker.write_text("")
        cache = make_cache(blocker / "agents.db", binary)

        with pytest.raises(CacheError):
            cache.write(str(binary))


class TestClear:
    """Tests for InstallationCache.clear."""

    def test_clear_removes_entry(self, db_path: Path, binary: Path) -> None:
        """Test clearing an existing entry reports removal."""
        cache = make_cache(db_path, binary)
        cache.write(str(binary))

        assert cache.clear() is True
        assert cache.stored_path() is None

    def test_clear_without_database(self, db_path: Path) -> None:
        """Test clearing with no database removes nothing."""
        assert make_cache(db_path).clear() is False


class TestReadPreference:
    """Tests for InstallationCache.read_preference."""

    def test_default(self, db_path: Path) -> None:
        """Test the preference defaults to system."""
        assert make_cache(db_path).read_preference() == "system"

    def test_stored(self, db_path: Path, binary: Path) -> None:
        """Test a stored preference is returned."""
        cache = make_cache(db_path, binary)
        cache.write(str(binary))
        conn = sqlite3.connect(db_path)
        with conn:
            conn.execute(
                "INSERT INTO app_settings VALUES (?, ?)", (DEFAULT_PREFERENCE_KEY, "bundled")
            )
        conn.close()

        assert cache.read_preference() == "bundled"


class TestUnreachableDatabase:
    """Tests for a database location that cannot even be checked."""

    def test_read_raises_cache_error(self, unreachable_db: Path, binary: Path) -> None:
        """Test an OS error on lookup surfaces as CacheError."""
        cache = make_cache(unreachable_db, binary)

        with pytest.raises(CacheError):
            cache.read()

    def test_stored_path_raises_cache_error(self, unreachable_db: Path) -> None:
        """Test the raw read converts OS errors."""
        with pytest.raises(CacheError):
            make_cache(unreachable_db).stored_path()

    def test_clear_raises_cache_error(self, unreachable_db: Path) -> None:
        """Test clearing converts OS errors."""
        with pytest.raises(CacheError):
            make_cache(unreachable_db).clear()

    def test_write_raises_cache_error(self, unreachable_db: Path, binary: Path) -> None:
        """Test writing converts OS errors."""
        with pytest.raises(CacheError):
            make_cache(unreachable_db, binary).write(str(binary))

    def test_preference_defaults(self, unreachable_db: Path) -> None:
        """Test the preference falls back to system."""
        assert make_cache(unreachable_db).read_preference() == "system"
