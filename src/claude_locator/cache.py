"""Persistent cache of the last known good binary path.

The cache is one row of a small key-value table in a SQLite database shared
with the host application's other settings:

    app_settings(key TEXT PRIMARY KEY, value TEXT NOT NULL)

Writes are upserts, so concurrent discoveries race harmlessly: the last
writer wins and the row is never half-written.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from claude_locator.filesystem import RealFileSystem
from claude_locator.protocols import FileSystem, Prober

logger = logging.getLogger(__name__)

DEFAULT_PATH_KEY = "claude_binary_path"
DEFAULT_PREFERENCE_KEY = "claude_installation_preference"
DEFAULT_PREFERENCE = "system"

CREATE_TABLE = """
CREATE TABLE IF NOT EXISTS app_settings (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
)
"""


class CacheError(Exception):
    """Error reading or writing the settings database."""

    pass


class InstallationCache:
    """Reads, validates and writes the cached binary path."""

    def __init__(
        self,
        db_path: Path,
        prober: Prober,
        filesystem: FileSystem | None = None,
        path_key: str = DEFAULT_PATH_KEY,
        preference_key: str = DEFAULT_PREFERENCE_KEY,
    ) -> None:
        """Initialize the cache.

        Args:
            db_path: Location of the SQLite settings database.
            prober: Liveness probe used to validate the cached path.
            filesystem: Filesystem abstraction.
            path_key: Settings key holding the path.
            preference_key: Settings key holding the installation preference.

        Note:
            Prefer using factory method `create()` for construction.
        """
        self.db_path = db_path
        self.prober = prober
        self.fs = filesystem or RealFileSystem()
        self.path_key = path_key
        self.preference_key = preference_key

    @classmethod
    def create(
        cls,
        db_path: Path,
        prober: Prober,
        filesystem: FileSystem | None = None,
        path_key: str = DEFAULT_PATH_KEY,
        preference_key: str = DEFAULT_PREFERENCE_KEY,
    ) -> InstallationCache:
        """Create an installation cache.

        Returns:
            Configured InstallationCache instance.
        """
        return cls(
            db_path=db_path,
            prober=prober,
            filesystem=filesystem,
            path_key=path_key,
            preference_key=preference_key,
        )

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(str(self.db_path))

    def _get(self, key: str) -> str | None:
        """Read one setting; a missing database or table reads as absent."""
        if not self.db_path.exists():
            return None
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT value FROM app_settings WHERE key = ?", (key,)
            ).fetchone()
        except sqlite3.OperationalError as e:
            # No app_settings table yet
            logger.debug("Settings table unavailable: %s", e)
            return None
        finally:
            conn.close()
        return row[0] if row else None

    def _delete(self, key: str) -> bool:
        conn = self._connect()
        try:
            with conn:
                conn.execute(CREATE_TABLE)
                cursor = conn.execute("DELETE FROM app_settings WHERE key = ?", (key,))
            return cursor.rowcount > 0
        finally:
            conn.close()

    def stored_path(self) -> str | None:
        """Get the stored path without validating it.

        Returns:
            The raw stored value, or None.

        Raises:
            CacheError: If the database cannot be read.
        """
        try:
            return self._get(self.path_key)
        except (sqlite3.Error, OSError) as e:
            raise CacheError(f"Failed to read settings database: {e}") from e

    def read(self) -> str | None:
        """Get the cached path if it still points at a working binary.

        A stale entry (file gone, not a regular file, or failing the probe)
        is deleted.

        Returns:
            The cached path, or None.

        Raises:
            CacheError: If the database cannot be read or cleaned up.
        """
        stored = self.stored_path()
        if stored is None:
            return None

        logger.info("Found stored binary path in database: %s", stored)
        path = Path(stored)
        if not self.fs.exists(path) or not self.fs.is_file(path):
            logger.warning("Stored binary path no longer exists: %s", stored)
            self.clear()
            return None

        if not self.prober.probe(stored).functional:
            logger.warning("Stored binary path exists but is not executable: %s", stored)
            self.clear()
            return None

        logger.info("Using cached binary path: %s", stored)
        return stored

    def write(self, path: str) -> None:
        """Store a path, creating the database and table if needed.

        Args:
            path: Path to remember.

        Raises:
            CacheError: If the database cannot be created or written.
        """
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CacheError(f"Failed to create data directory: {e}") from e

        try:
            conn = self._connect()
            try:
                with conn:
                    conn.execute(CREATE_TABLE)
                    conn.execute(
                        "INSERT OR REPLACE INTO app_settings (key, value) VALUES (?, ?)",
                        (self.path_key, path),
                    )
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise CacheError(f"Failed to store binary path: {e}") from e

        logger.info("Stored binary path in database: %s", path)

    def clear(self) -> bool:
        """Forget the cached path.

        Returns:
            True if an entry was removed.

        Raises:
            CacheError: If the database cannot be written.
        """
        try:
            if not self.db_path.exists():
                return False
            return self._delete(self.path_key)
        except (sqlite3.Error, OSError) as e:
            raise CacheError(f"Failed to remove binary path: {e}") from e

    def read_preference(self) -> str:
        """Get the stored installation preference.

        Informational only; discovery does not act on it.

        Returns:
            The preference, "system" when none is stored or readable.
        """
        try:
            value = self._get(self.preference_key)
        except (sqlite3.Error, OSError) as e:
            logger.debug("Cannot read installation preference: %s", e)
            return DEFAULT_PREFERENCE
        return value or DEFAULT_PREFERENCE
