"""Filesystem abstraction for testability.

The RealFileSystem implementation wraps standard library operations and turns
unreadable locations into empty answers, so a strategy probing a directory it
may not list simply finds nothing there.
"""

from __future__ import annotations

import glob
from pathlib import Path


class RealFileSystem:
    """Production filesystem implementation.

    Wraps standard library Path and glob operations.
    Satisfies the FileSystem protocol structurally.
    """

    def exists(self, path: Path) -> bool:
        """Check if a path exists."""
        try:
            return path.exists()
        except OSError:
            return False

    def is_file(self, path: Path) -> bool:
        """Check if a path is a regular file."""
        try:
            return path.is_file()
        except OSError:
            return False

    def is_dir(self, path: Path) -> bool:
        """Check if a path is a directory."""
        try:
            return path.is_dir()
        except OSError:
            return False

    def iterdir(self, path: Path) -> list[Path]:
        """List directory entries, empty if the directory is unreadable."""
        try:
            return sorted(path.iterdir())
        except OSError:
            return []

    def glob(self, pattern: str) -> list[Path]:
        """Expand an absolute glob pattern."""
        return [Path(match) for match in sorted(glob.glob(pattern))]

    def read_text(self, path: Path) -> str:
        """Read text content from a file."""
        return path.read_text(encoding="utf-8", errors="replace")
