"""Protocol definitions for core abstractions.

Discovery touches the outside world in three ways: it reads the filesystem,
spawns processes and persists one settings value. Each of those is described
here as a Protocol so tests can hand in doubles without patching modules.

All concrete implementations satisfy these protocols structurally (duck typing).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from claude_locator.process import RunResult
    from claude_locator.types import ProbeResult


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for the read-only filesystem queries discovery needs."""

    def exists(self, path: Path) -> bool:
        """Check if a path exists.

        Args:
            path: Path to check.

        Returns:
            True if path exists, False otherwise.
        """
        ...

    def is_file(self, path: Path) -> bool:
        """Check if a path is a regular file.

        Args:
            path: Path to check.

        Returns:
            True if path is a file, False otherwise.
        """
        ...

    def is_dir(self, path: Path) -> bool:
        """Check if a path is a directory.

        Args:
            path: Path to check.

        Returns:
            True if path is a directory, False otherwise.
        """
        ...

    def iterdir(self, path: Path) -> list[Path]:
        """List the entries of a directory.

        Args:
            path: Directory to list.

        Returns:
            Entries of the directory, empty if it cannot be read.
        """
        ...

    def glob(self, pattern: str) -> list[Path]:
        """Expand an absolute glob pattern.

        Args:
            pattern: Pattern such as ``/usr/share/applications/claude*.desktop``.

        Returns:
            Matching paths.
        """
        ...

    def read_text(self, path: Path) -> str:
        """Read text content from a file.

        Args:
            path: Path to the file.

        Returns:
            File content as string.

        Raises:
            OSError: If the file cannot be read.
        """
        ...


@runtime_checkable
class ProcessRunner(Protocol):
    """Protocol for spawning external programs."""

    def run(
        self,
        args: Sequence[str],
        env: Mapping[str, str] | None = None,
        creation_flags: int = 0,
        timeout: float | None = None,
    ) -> RunResult:
        """Run a program to completion and capture its output.

        Args:
            args: Program path or bare name followed by its arguments.
            env: Complete environment for the child; None inherits ours.
            creation_flags: Platform process-creation flags.
            timeout: Seconds to wait before giving up, None waits forever.

        Returns:
            Exit status and captured output.

        Raises:
            OSError: If the program cannot be started.
            subprocess.TimeoutExpired: If the timeout elapses.
        """
        ...


@runtime_checkable
class Prober(Protocol):
    """Protocol for the liveness probe."""

    def probe(self, path: str) -> ProbeResult:
        """Run a candidate with the version argument.

        Args:
            path: Candidate path or bare command name.

        Returns:
            Whether it ran successfully and the version it printed.
        """
        ...


@runtime_checkable
class InstallationStore(Protocol):
    """Protocol for the persisted "last known good" path."""

    def read(self) -> str | None:
        """Get the cached path if it still points at a working binary.

        Returns:
            The cached path, or None when absent or stale.
        """
        ...

    def write(self, path: str) -> None:
        """Store a path, replacing any previous one.

        Args:
            path: Path to remember.
        """
        ...

    def clear(self) -> bool:
        """Forget the cached path.

        Returns:
            True if an entry was removed.
        """
        ...

    def read_preference(self) -> str:
        """Get the stored installation preference.

        Returns:
            The preference, "system" when none is stored.
        """
        ...

    def stored_path(self) -> str | None:
        """Get the stored path without validating it.

        Returns:
            The raw stored value, or None.
        """
        ...
