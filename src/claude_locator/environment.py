"""Environment construction for spawned candidates.

A desktop application launched from a dock or start menu rarely inherits the
user's shell environment, so the tool (usually a Node.js script) would not
find ``node`` on PATH. The builder hands each child a curated environment:
an allow-list of variables from our own process, and on Unix-like systems a
PATH rebuilt from common toolchain locations.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from functools import cmp_to_key
from pathlib import Path

from claude_locator.filesystem import RealFileSystem
from claude_locator.platforms import BasePlatform
from claude_locator.protocols import FileSystem
from claude_locator.versions import compare_versions

logger = logging.getLogger(__name__)


class EnvironmentBuilder:
    """Builds the environment handed to probes and the chosen tool."""

    def __init__(
        self,
        platform: BasePlatform,
        environ: Mapping[str, str] | None = None,
        filesystem: FileSystem | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            platform: Platform traits.
            environ: Environment to inherit from. Defaults to os.environ.
            filesystem: Filesystem used to check PATH candidates.

        Note:
            Prefer using factory method `create()` for construction.
        """
        self.platform = platform
        self.environ = environ if environ is not None else os.environ
        self.fs = filesystem or RealFileSystem()

    @classmethod
    def create(
        cls,
        platform: BasePlatform,
        environ: Mapping[str, str] | None = None,
        filesystem: FileSystem | None = None,
    ) -> EnvironmentBuilder:
        """Create an environment builder.

        Args:
            platform: Platform traits.
            environ: Environment to inherit from.
            filesystem: Filesystem abstraction.

        Returns:
            Configured EnvironmentBuilder instance.
        """
        return cls(platform=platform, environ=environ, filesystem=filesystem)

    def build_env(self, program_path: str) -> dict[str, str]:
        """Build the environment for running a program.

        Args:
            program_path: Path or bare name of the program to be spawned.

        Returns:
            Complete environment for the child process.
        """
        env = {
            key: value
            for key, value in self.environ.items()
            if self.platform.should_inherit(key)
        }

        if self.platform.rebuild_path:
            path_value = self.build_path()
        else:
            path_value = self.environ.get("PATH", "")

        path_value = self._prepend_program_bin(program_path, path_value)
        if path_value:
            env["PATH"] = path_value
        return env

    def build_path(self) -> str:
        """Rebuild PATH from the current value plus toolchain directories.

        Order: current PATH, newest runtime-manager bin, then the platform's
        conventional bin directories. Added directories must exist.

        Returns:
            The new PATH value.
        """
        components: list[str] = []
        current = self.environ.get("PATH")
        if current:
            components.append(current)

        home = self.platform.home(self.environ) or ""
        extra: list[str] = []
        latest = self.latest_runtime_bin()
        if latest:
            extra.append(latest)
        extra.extend(self.platform.conventional_bin_dirs(home))

        for directory in extra:
            if directory and self.fs.exists(Path(directory)):
                components.append(directory)

        path_value = self.platform.path_separator.join(components)
        logger.debug("Rebuilt PATH: %s", path_value)
        return path_value

    def latest_runtime_bin(self) -> str | None:
        """Get the bin directory of the newest runtime-manager runtime.

        Runtimes are the ``v*`` subdirectories of the version-manager tree,
        ranked by their numeric version.

        Returns:
            Path of the bin directory, or None if no runtime is installed.
        """
        home = self.platform.home(self.environ)
        if not home:
            return None

        root = self.platform.version_manager_root(home)
        if not self.fs.is_dir(root):
            return None

        runtimes = [
            entry
            for entry in self.fs.iterdir(root)
            if entry.name.startswith("v") and self.fs.is_dir(entry)
        ]
        if not runtimes:
            return None

        by_version = cmp_to_key(lambda a, b: compare_versions(a.name[1:], b.name[1:]))
        newest = max(runtimes, key=by_version)
        bin_dir = str(newest / "bin")
        logger.debug("Newest runtime-manager bin: %s", bin_dir)
        return bin_dir

    def _prepend_program_bin(self, program_path: str, path_value: str) -> str:
        """Put a runtime-managed program's own bin directory first on PATH."""
        if not self.platform.is_version_manager_path(program_path):
            return path_value

        bin_dir = self.platform.parent_dir(program_path)
        entries = path_value.split(self.platform.path_separator) if path_value else []
        if bin_dir in entries:
            return path_value

        logger.debug("Adding runtime-manager bin directory to PATH: %s", bin_dir)
        return self.platform.path_separator.join([bin_dir, *entries])
