"""Discovery strategies that propose candidate locations of the tool.

Each strategy only reads the filesystem and environment, or asks the OS
where a command lives. None of them decides whether a candidate works; that
is the liveness probe's job once candidates are merged.
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Iterable, Mapping
from pathlib import Path

from claude_locator.environment import EnvironmentBuilder
from claude_locator.filesystem import RealFileSystem
from claude_locator.platforms import BasePlatform
from claude_locator.process import SubprocessRunner
from claude_locator.protocols import FileSystem, ProcessRunner, Prober
from claude_locator.types import Candidate

logger = logging.getLogger(__name__)

DESKTOP_EXEC_PREFIX = "Exec="
APPIMAGE_SUFFIX = ".appimage"


def parse_lookup_output(output: str, tool_name: str) -> str | None:
    """Extract a path from ``which``/``where`` output.

    Handles the shell alias form ``claude: aliased to /path/to/claude`` and
    multi-line output, of which only the first line counts.

    Args:
        output: Decoded standard output of the lookup command.
        tool_name: Canonical tool name.

    Returns:
        The path, or None if the output is empty.
    """
    text = output.strip()
    if not text:
        return None

    if text.startswith(f"{tool_name}:") and "aliased to" in text:
        text = text.split("aliased to", 1)[1].strip()

    first_line = text.splitlines()[0].strip() if text else ""
    return first_line or None


def parse_desktop_exec(content: str) -> str | None:
    """Get the program of the first ``Exec=`` line of a desktop entry.

    Args:
        content: Desktop entry file content.

    Returns:
        The first whitespace-separated token of the Exec value, or None if
        there is no Exec line or it is empty.
    """
    for line in content.splitlines():
        if line.startswith(DESKTOP_EXEC_PREFIX):
            tokens = line[len(DESKTOP_EXEC_PREFIX):].split()
            return tokens[0] if tokens else None
    return None


class PathEnumerator:
    """Runs every discovery strategy for one platform."""

    def __init__(
        self,
        platform: BasePlatform,
        prober: Prober,
        env_builder: EnvironmentBuilder,
        tool_name: str = "claude",
        runner: ProcessRunner | None = None,
        filesystem: FileSystem | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the enumerator.

        Args:
            platform: Platform traits and path tables.
            prober: Liveness probe, used for the bare-name PATH check.
            env_builder: Environment for the lookup command.
            tool_name: Canonical tool name.
            runner: Process runner for the lookup command.
            filesystem: Filesystem abstraction.
            environ: Environment to read home and install roots from.

        Note:
            Prefer using factory method `create()` for construction.
        """
        self.platform = platform
        self.prober = prober
        self.env_builder = env_builder
        self.tool_name = tool_name
        self.runner = runner or SubprocessRunner()
        self.fs = filesystem or RealFileSystem()
        self.environ = environ if environ is not None else os.environ

    @classmethod
    def create(
        cls,
        platform: BasePlatform,
        prober: Prober,
        env_builder: EnvironmentBuilder,
        tool_name: str = "claude",
        runner: ProcessRunner | None = None,
        filesystem: FileSystem | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> PathEnumerator:
        """Create an enumerator.

        Returns:
            Configured PathEnumerator instance.
        """
        return cls(
            platform=platform,
            prober=prober,
            env_builder=env_builder,
            tool_name=tool_name,
            runner=runner,
            filesystem=filesystem,
            environ=environ,
        )

    @property
    def home(self) -> str | None:
        """Home directory from the platform's home variable."""
        return self.platform.home(self.environ)

    def enumerate_all(self) -> list[Candidate]:
        """Run all strategies in priority order.

        The order decides which source tag survives when two strategies
        name the same path. It has no effect on ranking.

        Returns:
            Candidates, possibly with duplicate paths.
        """
        candidates: list[Candidate] = []
        candidates.extend(self.system_lookup())
        candidates.extend(self.version_manager())
        candidates.extend(self.standard_paths())
        candidates.extend(self.platform_extras())
        return candidates

    # ------------------------------------------------------------------
    # System lookup
    # ------------------------------------------------------------------

    def system_lookup(self) -> list[Candidate]:
        """Ask the OS command resolver (which/where) for the tool."""
        command = self.platform.lookup_command
        logger.debug("Trying '%s %s' to find binary...", command, self.tool_name)

        try:
            result = self.runner.run(
                [command, self.tool_name],
                env=self.env_builder.build_env(command),
                creation_flags=self.platform.creation_flags,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug("'%s' could not be run: %s", command, e)
            return []

        if not result.success:
            return []

        output = result.stdout.decode("utf-8", errors="replace")
        path = parse_lookup_output(output, self.tool_name)
        if path is None:
            return []

        logger.debug("'%s' found %s at: %s", command, self.tool_name, path)
        if not self.fs.exists(Path(path)):
            logger.warning("Path from '%s' does not exist: %s", command, path)
            return []

        return [Candidate(path=path, source=command)]

    # ------------------------------------------------------------------
    # Runtime version manager
    # ------------------------------------------------------------------

    def version_manager(self) -> list[Candidate]:
        """Scan each nvm-managed Node.js runtime for the tool."""
        home = self.home
        if not home:
            return []

        root = self.platform.version_manager_root(home)
        logger.debug("Checking version-manager directory: %s", root)

        candidates: list[Candidate] = []
        for runtime in self.fs.iterdir(root):
            if not self.fs.is_dir(runtime):
                continue
            for name in self.platform.executable_names(self.tool_name):
                binary = runtime / "bin" / name
                if self.fs.is_file(binary):
                    logger.debug("Found %s in runtime %s: %s", name, runtime.name, binary)
                    candidates.append(
                        Candidate(path=str(binary), source=f"nvm ({runtime.name})")
                    )
                    break
        return candidates

    # ------------------------------------------------------------------
    # Standard paths
    # ------------------------------------------------------------------

    def standard_paths(self) -> list[Candidate]:
        """Check the platform's conventional paths, then a bare PATH run."""
        candidates: list[Candidate] = []

        home = self.home
        if home:
            for path, source in self.platform.standard_paths(home, self.tool_name):
                if self.fs.is_file(Path(path)):
                    logger.debug("Found %s at standard path: %s (%s)", self.tool_name, path, source)
                    candidates.append(Candidate(path=path, source=source))

        path_hit = self.path_lookup()
        if path_hit is not None:
            candidates.append(path_hit)
        return candidates

    def path_lookup(self) -> Candidate | None:
        """Run each bare executable name; the first that works is the PATH hit."""
        for name in self.platform.executable_names(self.tool_name):
            result = self.prober.probe(name)
            if result.functional:
                logger.debug("%s is available in PATH", name)
                return Candidate(path=name, source="PATH", version=result.version)
        return None

    # ------------------------------------------------------------------
    # Platform extras
    # ------------------------------------------------------------------

    def platform_extras(self) -> list[Candidate]:
        """Run the package-manager and packaging-format strategies.

        Tables the platform leaves empty contribute nothing, so this runs
        the same sequence everywhere.
        """
        candidates: list[Candidate] = []
        candidates.extend(self._paths_that_are_files(
            self.platform.env_conditioned_paths(self.environ, self.tool_name)
        ))
        candidates.extend(self.cellar_versions())
        candidates.extend(self.desktop_entries())
        candidates.extend(self._paths_that_are_files(
            (path, "snap") for path in self.platform.snap_paths(self.tool_name)
        ))
        candidates.extend(self.flatpak())
        candidates.extend(self.appimages())
        candidates.extend(self._paths_that_are_files(
            self.platform.distribution_paths(self.tool_name)
        ))
        return candidates

    def cellar_versions(self) -> list[Candidate]:
        """Scan Homebrew cellars for every installed version of the tool."""
        candidates: list[Candidate] = []
        for cellar, tag in self.platform.cellar_roots():
            formula_dir = Path(cellar) / self.tool_name
            if not self.fs.exists(formula_dir):
                continue
            for version_dir in self.fs.iterdir(formula_dir):
                if not self.fs.is_dir(version_dir):
                    continue
                binary = version_dir / "bin" / self.tool_name
                if self.fs.is_file(binary):
                    logger.debug("Found %s in cellar: %s", self.tool_name, binary)
                    candidates.append(
                        Candidate(path=str(binary), source=f"{tag} ({version_dir.name})")
                    )
        return candidates

    def desktop_entries(self) -> list[Candidate]:
        """Read desktop entries installed by system, snap and flatpak packages."""
        candidates: list[Candidate] = []
        for entry in self.platform.desktop_entry_paths(self.tool_name):
            if "*" in entry:
                for match in self.fs.glob(entry):
                    candidate = self._from_desktop_file(match, "package-manager")
                    if candidate is not None:
                        candidates.append(candidate)
            else:
                path = Path(entry)
                if self.fs.exists(path):
                    candidate = self._from_desktop_file(path, "system-package")
                    if candidate is not None:
                        candidates.append(candidate)
        return candidates

    def _from_desktop_file(self, desktop_path: Path, default_source: str) -> Candidate | None:
        try:
            content = self.fs.read_text(desktop_path)
        except OSError as e:
            logger.debug("Cannot read desktop entry %s: %s", desktop_path, e)
            return None

        binary = parse_desktop_exec(content)
        if binary is None or not self.fs.exists(Path(binary)):
            return None

        location = str(desktop_path)
        if "snap" in location:
            source = "snap-desktop"
        elif "flatpak" in location:
            source = "flatpak-desktop"
        else:
            source = default_source

        logger.debug("Found %s binary from desktop file: %s", self.tool_name, binary)
        return Candidate(path=binary, source=source)

    def flatpak(self) -> list[Candidate]:
        """Check the per-user and system flatpak exports."""
        candidates: list[Candidate] = []

        home = self.home
        user_path = self.platform.flatpak_user_path(home, self.tool_name) if home else None
        # The user export is a symlink into the flatpak tree; existence is enough.
        if user_path and self.fs.exists(Path(user_path)):
            logger.debug("Found flatpak user installation: %s", user_path)
            candidates.append(Candidate(path=user_path, source="flatpak-user"))

        candidates.extend(self._paths_that_are_files(
            (path, "flatpak-system") for path in self.platform.flatpak_system_paths(self.tool_name)
        ))
        return candidates

    def appimages(self) -> list[Candidate]:
        """Scan user directories for AppImage files named after the tool."""
        home = self.home
        if not home:
            return []

        needle = self.tool_name.lower()
        candidates: list[Candidate] = []
        for directory in self.platform.appimage_dirs(home):
            for entry in self.fs.iterdir(Path(directory)):
                name = entry.name.lower()
                if needle in name and name.endswith(APPIMAGE_SUFFIX):
                    logger.debug("Found AppImage: %s", entry)
                    candidates.append(Candidate(path=str(entry), source="appimage-user"))
        return candidates

    def _paths_that_are_files(
        self, pairs: Iterable[tuple[str, str]]
    ) -> list[Candidate]:
        candidates: list[Candidate] = []
        for path, source in pairs:
            if self.fs.is_file(Path(path)):
                logger.debug("Found %s at %s (%s)", self.tool_name, path, source)
                candidates.append(Candidate(path=path, source=source))
        return candidates
