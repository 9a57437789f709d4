"""Base platform traits with shared behavior.

The discovery pipeline is the same on every platform. What varies is data:
the home variable, the lookup command, executable suffixes, process flags and
the tables of conventional install locations. Subclasses fill those in;
everything that walks the filesystem or spawns processes lives elsewhere.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path, PurePath, PurePosixPath

# Runtime-manager layout shared by Unix and Windows nvm installs.
VERSION_MANAGER_MARKER = "/.nvm/versions/node/"

# Environment variables every platform hands to a spawned tool.
COMMON_ENV = frozenset(
    {
        "HOME",
        "USER",
        "SHELL",
        "LANG",
        "NODE_PATH",
        "NVM_DIR",
        "NVM_BIN",
        "HOMEBREW_PREFIX",
        "HOMEBREW_CELLAR",
    }
)


class BasePlatform(ABC):
    """Base class for platform traits.

    Class attributes describe the platform; the table methods return
    ``(path, source)`` pairs for a given home directory and tool name.
    Tables a platform has no use for return empty lists.
    """

    name: str
    home_var: str
    path_separator: str
    lookup_command: str
    executable_suffixes: tuple[str, ...] = ("",)
    creation_flags: int = 0
    inherited_env: frozenset[str] = COMMON_ENV
    rebuild_path: bool = False
    pure_path: type[PurePath] = PurePosixPath

    def executable_names(self, tool_name: str) -> list[str]:
        """Get the file names the tool may have on this platform."""
        return [f"{tool_name}{suffix}" for suffix in self.executable_suffixes]

    def home(self, env: Mapping[str, str]) -> str | None:
        """Get the home directory from the environment, if set."""
        return env.get(self.home_var) or None

    def version_manager_root(self, home: str) -> Path:
        """Get the directory holding one subdirectory per managed runtime."""
        return Path(home, ".nvm", "versions", "node")

    def is_version_manager_path(self, program_path: str) -> bool:
        """Check if a program lives inside a runtime-manager tree."""
        return VERSION_MANAGER_MARKER in program_path.replace("\\", "/")

    def parent_dir(self, program_path: str) -> str:
        """Get the directory containing a program, in this platform's syntax."""
        return str(self.pure_path(program_path).parent)

    def should_inherit(self, key: str) -> bool:
        """Check if an environment variable is passed to spawned tools."""
        return key in self.inherited_env or key.startswith("LC_")

    @abstractmethod
    def standard_paths(self, home: str, tool_name: str) -> list[tuple[str, str]]:
        """Get conventional install paths under prefixes and the home directory."""
        ...

    def conventional_bin_dirs(self, home: str) -> list[str]:
        """Get toolchain bin directories appended to a rebuilt PATH."""
        return []

    def env_conditioned_paths(
        self, env: Mapping[str, str], tool_name: str
    ) -> list[tuple[str, str]]:
        """Get install paths rooted at optional environment variables."""
        return []

    def cellar_roots(self) -> list[tuple[str, str]]:
        """Get package-manager cellar roots and their source tag."""
        return []

    def desktop_entry_paths(self, tool_name: str) -> list[str]:
        """Get desktop-entry file paths; entries with ``*`` are glob patterns."""
        return []

    def snap_paths(self, tool_name: str) -> list[str]:
        """Get snap binary locations."""
        return []

    def flatpak_user_path(self, home: str, tool_name: str) -> str | None:
        """Get the per-user flatpak export of the tool."""
        return None

    def flatpak_system_paths(self, tool_name: str) -> list[str]:
        """Get system-wide flatpak exports of the tool."""
        return []

    def appimage_dirs(self, home: str) -> list[str]:
        """Get directories scanned for loosely named AppImage files."""
        return []

    def distribution_paths(self, tool_name: str) -> list[tuple[str, str]]:
        """Get OS-distribution and developer-tooling install paths."""
        return []

    def expected_locations(self) -> list[str]:
        """Get the install locations named when the tool cannot be found."""
        return ["PATH"]
