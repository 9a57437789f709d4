"""Windows platform traits."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import PureWindowsPath

from .base import COMMON_ENV, BasePlatform

# subprocess.CREATE_NO_WINDOW, which only exists on Windows builds of Python.
CREATE_NO_WINDOW = 0x08000000

WINDOWS_ENV = frozenset(
    {
        "PATH",
        "USERPROFILE",
        "USERNAME",
        "COMPUTERNAME",
        "APPDATA",
        "LOCALAPPDATA",
        "TEMP",
        "TMP",
        # Needed by the process loader to start anything at all.
        "SYSTEMROOT",
        "PATHEXT",
    }
)


class WindowsPlatform(BasePlatform):
    """Windows platform handler."""

    name = "windows"
    home_var = "USERPROFILE"
    path_separator = ";"
    lookup_command = "where"
    executable_suffixes = ("", ".cmd")
    creation_flags = CREATE_NO_WINDOW
    inherited_env = COMMON_ENV | WINDOWS_ENV
    rebuild_path = False
    pure_path = PureWindowsPath

    def standard_paths(self, home: str, tool_name: str) -> list[tuple[str, str]]:
        """Get conventional install paths under the user profile.

        Args:
            home: User profile directory.
            tool_name: Canonical tool name.

        Returns:
            List of (path, source) pairs.
        """
        t = tool_name
        return [
            (f"{home}/.claude/local/{t}", "claude-local"),
            (f"{home}/.local/bin/{t}", "local-bin"),
            (f"{home}/.npm-global/bin/{t}", "npm-global"),
            (f"{home}/.yarn/bin/{t}", "yarn"),
            (f"{home}/.bun/bin/{t}", "bun"),
            (f"{home}/bin/{t}", "home-bin"),
            (f"{home}/node_modules/.bin/{t}", "node-modules"),
            (f"{home}/.config/yarn/global/node_modules/.bin/{t}", "yarn-global"),
            (f"{home}/AppData/Roaming/npm/{t}.cmd", "npm-global-windows"),
            (f"{home}/AppData/Roaming/npm/{t}", "npm-global-windows"),
        ]

    def env_conditioned_paths(
        self, env: Mapping[str, str], tool_name: str
    ) -> list[tuple[str, str]]:
        """Get Program Files and roaming AppData install paths.

        Each root contributes only when its environment variable is set.

        Args:
            env: Process environment.
            tool_name: Canonical tool name.

        Returns:
            List of (path, source) pairs.
        """
        roots = [
            ("ProgramFiles", "nodejs", "nodejs"),
            ("ProgramFiles(x86)", "nodejs", "nodejs-x86"),
            ("APPDATA", "npm", "npm-appdata"),
        ]
        paths: list[tuple[str, str]] = []
        for var, subdir, source in roots:
            base = env.get(var)
            if not base:
                continue
            for name in (f"{tool_name}.cmd", tool_name):
                paths.append((str(PureWindowsPath(base, subdir, name)), source))
        return paths

    def expected_locations(self) -> list[str]:
        """Get the install locations named when the tool cannot be found."""
        return [
            "PATH",
            r"%APPDATA%\npm",
            r"%ProgramFiles%\nodejs",
            r"%USERPROFILE%\.nvm\versions\node\*\bin",
            r"%USERPROFILE%\.claude\local",
        ]
