"""Unix-like platform traits (macOS, Linux and friends)."""

from __future__ import annotations

from .base import COMMON_ENV, BasePlatform

PROXY_ENV = frozenset({"HTTP_PROXY", "HTTPS_PROXY", "NO_PROXY", "ALL_PROXY"})


class UnixPlatform(BasePlatform):
    """Unix-like platform handler."""

    name = "unix"
    home_var = "HOME"
    path_separator = ":"
    lookup_command = "which"
    inherited_env = COMMON_ENV | PROXY_ENV
    rebuild_path = True

    def standard_paths(self, home: str, tool_name: str) -> list[tuple[str, str]]:
        """Get conventional install paths.

        /usr/local/bin appears twice on purpose: on Intel Macs it is the
        Homebrew prefix, elsewhere a plain system prefix. Dedup keeps the
        first tag.

        Args:
            home: Home directory.
            tool_name: Canonical tool name.

        Returns:
            List of (path, source) pairs.
        """
        t = tool_name
        return [
            # Homebrew
            (f"/usr/local/bin/{t}", "homebrew-intel"),
            (f"/opt/homebrew/bin/{t}", "homebrew-arm"),
            # System-wide
            (f"/usr/local/bin/{t}", "usr-local"),
            (f"/usr/bin/{t}", "usr-bin"),
            (f"/bin/{t}", "bin"),
            # User
            (f"{home}/.claude/local/{t}", "claude-local"),
            (f"{home}/.local/bin/{t}", "local-bin"),
            (f"{home}/bin/{t}", "home-bin"),
            # Node package managers
            (f"{home}/.npm-global/bin/{t}", "npm-global"),
            (f"{home}/.yarn/bin/{t}", "yarn"),
            (f"{home}/.bun/bin/{t}", "bun"),
            (f"{home}/.pnpm/{t}", "pnpm"),
            (f"{home}/node_modules/.bin/{t}", "node-modules"),
            (f"{home}/.config/yarn/global/node_modules/.bin/{t}", "yarn-global"),
            (f"/opt/local/bin/{t}", "macports"),
            # Linux packaging formats
            (f"/snap/bin/{t}", "snap"),
            (f"{home}/.local/share/flatpak/exports/bin/{t}", "flatpak-user"),
            (f"/var/lib/flatpak/exports/bin/{t}", "flatpak-system"),
            (f"{home}/Applications/{t}", "appimage-user"),
            (f"/opt/{t}/{t}", "opt"),
        ]

    def conventional_bin_dirs(self, home: str) -> list[str]:
        """Get toolchain bin directories appended to a rebuilt PATH."""
        return [
            "/opt/homebrew/bin",
            "/opt/homebrew/sbin",
            "/usr/local/bin",
            "/usr/local/sbin",
            "/usr/bin",
            "/bin",
            "/usr/sbin",
            "/sbin",
            f"{home}/.local/bin",
            f"{home}/.cargo/bin",
            f"{home}/.bun/bin",
        ]

    def cellar_roots(self) -> list[tuple[str, str]]:
        """Get Homebrew cellar roots (Intel, Apple Silicon)."""
        return [
            ("/usr/local/Cellar", "homebrew-intel"),
            ("/opt/homebrew/Cellar", "homebrew-arm"),
        ]

    def desktop_entry_paths(self, tool_name: str) -> list[str]:
        """Get desktop-entry files installed by system and sandboxed packages."""
        return [
            f"/usr/share/applications/{tool_name}.desktop",
            f"/usr/local/share/applications/{tool_name}.desktop",
            f"/var/lib/snapd/desktop/applications/{tool_name}*.desktop",
            f"/var/lib/flatpak/exports/share/applications/{tool_name}*.desktop",
        ]

    def snap_paths(self, tool_name: str) -> list[str]:
        """Get snap binary locations."""
        return [f"/snap/bin/{tool_name}", f"/var/lib/snapd/snap/bin/{tool_name}"]

    def flatpak_user_path(self, home: str, tool_name: str) -> str | None:
        """Get the per-user flatpak export of the tool."""
        return f"{home}/.local/share/flatpak/exports/bin/{tool_name}"

    def flatpak_system_paths(self, tool_name: str) -> list[str]:
        """Get system-wide flatpak exports of the tool."""
        return [
            f"/var/lib/flatpak/exports/bin/{tool_name}",
            f"/usr/local/share/flatpak/exports/bin/{tool_name}",
        ]

    def appimage_dirs(self, home: str) -> list[str]:
        """Get directories where users tend to drop AppImage files."""
        return [
            f"{home}/Applications",
            f"{home}/.local/bin",
            f"{home}/bin",
            f"{home}/Downloads",
        ]

    def distribution_paths(self, tool_name: str) -> list[tuple[str, str]]:
        """Get app-bundle, formula, developer-tool and distribution paths."""
        t = tool_name
        app = t.capitalize()
        return [
            # macOS application bundles
            (f"/Applications/{app}.app/Contents/MacOS/{t}", "app-bundle"),
            (f"/Applications/{app} CLI.app/Contents/MacOS/{t}", "app-bundle"),
            # Homebrew formula links
            (f"/usr/local/opt/{t}/bin/{t}", "homebrew-formula"),
            (f"/opt/homebrew/opt/{t}/bin/{t}", "homebrew-formula"),
            # MacPorts
            (f"/opt/local/share/{t}/bin/{t}", "macports-share"),
            # Developer tools
            (f"/Developer/usr/bin/{t}", "developer-tools"),
            (f"/Library/Developer/CommandLineTools/usr/bin/{t}", "xcode-cli"),
            # Linux system locations
            (f"/opt/{t}/bin/{t}", "opt-claude"),
            (f"/opt/{t}/{t}", "opt-claude-direct"),
            (f"/usr/lib/{t}/{t}", "usr-lib"),
            (f"/usr/libexec/{t}", "usr-libexec"),
            (f"/usr/share/{t}/bin/{t}", "usr-share"),
        ]

    def expected_locations(self) -> list[str]:
        """Get the install locations named when the tool cannot be found."""
        return [
            "PATH",
            "/usr/local/bin",
            "/opt/homebrew/bin",
            "~/.nvm/versions/node/*/bin",
            "~/.claude/local",
            "~/.local/bin",
        ]
