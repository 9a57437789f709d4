"""Platform-specific traits."""

from __future__ import annotations

import sys

from .base import BasePlatform
from .unix import UnixPlatform
from .windows import WindowsPlatform

__all__ = [
    "BasePlatform",
    "UnixPlatform",
    "WindowsPlatform",
    "detect_platform",
    "get_platform",
]


PLATFORMS: dict[str, type[BasePlatform]] = {
    "unix": UnixPlatform,
    "macos": UnixPlatform,  # Same traits as Linux; the tables cover both
    "linux": UnixPlatform,
    "windows": WindowsPlatform,
}


def get_platform(name: str) -> BasePlatform:
    """Get platform traits by name.

    Args:
        name: Platform name (unix, macos, linux, windows).

    Returns:
        Platform instance.

    Raises:
        ValueError: If platform is not supported.
    """
    if name not in PLATFORMS:
        raise ValueError(f"Unknown platform: {name}. Supported: {list(PLATFORMS.keys())}")
    return PLATFORMS[name]()


def detect_platform() -> BasePlatform:
    """Get the traits of the platform this interpreter runs on."""
    if sys.platform == "win32":
        return WindowsPlatform()
    return UnixPlatform()
