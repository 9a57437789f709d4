"""Shared data types for claude-locator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

__all__ = ["Candidate", "Installation", "InstallationType", "ProbeResult"]


class InstallationType(str, Enum):
    """How an installation came to be known."""

    # Reserved for a sidecar shipped with the host application; never discovered.
    BUNDLED = "bundled"
    SYSTEM = "system"
    CUSTOM = "custom"


@dataclass(frozen=True)
class Candidate:
    """A location proposed by an enumerator, not yet probed.

    Attributes:
        path: Location used to invoke the tool.
        source: Tag of the discovery strategy that proposed it.
        version: Version already known from the enumerator, if it ran the tool.
    """

    path: str
    source: str
    version: str | None = None


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of running a candidate with the version argument."""

    functional: bool
    version: str | None = None


@dataclass(frozen=True)
class Installation:
    """A confirmed installation of the tool.

    Attributes:
        path: Absolute path or bare command name. Not normalized; two
            installations are the same when their paths are equal strings.
        version: Version reported by the tool, None when it printed none.
        source: Discovery strategy tag, used for display and ranking.
        installation_type: How the installation was obtained.
    """

    path: str
    version: str | None
    source: str
    installation_type: InstallationType = InstallationType.SYSTEM

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.path:
            raise ValueError("path cannot be empty")

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "path": self.path,
            "version": self.version,
            "source": self.source,
            "installation_type": self.installation_type.value,
        }
