"""Discovery, validation and caching of the Claude Code CLI executable."""

__version__ = "0.1.0"

# Export protocol interfaces for type hints and dependency injection
from claude_locator.protocols import (
    FileSystem,
    InstallationStore,
    ProcessRunner,
    Prober,
)

__all__ = [
    "__version__",
    "FileSystem",
    "InstallationStore",
    "ProcessRunner",
    "Prober",
]
