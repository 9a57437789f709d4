"""Application context for dependency injection.

This module separates object creation from object use, enabling testability
and reducing coupling in CLI commands.

Collaborators that touch the outside world (filesystem, processes, the
settings database) are typed using Protocols so tests can substitute doubles.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from claude_locator.cache import InstallationCache
from claude_locator.config import LocatorConfig, load_config
from claude_locator.discovery import Discovery
from claude_locator.environment import EnvironmentBuilder
from claude_locator.enumerators import PathEnumerator
from claude_locator.locator import BinaryLocator
from claude_locator.platforms import BasePlatform, detect_platform
from claude_locator.probe import ProbeExecutor
from claude_locator.protocols import FileSystem, InstallationStore, ProcessRunner, Prober


@dataclass
class AppContext:
    """Container for application dependencies.

    Provides a single injection point for all services used by CLI commands.
    """

    config: LocatorConfig
    platform: BasePlatform
    filesystem: FileSystem
    runner: ProcessRunner
    env_builder: EnvironmentBuilder
    prober: Prober
    discovery: Discovery
    cache: InstallationStore
    locator: BinaryLocator
    environ: Mapping[str, str] = field(default_factory=lambda: os.environ)


def create_context(
    config: LocatorConfig | None = None,
    platform: BasePlatform | None = None,
    environ: Mapping[str, str] | None = None,
    filesystem: FileSystem | None = None,
    runner: ProcessRunner | None = None,
) -> AppContext:
    """Factory for application dependencies.

    Creates all services with proper wiring. Use this in production code.
    For tests, pass doubles for the outside-world collaborators.

    Args:
        config: Settings. Loaded from disk when omitted.
        platform: Platform traits. Detected from the host when omitted.
        environ: Environment to read. Defaults to os.environ.
        filesystem: Filesystem abstraction.
        runner: Process runner.

    Returns:
        Configured AppContext with all dependencies.
    """
    from claude_locator.filesystem import RealFileSystem
    from claude_locator.process import SubprocessRunner

    config = config or load_config()
    platform = platform or detect_platform()
    environ = environ if environ is not None else os.environ
    filesystem = filesystem or RealFileSystem()
    runner = runner or SubprocessRunner()

    env_builder = EnvironmentBuilder.create(platform, environ=environ, filesystem=filesystem)
    prober = ProbeExecutor.create(
        platform,
        env_builder,
        runner=runner,
        version_arg=config.version_arg,
        timeout=config.probe_timeout,
    )
    enumerator = PathEnumerator.create(
        platform,
        prober,
        env_builder,
        tool_name=config.tool_name,
        runner=runner,
        filesystem=filesystem,
        environ=environ,
    )
    discovery = Discovery.create(enumerator, prober, max_workers=config.max_workers)
    cache = InstallationCache.create(
        config.database_path,
        prober,
        filesystem=filesystem,
        path_key=config.path_key,
        preference_key=config.preference_key,
    )
    locator = BinaryLocator.create(
        discovery=discovery,
        cache=cache,
        prober=prober,
        tool_name=config.tool_name,
        bare_names=platform.executable_names(config.tool_name),
        expected_locations=platform.expected_locations(),
    )

    return AppContext(
        config=config,
        platform=platform,
        filesystem=filesystem,
        runner=runner,
        env_builder=env_builder,
        prober=prober,
        discovery=discovery,
        cache=cache,
        locator=locator,
        environ=environ,
    )
