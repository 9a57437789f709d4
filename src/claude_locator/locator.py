"""Entry points: find one usable binary, or list every usable one."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from claude_locator.cache import CacheError
from claude_locator.discovery import Discovery
from claude_locator.protocols import InstallationStore, Prober
from claude_locator.selection import select_best, sort_for_display
from claude_locator.types import Installation, InstallationType

if TYPE_CHECKING:
    from claude_locator.context import AppContext

logger = logging.getLogger(__name__)


class BinaryNotFoundError(Exception):
    """No working installation of the tool could be found."""

    def __init__(self, tool_name: str, locations: Sequence[str], detail: str | None = None) -> None:
        self.tool_name = tool_name
        self.locations = list(locations)
        message = detail or (
            f"{tool_name} not found. Please ensure it's installed in one of these "
            f"locations: {', '.join(self.locations)}"
        )
        super().__init__(message)


class BinaryLocator:
    """Finds the tool, consulting and refreshing the installation cache."""

    def __init__(
        self,
        discovery: Discovery,
        cache: InstallationStore,
        prober: Prober,
        tool_name: str,
        bare_names: Sequence[str],
        expected_locations: Sequence[str],
    ) -> None:
        """Initialize the locator.

        Args:
            discovery: Discovery aggregator.
            cache: Persisted last-known-good path.
            prober: Liveness probe for user-supplied paths.
            tool_name: Canonical tool name, for messages.
            bare_names: Unqualified command names, avoided by selection.
            expected_locations: Locations named in not-found errors.

        Note:
            Prefer using factory method `create()` for construction.
        """
        self.discovery = discovery
        self.cache = cache
        self.prober = prober
        self.tool_name = tool_name
        self.bare_names = tuple(bare_names)
        self.expected_locations = list(expected_locations)

    @classmethod
    def create(
        cls,
        discovery: Discovery,
        cache: InstallationStore,
        prober: Prober,
        tool_name: str,
        bare_names: Sequence[str],
        expected_locations: Sequence[str],
    ) -> BinaryLocator:
        """Create a binary locator.

        Returns:
            Configured BinaryLocator instance.
        """
        return cls(
            discovery=discovery,
            cache=cache,
            prober=prober,
            tool_name=tool_name,
            bare_names=bare_names,
            expected_locations=expected_locations,
        )

    def _read_cache(self) -> str | None:
        try:
            cached = self.cache.read()
            logger.debug("Installation preference: %s", self.cache.read_preference())
            return cached
        except CacheError as e:
            logger.warning("Installation cache unavailable: %s", e)
            return None

    def _write_cache(self, path: str) -> None:
        try:
            self.cache.write(path)
        except CacheError as e:
            logger.warning("Failed to store binary path in database: %s", e)

    def find_binary(self) -> str:
        """Get one working path to the tool.

        Uses the cached path while it still works; otherwise discovers,
        selects the best installation and caches it.

        Returns:
            Path (or bare command name) to invoke.

        Raises:
            BinaryNotFoundError: If no installation passes the liveness probe.
        """
        logger.info("Searching for %s binary...", self.tool_name)

        cached = self._read_cache()
        if cached is not None:
            return cached

        installations = self.discovery.discover()
        for installation in installations:
            logger.info("Found installation: %s", installation)

        best = select_best(installations, self.bare_names)
        if best is None:
            logger.error("Could not find %s in any location", self.tool_name)
            raise BinaryNotFoundError(self.tool_name, self.expected_locations)

        logger.info(
            "Selected installation: path=%s, version=%s, source=%s",
            best.path,
            best.version,
            best.source,
        )
        self._write_cache(best.path)
        return best.path

    def discover_all(self) -> list[Installation]:
        """List every working installation, best first, for a human to choose.

        The cache is neither read nor written.

        Returns:
            Installations in display order; empty if none were found.
        """
        logger.info("Discovering all %s installations...", self.tool_name)
        return sort_for_display(self.discovery.discover())

    def set_custom_path(self, path: str) -> Installation:
        """Use a path chosen by the user.

        Args:
            path: Path to the tool.

        Returns:
            The installation, typed as custom.

        Raises:
            BinaryNotFoundError: If the path does not pass the liveness probe.
            CacheError: If the path cannot be stored.
        """
        result = self.prober.probe(path)
        if not result.functional:
            raise BinaryNotFoundError(
                self.tool_name,
                [path],
                detail=f"{path} is not a working {self.tool_name} binary",
            )
        self.cache.write(path)
        return Installation(
            path=path,
            version=result.version,
            source="custom",
            installation_type=InstallationType.CUSTOM,
        )


def find_binary(ctx: AppContext) -> str:
    """Get one working path to the tool using an application context."""
    return ctx.locator.find_binary()


def discover_all(ctx: AppContext) -> list[Installation]:
    """List every working installation using an application context."""
    return ctx.locator.discover_all()
