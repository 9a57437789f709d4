"""Discovery of working installations of the tool."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from claude_locator.enumerators import PathEnumerator
from claude_locator.protocols import Prober
from claude_locator.types import Candidate, Installation, InstallationType, ProbeResult

logger = logging.getLogger(__name__)


def dedupe_candidates(candidates: list[Candidate]) -> list[Candidate]:
    """Drop candidates whose path was already proposed.

    Paths are compared as raw strings; the first occurrence wins.

    Args:
        candidates: Candidates in strategy priority order.

    Returns:
        Candidates with unique paths, order preserved.
    """
    seen: set[str] = set()
    unique: list[Candidate] = []
    for candidate in candidates:
        if candidate.path in seen:
            continue
        seen.add(candidate.path)
        unique.append(candidate)
    return unique


class Discovery:
    """Merges discovery strategies into a list of working installations."""

    def __init__(
        self,
        enumerator: PathEnumerator,
        prober: Prober,
        max_workers: int = 1,
    ) -> None:
        """Initialize discovery.

        Args:
            enumerator: Runs the discovery strategies.
            prober: Liveness probe applied to every unique candidate.
            max_workers: Probes run concurrently when greater than 1.

        Note:
            Prefer using factory method `create()` for construction.
        """
        self.enumerator = enumerator
        self.prober = prober
        self.max_workers = max(1, max_workers)

    @classmethod
    def create(
        cls,
        enumerator: PathEnumerator,
        prober: Prober,
        max_workers: int = 1,
    ) -> Discovery:
        """Create a discovery instance.

        Returns:
            Configured Discovery instance.
        """
        return cls(enumerator=enumerator, prober=prober, max_workers=max_workers)

    def discover(self) -> list[Installation]:
        """Find every installation that passes the liveness probe.

        Returns:
            Working installations in strategy priority order.
        """
        candidates = dedupe_candidates(self.enumerator.enumerate_all())
        logger.debug("Probing %d unique candidates", len(candidates))

        results = self._probe_all(candidates)

        installations: list[Installation] = []
        for candidate, result in zip(candidates, results):
            if not result.functional:
                logger.warning(
                    "Installation at %s is not functional, removing from list",
                    candidate.path,
                )
                continue
            installations.append(
                Installation(
                    path=candidate.path,
                    version=result.version or candidate.version,
                    source=candidate.source,
                    installation_type=InstallationType.SYSTEM,
                )
            )
        return installations

    def _probe_all(self, candidates: list[Candidate]) -> list[ProbeResult]:
        """Probe candidates, returning results in candidate order."""
        paths = [candidate.path for candidate in candidates]
        if self.max_workers == 1 or len(paths) < 2:
            return [self.prober.probe(path) for path in paths]

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            return list(pool.map(self.prober.probe, paths))
