"""Ranking of discovered installations.

Two orderings live here because two callers want different things:

``select_best`` picks one installation to use automatically. When neither
candidate reports a version it avoids a bare command name, since that only
resolves through whatever PATH the caller has at run time.

``sort_for_display`` orders the full list for a person choosing by hand and
breaks ties with the source preference table instead.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from functools import cmp_to_key

from claude_locator.types import Installation
from claude_locator.versions import compare_versions

# Lower is preferred.
SOURCE_PREFERENCE: dict[str, int] = {
    "which": 1,
    "where": 1,
    "homebrew-arm": 2,
    "homebrew-intel": 2,
    "homebrew": 3,
    "usr-local": 4,
    "system": 5,
    "local-bin": 7,
    "claude-local": 8,
    "npm-global": 9,
    "yarn": 10,
    "yarn-global": 10,
    "bun": 11,
    "pnpm": 12,
    "node-modules": 13,
    "home-bin": 14,
    "snap": 15,
    "flatpak-system": 16,
    "flatpak-user": 17,
    "appimage-user": 18,
    "macports": 19,
    "PATH": 20,
}
VERSION_MANAGER_PREFERENCE = 6
UNKNOWN_SOURCE_PREFERENCE = 21


def source_preference(source: str) -> int:
    """Get the preference rank of a discovery source.

    Args:
        source: Source tag, e.g. "which" or "nvm (v20.1.0)".

    Returns:
        Rank, lower is preferred.
    """
    if source in SOURCE_PREFERENCE:
        return SOURCE_PREFERENCE[source]
    if source.startswith("nvm"):
        return VERSION_MANAGER_PREFERENCE
    return UNKNOWN_SOURCE_PREFERENCE


def compare_for_selection(
    a: Installation, b: Installation, bare_names: Sequence[str] = ("claude",)
) -> int:
    """Order two installations for automatic selection.

    Args:
        a: First installation.
        b: Second installation.
        bare_names: Command names that count as unqualified PATH lookups.

    Returns:
        Positive if a is better, negative if b is better, 0 if equal.
    """
    if a.version is not None and b.version is not None:
        return compare_versions(a.version, b.version)
    if a.version is not None:
        return 1
    if b.version is not None:
        return -1

    a_bare = a.path in bare_names
    b_bare = b.path in bare_names
    if a_bare and not b_bare:
        return -1
    if b_bare and not a_bare:
        return 1
    return 0


def select_best(
    installations: Iterable[Installation], bare_names: Sequence[str] = ("claude",)
) -> Installation | None:
    """Pick the installation to use.

    Among equals the earliest one wins, so ties follow discovery order.

    Args:
        installations: Installations that passed the liveness probe.
        bare_names: Command names that count as unqualified PATH lookups.

    Returns:
        The best installation, or None if there are none.
    """
    best: Installation | None = None
    for installation in installations:
        if best is None or compare_for_selection(installation, best, bare_names) > 0:
            best = installation
    return best


def _compare_for_display(a: Installation, b: Installation) -> int:
    if a.version is not None and b.version is not None:
        # Newest first
        order = compare_versions(b.version, a.version)
        if order != 0:
            return order
        return source_preference(a.source) - source_preference(b.source)
    if a.version is not None:
        return -1
    if b.version is not None:
        return 1
    return source_preference(a.source) - source_preference(b.source)


def sort_for_display(installations: Iterable[Installation]) -> list[Installation]:
    """Order installations for a human chooser.

    Versioned entries come first, newest version first, ties broken by
    source preference. Unversioned entries follow, by source preference.

    Args:
        installations: Installations that passed the liveness probe.

    Returns:
        New sorted list.
    """
    return sorted(installations, key=cmp_to_key(_compare_for_display))
