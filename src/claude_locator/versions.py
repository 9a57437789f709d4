"""Version extraction and comparison.

Comparison is numeric per dot-separated segment. Anything after the first
non-digit character of a segment is ignored, so ``1.0.17-beta`` and ``1.0.17``
compare equal. This is enough to order release versions of the tool; it is
not a semantic-versioning implementation.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

# Major.minor.patch with optional pre-release and build tags.
VERSION_PATTERN = re.compile(
    r"(\d+\.\d+\.\d+(?:-[a-zA-Z0-9.-]+)?(?:\+[a-zA-Z0-9.-]+)?)"
)

_LEADING_DIGITS = re.compile(r"[0-9]*")


def _segment_value(segment: str) -> int:
    digits = _LEADING_DIGITS.match(segment).group()
    return int(digits) if digits else 0


def version_sort_key(version: str) -> tuple[int, ...]:
    """Parse a dotted version into integer segments.

    Args:
        version: Version string such as "1.0.41" or "20.1.0-rc1".

    Returns:
        Tuple with one integer per segment.
    """
    return tuple(_segment_value(segment) for segment in version.split("."))


def compare_versions(a: str, b: str) -> int:
    """Compare two dotted version strings.

    Args:
        a: First version.
        b: Second version.

    Returns:
        -1 if a < b, 0 if equal, 1 if a > b.
    """
    a_parts = version_sort_key(a)
    b_parts = version_sort_key(b)
    for i in range(max(len(a_parts), len(b_parts))):
        a_val = a_parts[i] if i < len(a_parts) else 0
        b_val = b_parts[i] if i < len(b_parts) else 0
        if a_val != b_val:
            return -1 if a_val < b_val else 1
    return 0


def extract_version(stdout: bytes) -> str | None:
    """Pull the first version-looking token out of command output.

    Args:
        stdout: Raw standard output. Invalid UTF-8 is replaced, never fatal.

    Returns:
        The matched version, or None if the output contains none.
    """
    text = stdout.decode("utf-8", errors="replace")
    logger.debug("Raw version output: %r", text)

    match = VERSION_PATTERN.search(text)
    if match is None:
        logger.debug("No version found in output")
        return None

    version = match.group(1)
    logger.debug("Extracted version: %s", version)
    return version
