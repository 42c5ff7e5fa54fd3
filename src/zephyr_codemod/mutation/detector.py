"""
PatternDetector: pick the catalog pattern that applies to a file.
"""

from typing import Optional, Sequence

from zephyr_codemod.catalog import BundlerPattern
from zephyr_codemod.logging_config import logger


def detect_pattern(content: str, patterns: Sequence[BundlerPattern]) -> Optional[BundlerPattern]:
    """
    Return the first pattern whose matcher finds the raw file text.

    Falls back to the first pattern when none matches, so an unrecognized
    file still gets a best-effort transform. Returns None only for an empty
    pattern list.

    Args:
        content: Original (pre-edit) file text
        patterns: Patterns in catalog order
    """
    for pattern in patterns:
        if pattern.matches(content):
            logger.debug(f"Matched pattern '{pattern.type}' -> {pattern.transform.value}")
            return pattern

    if not patterns:
        return None

    logger.info(f"No pattern matched, defaulting to '{patterns[0].type}'")
    return patterns[0]
