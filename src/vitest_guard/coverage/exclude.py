"""
Coverage exclude patterns.

Caller-supplied patterns are validated before they are merged with the
defaults that every coverage run excludes.
"""

from __future__ import annotations

from typing import Optional, Sequence

from vitest_guard.security import validate_glob_patterns

DEFAULT_COVERAGE_EXCLUDE: tuple[str, ...] = (
    "node_modules/",
    "dist/",
    "coverage/",
    "**/*.test.ts",
    "**/*.spec.ts",
)


def build_coverage_exclude(extra: Optional[Sequence[str]] = None) -> list[str]:
    """
    Merge validated extra patterns into the default exclude list.

    Defaults come first; duplicates are dropped, first occurrence wins.

    Raises:
        SecurityError: An extra pattern failed validate_glob_patterns
    """
    merged = list(DEFAULT_COVERAGE_EXCLUDE)
    if extra is None:
        return merged

    validate_glob_patterns(extra)
    for pattern in extra:
        if pattern not in merged:
            merged.append(pattern)
    return merged
