"""Coverage configuration helpers."""

from vitest_guard.coverage.exclude import DEFAULT_COVERAGE_EXCLUDE, build_coverage_exclude

__all__ = ["DEFAULT_COVERAGE_EXCLUDE", "build_coverage_exclude"]
