"""
Command argument and glob pattern validation.

Arguments are checked against a denylist of shell constructs; glob patterns
against an allowlist of characters.
"""

from __future__ import annotations

from typing import Any

from vitest_guard.security.patterns import (
    DANGEROUS_ARGUMENT_PATTERN,
    MAX_ARGUMENT_LENGTH,
    MAX_PATTERN_LENGTH,
    MAX_PATTERNS,
    SAFE_GLOB_PATTERN,
)
from vitest_guard.shared.domain.exceptions import (
    DangerousPatternError,
    InvalidCharactersError,
    InvalidInputError,
    PathTraversalInPatternError,
    TooLongError,
    TooManyPatternsError,
)


def validate_command_argument(arg: Any, name: str) -> None:
    """
    Validate a single value destined for a subprocess argument vector.

    Args:
        arg: Untrusted value (e.g. a vitest project name)
        name: Parameter name used in error messages

    Raises:
        InvalidInputError: Not a string, or empty
        TooLongError: Longer than MAX_ARGUMENT_LENGTH
        DangerousPatternError: Contains ; | & ` $( ${ < > newlines or ..
    """
    if not isinstance(arg, str) or not arg:
        raise InvalidInputError(name, arg)

    if len(arg) > MAX_ARGUMENT_LENGTH:
        raise TooLongError(name, arg, MAX_ARGUMENT_LENGTH)

    if DANGEROUS_ARGUMENT_PATTERN.search(arg):
        raise DangerousPatternError(name, arg, "dangerous characters")


def validate_glob_patterns(patterns: Any) -> None:
    """
    Validate coverage exclude patterns. Stops at the first bad pattern.

    Backslashes fall outside the character allowlist, so Windows-style
    traversal is reported as an invalid pattern rather than as traversal.

    Raises:
        InvalidInputError: Not a list/tuple, or an empty/non-string entry
        TooManyPatternsError: More than MAX_PATTERNS entries
        TooLongError: An entry longer than MAX_PATTERN_LENGTH
        InvalidCharactersError: An entry outside [A-Za-z0-9_-/.*]
        PathTraversalInPatternError: An entry containing '../' or ending in '..'
    """
    if not isinstance(patterns, (list, tuple)):
        raise InvalidInputError("Exclude patterns", patterns, expected="an array")

    if len(patterns) > MAX_PATTERNS:
        raise TooManyPatternsError(len(patterns), MAX_PATTERNS)

    for pattern in patterns:
        if not isinstance(pattern, str) or not pattern:
            raise InvalidInputError("Exclude pattern", pattern)

        if len(pattern) > MAX_PATTERN_LENGTH:
            raise TooLongError("Pattern", pattern, MAX_PATTERN_LENGTH)

        if not SAFE_GLOB_PATTERN.fullmatch(pattern):
            raise InvalidCharactersError(pattern)

        if "../" in pattern or pattern == ".." or pattern.endswith("/.."):
            raise PathTraversalInPatternError(pattern)
