"""
Path Security Validator.

Rejects traversal sequences, control characters, over-long or over-deep
paths and system directories, and resolves candidates strictly inside a
trusted project root. All functions are pure: they inspect strings and never
touch the filesystem.
"""

from __future__ import annotations

import os
import posixpath
import secrets
from typing import Any, Optional, Sequence

from vitest_guard.security.patterns import (
    CONFIG_FILE_EXTENSIONS,
    CONFIG_FILE_NAME_PATTERN,
    DANGEROUS_PATH_PATTERN,
    DEFAULT_TEMP_PREFIX,
    MAX_PATH_DEPTH,
    MAX_PATH_LENGTH,
    MAX_TEMP_PREFIX_LENGTH,
    POSIX_SYSTEM_DIRECTORIES,
    TEMP_SUFFIX,
    TEMP_TOKEN_BYTES,
    TEST_FILE_EXTENSIONS,
    UNSAFE_PREFIX_CHARS,
    WINDOWS_ROOT_PATTERN,
    WINDOWS_SYSTEM_COMPONENTS,
    WINDOWS_SYSTEM_DIRECTORIES,
)
from vitest_guard.shared.domain.exceptions import (
    BoundaryEscapeError,
    ConfigNameNotAllowedError,
    DangerousPatternError,
    ExtensionNotAllowedError,
    InvalidInputError,
    SystemDirectoryForbiddenError,
    TooDeepError,
    TooLongError,
)


def _as_text(value: Any) -> Any:
    """Unwrap os.PathLike values; everything else is returned untouched."""
    if isinstance(value, os.PathLike):
        return os.fspath(value)
    return value


def _normalize_for_matching(path: str) -> str:
    """Lower-case, forward slashes only, no '.' or repeated separators."""
    unified = path.replace("\\", "/")
    while "//" in unified:
        unified = unified.replace("//", "/")
    return posixpath.normpath(unified).lower()


def _find_system_directory(normalized: str) -> Optional[str]:
    for directory in POSIX_SYSTEM_DIRECTORIES:
        if normalized == directory or normalized.startswith(directory + "/"):
            return directory

    windows_root = WINDOWS_ROOT_PATTERN.match(normalized)
    if windows_root:
        rest = normalized[windows_root.end():]
        for directory in WINDOWS_SYSTEM_DIRECTORIES:
            if rest == directory or rest.startswith(directory + "/"):
                return windows_root.group(0) + directory

    for component in normalized.split("/"):
        if component in WINDOWS_SYSTEM_COMPONENTS:
            return component

    return None


def validate_path_security(path: Any) -> None:
    """
    Validate that an untrusted path is syntactically safe.

    Checks run in order and the first failure wins: type/emptiness, length,
    dangerous sequences (``..``, NUL, control characters), depth and finally
    the system directory denylist (POSIX and Windows, any case, any
    separator style).

    A path that passes is not yet known to stay inside any particular root;
    use ``secure_path_resolve`` for that.

    Raises:
        InvalidInputError: Empty or non-string path
        TooLongError: More than MAX_PATH_LENGTH characters
        DangerousPatternError: Traversal, NUL byte or control character
        TooDeepError: More than MAX_PATH_DEPTH segments
        SystemDirectoryForbiddenError: Path lies in a system directory
    """
    path = _as_text(path)
    if not isinstance(path, str) or not path:
        raise InvalidInputError("Path", path)

    if len(path) > MAX_PATH_LENGTH:
        raise TooLongError("Path", path, MAX_PATH_LENGTH)

    if DANGEROUS_PATH_PATTERN.search(path):
        raise DangerousPatternError("Path", path, "dangerous path pattern")

    normalized = _normalize_for_matching(path)
    segments = [segment for segment in normalized.split("/") if segment and segment != "."]
    if len(segments) > MAX_PATH_DEPTH:
        raise TooDeepError(path, len(segments), MAX_PATH_DEPTH)

    directory = _find_system_directory(normalized)
    if directory is not None:
        raise SystemDirectoryForbiddenError(path, directory)


def _normalize_root(root: Any) -> str:
    root = _as_text(root)
    if not isinstance(root, str) or not root:
        raise InvalidInputError("Project root", root)
    return os.path.normpath(os.path.abspath(root))


def _is_within(path: str, root: str) -> bool:
    path = os.path.normcase(path)
    root = os.path.normcase(root)
    if path == root:
        return True
    prefix = root if root.endswith(os.sep) else root + os.sep
    return path.startswith(prefix)


def secure_path_resolve(root: Any, candidate: Any) -> str:
    """
    Resolve an untrusted path against a trusted project root.

    Args:
        root: Trusted boundary directory (not checked against system dirs)
        candidate: Untrusted relative or absolute path

    Returns:
        Absolute normalized path equal to root or inside it

    Raises:
        SecurityError: Candidate fails validate_path_security
        BoundaryEscapeError: Resolved path lies outside root
    """
    validate_path_security(candidate)
    candidate = _as_text(candidate)
    base = _normalize_root(root)

    # An absolute candidate replaces the base here; the boundary check catches it.
    resolved = os.path.normpath(os.path.join(base, candidate))

    if not _is_within(resolved, base):
        raise BoundaryEscapeError(candidate, base, resolved)

    return resolved


def _extension_of(path: str) -> tuple[str, str]:
    name = posixpath.basename(path.replace("\\", "/")).lower()
    return name, posixpath.splitext(name)[1]


def validate_file_extension(path: Any, allowed: Sequence[str]) -> None:
    """
    Ensure the path has one of the allowed extensions (case-insensitive).

    Extensions include the leading dot. Compound entries such as
    ``.test.ts`` are honoured as suffixes of the file name.
    """
    path = _as_text(path)
    if not isinstance(path, str) or not path:
        raise InvalidInputError("File path", path)

    name, extension = _extension_of(path)
    allowed_lower = [ext.lower() for ext in allowed]

    if extension and extension in allowed_lower:
        return
    if any(ext.count(".") > 1 and name.endswith(ext) for ext in allowed_lower):
        return

    raise ExtensionNotAllowedError(path, extension, allowed)


def validate_test_file_path(path: Any) -> None:
    """Accept test files and the source files coverage can target."""
    validate_file_extension(path, TEST_FILE_EXTENSIONS)


def validate_config_file_path(path: Any) -> None:
    """Accept vitest/vite configuration artifacts. Extension is checked first."""
    validate_file_extension(path, CONFIG_FILE_EXTENSIONS)

    name, _ = _extension_of(_as_text(path))
    if not CONFIG_FILE_NAME_PATTERN.search(name):
        raise ConfigNameNotAllowedError(path, name)


def create_secure_temp_path(root: Any, prefix: Any) -> str:
    """
    Build an unpredictable temp file path under root.

    The prefix is a label, not an identifier: characters outside
    ``[A-Za-z0-9_-]`` are dropped rather than rejected. The token is 256
    bits from the ``secrets`` CSPRNG, hex encoded. The root is trusted, as in
    ``secure_path_resolve``; only an empty or non-string root is refused.

    Returns:
        ``<root>/<prefix>-<64 hex chars>.tmp``

    Raises:
        InvalidInputError: Root is empty or not a string
    """
    label = UNSAFE_PREFIX_CHARS.sub("", prefix) if isinstance(prefix, str) else ""
    label = label[:MAX_TEMP_PREFIX_LENGTH] or DEFAULT_TEMP_PREFIX

    token = secrets.token_hex(TEMP_TOKEN_BYTES)
    return secure_path_resolve(root, f"{label}-{token}{TEMP_SUFFIX}")
