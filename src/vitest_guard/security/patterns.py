"""
Pattern tables for input validation.

Immutable by construction (frozensets, tuples, compiled patterns). Nothing
outside the security package should import these directly; use the
validation functions instead.
"""

from __future__ import annotations

import re
from typing import Final

# Limits
MAX_PATH_LENGTH: Final[int] = 4096
MAX_PATH_DEPTH: Final[int] = 20
MAX_ARGUMENT_LENGTH: Final[int] = 256
MAX_PATTERN_LENGTH: Final[int] = 256
MAX_PATTERNS: Final[int] = 50
MAX_CONTENT_BYTES: Final[int] = 1024 * 1024
MAX_TEMP_PREFIX_LENGTH: Final[int] = 64
TEMP_TOKEN_BYTES: Final[int] = 32
TEMP_SUFFIX: Final[str] = ".tmp"
DEFAULT_TEMP_PREFIX: Final[str] = "tmp"

# Paths: parent traversal anywhere, NUL and every other control character.
DANGEROUS_PATH_PATTERN: Final[re.Pattern] = re.compile(r"\.\.|[\x00-\x1f\x7f]")

# System directories, stored lower-case with forward slashes.
POSIX_SYSTEM_DIRECTORIES: Final[tuple[str, ...]] = (
    "/etc",
    "/usr",
    "/bin",
    "/sbin",
    "/root",
    "/sys",
    "/proc",
    "/dev",
    "/boot",
    "/lib",
    "/lib64",
    "/private/etc",
)

# Matched below any drive letter or a bare root ("c:/windows", "d:program files",
# "/windows"), stored without the leading separator.
WINDOWS_SYSTEM_DIRECTORIES: Final[tuple[str, ...]] = (
    "windows",
    "program files",
    "program files (x86)",
    "programdata",
)

# Optional "\\?\" or "\\.\" device prefix, then "x:", "x:/" or "/".
WINDOWS_ROOT_PATTERN: Final[re.Pattern] = re.compile(r"^(?:/\?/|/)?(?:[a-z]:/?|/)")

# Forbidden wherever they appear as a path component.
WINDOWS_SYSTEM_COMPONENTS: Final[frozenset[str]] = frozenset({"system32", "syswow64"})

# Extensions
TEST_FILE_EXTENSIONS: Final[tuple[str, ...]] = (
    ".test.ts",
    ".spec.ts",
    ".test.tsx",
    ".spec.tsx",
    ".test.js",
    ".spec.js",
    ".test.jsx",
    ".spec.jsx",
    ".test.mjs",
    ".spec.mjs",
    # Coverage targets are plain source files too
    ".ts",
    ".tsx",
    ".js",
    ".jsx",
    ".mjs",
    ".cjs",
    ".mts",
    ".cts",
)

CONFIG_FILE_EXTENSIONS: Final[tuple[str, ...]] = (".ts", ".js", ".json", ".mjs", ".cjs")

CONFIG_FILE_NAME_PATTERN: Final[re.Pattern] = re.compile(r"vitest|vite|config", re.IGNORECASE)

# Temp-file prefixes keep only these characters.
UNSAFE_PREFIX_CHARS: Final[re.Pattern] = re.compile(r"[^A-Za-z0-9_-]")

# Content sanitization
SCRIPT_OPEN_TAG: Final[re.Pattern] = re.compile(r"<script\b", re.IGNORECASE)
SCRIPT_CLOSE_TAG: Final[re.Pattern] = re.compile(r"</script\s*>", re.IGNORECASE)
DANGEROUS_PROTOCOL_PATTERN: Final[re.Pattern] = re.compile(
    r"\b(?:javascript|vbscript|livescript|data):", re.IGNORECASE
)
# Tab, LF and CR survive; lone surrogates cannot be encoded and go too.
NON_PRINTABLE_PATTERN: Final[re.Pattern] = re.compile(
    "[\x00-\x08\x0b\x0c\x0e-\x1f\x7f\ud800-\udfff]"
)

# Command arguments: a denylist of shell constructs.
DANGEROUS_ARGUMENT_PATTERN: Final[re.Pattern] = re.compile(r"[;&|`<>\n\r\x00]|\$\(|\$\{|\.\.")

# Glob patterns: an allowlist of characters.
# \w keeps "_" so that "**/node_modules/**" passes.
SAFE_GLOB_PATTERN: Final[re.Pattern] = re.compile(r"[\w\-/.*]+", re.ASCII)
