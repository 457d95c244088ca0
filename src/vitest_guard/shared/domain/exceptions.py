"""
Domain exceptions for vitest-guard.

Follows the "Fail Fast" and "Strict Types" principles.
All application errors inherit from GuardError. Security validation failures
inherit from SecurityError and carry a SecurityErrorKind plus the structured
fields the message is rendered from, so call sites can branch on the kind
and still show a stable, human-readable reason.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Sequence


class GuardError(Exception):
    """Base class for all vitest-guard exceptions."""

    def __init__(self, message: str, context: dict = None):
        super().__init__(message)
        self.context = context or {}


class ConfigurationError(GuardError):
    """Raised when configuration is invalid or corrupt."""

    pass


class FileAccessError(GuardError):
    """Raised when a validated path cannot be used (missing, not a file)."""

    pass


class CommandExecutionError(GuardError):
    """Raised when a validated command could not be started or timed out."""

    pass


class SecurityErrorKind(str, Enum):
    """One kind per class of validation failure."""

    INVALID_INPUT = "invalid_input"
    TOO_LONG = "too_long"
    TOO_DEEP = "too_deep"
    DANGEROUS_PATTERN = "dangerous_pattern"
    SYSTEM_DIRECTORY_FORBIDDEN = "system_directory_forbidden"
    EXTENSION_NOT_ALLOWED = "extension_not_allowed"
    CONFIG_NAME_NOT_ALLOWED = "config_name_not_allowed"
    BOUNDARY_ESCAPE = "boundary_escape"
    TOO_MANY_PATTERNS = "too_many_patterns"
    INVALID_CHARACTERS = "invalid_characters"
    PATH_TRAVERSAL_IN_PATTERN = "path_traversal_in_pattern"


class SecurityError(GuardError):
    """
    Raised when untrusted input violates a security rule.

    Subclasses set ``kind`` and implement ``render()``; the exception message
    is always derived from the structured fields.

    Attributes:
        kind: Which rule was violated
        subject: What was being validated ("Path", a parameter name, ...)
        value: The offending value (may be None for wrong-type input)
        limit: The limit that was exceeded, when there is one
    """

    kind: SecurityErrorKind

    def __init__(
        self,
        subject: str = "Input",
        value: Any = None,
        limit: Optional[int] = None,
        **fields: Any,
    ):
        self.subject = subject
        self.value = value
        self.limit = limit
        self.fields = fields
        context = {"kind": self.kind.value, "subject": subject}
        if limit is not None:
            context["limit"] = limit
        context.update(fields)
        super().__init__(self.render(), context)

    def render(self) -> str:
        raise NotImplementedError

    @property
    def message(self) -> str:
        return str(self)


class InvalidInputError(SecurityError):
    kind = SecurityErrorKind.INVALID_INPUT

    def __init__(self, subject: str, value: Any = None, expected: str = "a non-empty string"):
        super().__init__(subject, value, expected=expected)

    def render(self) -> str:
        return f"{self.subject} must be {self.fields['expected']}"


class TooLongError(SecurityError):
    kind = SecurityErrorKind.TOO_LONG

    def render(self) -> str:
        return f"{self.subject} too long (max {self.limit} characters)"


class TooDeepError(SecurityError):
    kind = SecurityErrorKind.TOO_DEEP

    def __init__(self, value: str, depth: int, limit: int):
        super().__init__("Path", value, limit, depth=depth)

    def render(self) -> str:
        return f"Path too deep ({self.fields['depth']} levels, max {self.limit})"


class DangerousPatternError(SecurityError):
    """Traversal sequences, NUL bytes, control characters, shell metacharacters."""

    kind = SecurityErrorKind.DANGEROUS_PATTERN

    def __init__(self, subject: str, value: Any, description: str):
        super().__init__(subject, value, description=description)

    def render(self) -> str:
        return f"{self.subject} contains {self.fields['description']}"


class SystemDirectoryForbiddenError(SecurityError):
    kind = SecurityErrorKind.SYSTEM_DIRECTORY_FORBIDDEN

    def __init__(self, value: str, directory: str):
        super().__init__("Path", value, directory=directory)

    def render(self) -> str:
        return f"Access to system directory forbidden: {self.fields['directory']}"


class ExtensionNotAllowedError(SecurityError):
    kind = SecurityErrorKind.EXTENSION_NOT_ALLOWED

    def __init__(self, value: str, extension: str, allowed: Sequence[str]):
        super().__init__("File", value, extension=extension, allowed=list(allowed))

    @property
    def extension(self) -> str:
        return self.fields["extension"]

    def render(self) -> str:
        allowed = ", ".join(self.fields["allowed"])
        return f"File extension '{self.extension}' not allowed. Allowed: {allowed}"


class ConfigNameNotAllowedError(SecurityError):
    kind = SecurityErrorKind.CONFIG_NAME_NOT_ALLOWED

    def __init__(self, value: str, filename: str):
        super().__init__("Config file", value, filename=filename)

    def render(self) -> str:
        return f"Config file name '{self.fields['filename']}' not allowed"


class BoundaryEscapeError(SecurityError):
    kind = SecurityErrorKind.BOUNDARY_ESCAPE

    def __init__(self, value: str, root: str, resolved: str):
        super().__init__("Path", value, root=root, resolved=resolved)

    def render(self) -> str:
        return f"Path escapes project boundary: {self.value} is outside {self.fields['root']}"


class TooManyPatternsError(SecurityError):
    kind = SecurityErrorKind.TOO_MANY_PATTERNS

    def __init__(self, count: int, limit: int):
        super().__init__("Exclude patterns", None, limit, count=count)

    def render(self) -> str:
        return f"Too many exclude patterns ({self.fields['count']}, max {self.limit})"


class InvalidCharactersError(SecurityError):
    kind = SecurityErrorKind.INVALID_CHARACTERS

    def __init__(self, value: str):
        super().__init__("Pattern", value)

    def render(self) -> str:
        return f"Invalid glob pattern: {self.value!r}"


class PathTraversalInPatternError(SecurityError):
    kind = SecurityErrorKind.PATH_TRAVERSAL_IN_PATTERN

    def __init__(self, value: str):
        super().__init__("Pattern", value)

    def render(self) -> str:
        return f"Path traversal not allowed in pattern: {self.value}"
