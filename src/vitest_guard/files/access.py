"""
Safe File Access.

The only place that touches the filesystem on behalf of untrusted callers.
Every candidate path goes through the security validators first; the
filesystem itself is an injected collaborator so tests can substitute it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol, Union

from vitest_guard.security import (
    sanitize_file_content,
    secure_path_resolve,
    validate_config_file_path,
    validate_test_file_path,
)
from vitest_guard.shared.domain.exceptions import FileAccessError, SecurityError
from vitest_guard.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class FileSystem(Protocol):
    """Filesystem operations needed after validation."""

    def exists(self, path: str) -> bool: ...

    def is_file(self, path: str) -> bool: ...

    def read_text(self, path: str) -> str: ...


class LocalFileSystem:
    """FileSystem backed by the real disk."""

    def exists(self, path: str) -> bool:
        return Path(path).exists()

    def is_file(self, path: str) -> bool:
        return Path(path).is_file()

    def read_text(self, path: str) -> str:
        return Path(path).read_text(encoding="utf-8", errors="replace")


class SafeFileAccess:
    """
    Resolves untrusted paths inside a project root and reads them.

    Security failures are logged with their kind and re-raised unchanged.
    Existence is checked at use time, so a file removed between resolution
    and reading surfaces as FileAccessError rather than a raw OSError.
    """

    def __init__(self, project_root: Union[str, Path], fs: Optional[FileSystem] = None):
        self.project_root = str(project_root)
        self.fs = fs or LocalFileSystem()

    def resolve(self, candidate: str) -> str:
        """Resolve a candidate path inside the project root."""
        try:
            return secure_path_resolve(self.project_root, candidate)
        except SecurityError as e:
            logger.warning(
                "path_rejected",
                kind=e.kind.value,
                reason=str(e),
                root=self.project_root,
            )
            raise

    def resolve_existing_file(self, candidate: str) -> str:
        """
        Resolve a candidate and require it to be an existing regular file.

        Raises:
            SecurityError: Candidate failed validation
            FileAccessError: Candidate does not exist or is not a file
        """
        resolved = self.resolve(candidate)
        if not self.fs.exists(resolved):
            logger.info("file_not_found", path=resolved)
            raise FileAccessError(f"File not found: {candidate}", {"path": resolved})
        if not self.fs.is_file(resolved):
            raise FileAccessError(f"Not a file: {candidate}", {"path": resolved})
        return resolved

    def resolve_test_file(self, candidate: str) -> str:
        """Validate a test or coverage-target file and resolve it."""
        self._check_kind(validate_test_file_path, candidate)
        return self.resolve_existing_file(candidate)

    def resolve_config_file(self, candidate: str) -> str:
        """Validate a vitest/vite config file and resolve it."""
        self._check_kind(validate_config_file_path, candidate)
        return self.resolve_existing_file(candidate)

    def read_for_display(self, candidate: str) -> str:
        """Read a file inside the project root, sanitized for display."""
        resolved = self.resolve_existing_file(candidate)
        try:
            content = self.fs.read_text(resolved)
        except OSError as e:
            logger.error("file_read_failed", path=resolved, error=str(e))
            raise FileAccessError(f"Could not read file: {candidate}", {"path": resolved}) from e
        return sanitize_file_content(content)

    def _check_kind(self, validator, candidate: str) -> None:
        try:
            validator(candidate)
        except SecurityError as e:
            logger.warning("file_kind_rejected", kind=e.kind.value, reason=str(e))
            raise
