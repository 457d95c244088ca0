"""Filesystem access for validated paths."""

from vitest_guard.files.access import FileSystem, LocalFileSystem, SafeFileAccess

__all__ = ["FileSystem", "LocalFileSystem", "SafeFileAccess"]
