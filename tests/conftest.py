"""Shared test fixtures for vitest-guard test suite."""

import pytest


@pytest.fixture
def project_root(tmp_path):
    """Create a temporary project root directory."""
    return tmp_path


@pytest.fixture
def sample_test_file(tmp_path):
    """Create a sample vitest test file inside the project root."""
    code = """import { describe, it, expect } from 'vitest';

describe('sum', () => {
  it('adds', () => {
    expect(1 + 1).toBe(2);
  });
});
"""
    file_path = tmp_path / "src" / "sum.test.ts"
    file_path.parent.mkdir(parents=True)
    file_path.write_text(code)
    return file_path


class FakeFileSystem:
    """In-memory FileSystem used instead of the real disk."""

    def __init__(self, files=None, directories=None):
        self.files = dict(files or {})
        self.directories = set(directories or ())
        self.reads = []

    def exists(self, path):
        return path in self.files or path in self.directories

    def is_file(self, path):
        return path in self.files

    def read_text(self, path):
        self.reads.append(path)
        content = self.files[path]
        if isinstance(content, Exception):
            raise content
        return content


@pytest.fixture
def fake_fs():
    """Empty in-memory filesystem; tests add entries to .files/.directories."""
    return FakeFileSystem()
