"""
Unit tests for path security validation.

Covers validate_path_security, secure_path_resolve, the extension and
file-kind validators and create_secure_temp_path.
"""

import os
import re
from pathlib import Path

import pytest

from vitest_guard.security import (
    create_secure_temp_path,
    secure_path_resolve,
    validate_config_file_path,
    validate_file_extension,
    validate_path_security,
    validate_test_file_path,
)
from vitest_guard.shared.domain.exceptions import (
    BoundaryEscapeError,
    ConfigNameNotAllowedError,
    DangerousPatternError,
    ExtensionNotAllowedError,
    InvalidInputError,
    SecurityError,
    SecurityErrorKind,
    SystemDirectoryForbiddenError,
    TooDeepError,
    TooLongError,
)

ROOT = os.path.abspath("/project")


# ============================================================================
# validate_path_security
# ============================================================================


class TestValidatePathSecurity:
    """Test the syntactic path validator."""

    @pytest.mark.parametrize("path", [
        "./src/test.ts",
        "src/components/Button.tsx",
        "src",
        "etc/passwd",
        "/etcetera/notes.md",
        "/home/dev/project/src/a.ts",
        "windows/readme.md",
        "docs\\Program Files.md",
        Path("src/utils.ts"),
    ])
    def test_accepts_safe_paths(self, path):
        validate_path_security(path)

    @pytest.mark.parametrize("path", [
        "../../../etc/passwd",
        "./src/../../../etc/passwd",
        "src/..",
        "..",
        "..\\windows",
        "file..txt",
    ])
    def test_rejects_traversal_anywhere(self, path):
        with pytest.raises(DangerousPatternError, match="dangerous path pattern"):
            validate_path_security(path)

    @pytest.mark.parametrize("path", [
        "file.txt\0.exe",
        "\0",
        "src/\x1b[31m.ts",
        "src/a\nb.ts",
        "src/a\x7f.ts",
    ])
    def test_rejects_null_bytes_and_control_characters(self, path):
        with pytest.raises(DangerousPatternError) as exc_info:
            validate_path_security(path)
        assert exc_info.value.kind is SecurityErrorKind.DANGEROUS_PATTERN

    @pytest.mark.parametrize("path", [
        "/etc/passwd",
        "/etc",
        "/ETC/shadow",
        "/usr/bin/env",
        "//usr//lib",
        "/proc/self/environ",
        "/root/.ssh/id_rsa",
        "C:\\Windows\\System32",
        "c:/windows/temp",
        "C:\\PROGRAM FILES\\app",
        "D:\\Windows",
        "src/System32/drivers",
        "\\\\server\\share\\system32",
        "\\Windows\\win.ini",
        "\\\\?\\C:\\Program Files\\x",
        "\\\\.\\C:\\Windows",
        "C:Windows",
        "d:programdata\\app",
    ])
    def test_rejects_system_directories(self, path):
        with pytest.raises(SystemDirectoryForbiddenError, match="system directory forbidden"):
            validate_path_security(path)

    def test_rejects_paths_that_are_too_long(self):
        with pytest.raises(TooLongError, match="Path too long") as exc_info:
            validate_path_security("a" * 5000)
        assert exc_info.value.limit == 4096

    def test_accepts_path_at_length_limit(self):
        validate_path_security("a" * 4096)

    def test_rejects_paths_that_are_too_deep(self):
        with pytest.raises(TooDeepError) as exc_info:
            validate_path_security("a/" * 21)
        assert exc_info.value.fields["depth"] == 21

    def test_depth_ignores_dot_and_empty_segments(self):
        validate_path_security("./" + "a/" * 20 + "./")

    @pytest.mark.parametrize("path", ["", None, 42, b"src/a.ts"])
    def test_rejects_empty_or_non_string(self, path):
        with pytest.raises(InvalidInputError, match="must be a non-empty string"):
            validate_path_security(path)

    def test_length_is_checked_before_patterns(self):
        with pytest.raises(TooLongError):
            validate_path_security("../" * 2000)

    def test_traversal_is_checked_before_system_directories(self):
        with pytest.raises(DangerousPatternError):
            validate_path_security("/etc/../etc/passwd")


# ============================================================================
# secure_path_resolve
# ============================================================================


class TestSecurePathResolve:
    """Test boundary-constrained resolution."""

    def test_resolves_paths_within_project_boundary(self):
        result = secure_path_resolve("/project", "./src/file.ts")
        assert result == os.path.join(ROOT, "src", "file.ts")

    def test_normalizes_current_directory_segments(self):
        result = secure_path_resolve("/project", "./src/./utils.ts")
        assert result == os.path.join(ROOT, "src", "utils.ts")

    def test_root_itself_is_allowed(self):
        assert secure_path_resolve("/project", ".") == ROOT

    def test_trailing_separator_on_root(self):
        result = secure_path_resolve("/project/", "src/a.ts")
        assert result == os.path.join(ROOT, "src", "a.ts")

    @pytest.mark.parametrize("candidate", ["../outside.txt", "../../etc/passwd"])
    def test_traversal_is_rejected_before_resolution(self, candidate):
        with pytest.raises(DangerousPatternError, match="dangerous path pattern"):
            secure_path_resolve("/project", candidate)

    def test_absolute_sibling_path_escapes_boundary(self):
        with pytest.raises(BoundaryEscapeError) as exc_info:
            secure_path_resolve("/project", "/other/file.ts")
        assert exc_info.value.kind is SecurityErrorKind.BOUNDARY_ESCAPE
        assert "escapes project boundary" in str(exc_info.value)

    def test_prefix_sharing_sibling_is_not_inside(self):
        with pytest.raises(BoundaryEscapeError):
            secure_path_resolve("/project", "/projectile/file.ts")

    def test_absolute_path_inside_root_is_allowed(self):
        inside = os.path.join(ROOT, "src", "a.ts")
        assert secure_path_resolve("/project", inside) == inside

    def test_accepts_pathlike_root(self, project_root):
        result = secure_path_resolve(project_root, "src/a.ts")
        assert result == str(project_root / "src" / "a.ts")

    def test_rejects_empty_root(self):
        with pytest.raises(InvalidInputError):
            secure_path_resolve("", "src/a.ts")

    @pytest.mark.parametrize("candidate", [
        "src/a.ts",
        "./a",
        ".",
        "/project",
        "/project/x/y",
        "/somewhere/else",
        "/projectx",
        "a/./b/.",
    ])
    def test_never_returns_path_outside_root(self, candidate):
        try:
            result = secure_path_resolve("/project", candidate)
        except SecurityError:
            return
        assert result == ROOT or result.startswith(ROOT + os.sep)


# ============================================================================
# Extension & file-kind validators
# ============================================================================


class TestValidateFileExtension:
    """Test extension allowlisting."""

    def test_accepts_allowed_extensions(self):
        validate_file_extension("test.ts", [".ts", ".js"])
        validate_file_extension("component.tsx", [".tsx", ".ts"])

    def test_matching_is_case_insensitive(self):
        validate_file_extension("Component.TSX", [".tsx"])
        validate_file_extension("a.ts", [".TS"])

    @pytest.mark.parametrize("path,extension", [
        ("script.py", ".py"),
        ("malware.exe", ".exe"),
    ])
    def test_rejects_disallowed_extensions(self, path, extension):
        with pytest.raises(ExtensionNotAllowedError, match=f"extension '{re.escape(extension)}' not allowed") as exc_info:
            validate_file_extension(path, [".ts", ".js"])
        assert exc_info.value.extension == extension

    def test_missing_extension_is_rejected(self):
        with pytest.raises(ExtensionNotAllowedError, match="extension '' not allowed"):
            validate_file_extension("Makefile", [".ts"])

    def test_compound_extensions(self):
        validate_file_extension("sum.test.ts", [".test.ts"])
        with pytest.raises(ExtensionNotAllowedError, match="extension '.ts' not allowed"):
            validate_file_extension("sum.ts", [".test.ts"])

    def test_uses_last_component_of_windows_path(self):
        validate_file_extension("src\\dir.js\\file.ts", [".ts"])


class TestValidateTestFilePath:
    """Test the test/source file preset."""

    @pytest.mark.parametrize("path", [
        "src/components/Button.test.ts",
        "__tests__/utils.spec.js",
        "src/components/Button.tsx",
        "src/index.mjs",
    ])
    def test_accepts_test_and_source_files(self, path):
        validate_test_file_path(path)

    def test_rejects_invalid_file_extensions(self):
        with pytest.raises(ExtensionNotAllowedError, match="not allowed"):
            validate_test_file_path("test.py")


class TestValidateConfigFilePath:
    """Test the config file preset."""

    @pytest.mark.parametrize("path", [
        "vitest.config.ts",
        ".vitest-mcp.json",
        "vite.config.mjs",
        "config/vitest.workspace.js",
    ])
    def test_accepts_valid_config_files(self, path):
        validate_config_file_path(path)

    def test_rejects_invalid_extension_first(self):
        with pytest.raises(ExtensionNotAllowedError, match="not allowed"):
            validate_config_file_path("random.txt")

    def test_rejects_unrecognized_config_names(self):
        with pytest.raises(ConfigNameNotAllowedError, match="not allowed") as exc_info:
            validate_config_file_path("random.json")
        assert exc_info.value.kind is SecurityErrorKind.CONFIG_NAME_NOT_ALLOWED


# ============================================================================
# create_secure_temp_path
# ============================================================================


class TestCreateSecureTempPath:
    """Test secure temporary path generation."""

    def _pattern(self, prefix):
        return re.escape(os.path.join(ROOT, prefix)) + r"-[a-f0-9]{64}\.tmp$"

    def test_creates_secure_temp_paths(self):
        temp_path = create_secure_temp_path("/project", "vitest")
        assert re.match(self._pattern("vitest"), temp_path)

    def test_sanitizes_prefixes(self):
        temp_path = create_secure_temp_path("/project", "test../file")
        assert re.match(self._pattern("testfile"), temp_path)

    def test_traversal_in_prefix_cannot_escape(self):
        temp_path = create_secure_temp_path("/project", "../../etc/cron.d/x")
        assert re.match(self._pattern("etccrondx"), temp_path)

    @pytest.mark.parametrize("prefix", ["", "../..", None])
    def test_empty_prefix_falls_back_to_default(self, prefix):
        temp_path = create_secure_temp_path("/project", prefix)
        assert re.match(self._pattern("tmp"), temp_path)

    def test_prefix_is_capped(self):
        temp_path = create_secure_temp_path("/project", "a" * 200)
        assert re.match(self._pattern("a" * 64), temp_path)

    def test_tokens_are_unique(self):
        paths = {create_secure_temp_path("/project", "vitest") for _ in range(100)}
        assert len(paths) == 100

    def test_token_comes_from_secrets(self, monkeypatch):
        calls = []

        def fake_token_hex(nbytes):
            calls.append(nbytes)
            return "ab" * nbytes

        monkeypatch.setattr("vitest_guard.security.path_security.secrets.token_hex", fake_token_hex)
        temp_path = create_secure_temp_path("/project", "vitest")

        assert calls == [32]
        assert temp_path == os.path.join(ROOT, "vitest-" + "ab" * 32 + ".tmp")

    @pytest.mark.parametrize("root", ["", None, 42])
    def test_invalid_root_is_rejected(self, root):
        with pytest.raises(InvalidInputError):
            create_secure_temp_path(root, "vitest")

    @pytest.mark.parametrize("root", ["/usr/src/app", "/root/work/project"])
    def test_trusted_root_is_not_checked_against_system_directories(self, root):
        temp_path = create_secure_temp_path(root, "vitest")
        expected = re.escape(os.path.join(os.path.abspath(root), "vitest")) + r"-[a-f0-9]{64}\.tmp$"
        assert re.match(expected, temp_path)
