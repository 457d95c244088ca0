"""
vitest-guard - input validation gate for an automated vitest runner.

Untrusted paths, arguments, glob patterns and file content pass through
vitest_guard.security before any filesystem or subprocess operation.
"""

from vitest_guard.security import (
    create_secure_temp_path,
    sanitize_file_content,
    secure_path_resolve,
    validate_command_argument,
    validate_config_file_path,
    validate_file_extension,
    validate_glob_patterns,
    validate_path_security,
    validate_test_file_path,
)
from vitest_guard.shared.domain.exceptions import GuardError, SecurityError, SecurityErrorKind

__version__ = "0.1.0"

__all__ = [
    "validate_path_security",
    "secure_path_resolve",
    "validate_file_extension",
    "validate_test_file_path",
    "validate_config_file_path",
    "create_secure_temp_path",
    "sanitize_file_content",
    "validate_command_argument",
    "validate_glob_patterns",
    "GuardError",
    "SecurityError",
    "SecurityErrorKind",
]
