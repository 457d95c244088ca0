"""
Validation and sanitization gate for untrusted paths, arguments and content.

Every function is pure. Validators raise a SecurityError subclass on the
first violated rule; sanitize_file_content never raises.
"""

from vitest_guard.security.commands import validate_command_argument, validate_glob_patterns
from vitest_guard.security.content import sanitize_file_content
from vitest_guard.security.path_security import (
    create_secure_temp_path,
    secure_path_resolve,
    validate_config_file_path,
    validate_file_extension,
    validate_path_security,
    validate_test_file_path,
)

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
]
