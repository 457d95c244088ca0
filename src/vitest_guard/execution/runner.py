"""
Vitest command construction and execution.

Commands are always argument vectors. The shell is only used on Windows,
where npx is a batch-file launcher that cannot be started directly; in that
case every element is re-validated against the shell metacharacter set.
"""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from vitest_guard.coverage.exclude import build_coverage_exclude
from vitest_guard.security import (
    secure_path_resolve,
    validate_command_argument,
    validate_test_file_path,
)
from vitest_guard.shared.domain.exceptions import CommandExecutionError
from vitest_guard.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


def build_vitest_command(
    root: Union[str, Path],
    target: Optional[str] = None,
    *,
    project: Optional[str] = None,
    coverage: bool = False,
    exclude: Optional[Sequence[str]] = None,
    npx_command: str = "npx",
) -> list[str]:
    """
    Build the argv for a single ``vitest run``.

    Args:
        root: Trusted project root (the working directory of the run)
        target: Optional test or source file, relative to root
        project: Optional vitest project name (e.g. "node", "browser")
        coverage: Enable coverage collection
        exclude: Extra coverage exclude globs, merged with the defaults
        npx_command: Launcher executable

    Returns:
        Argument vector, never a shell string

    Raises:
        SecurityError: Any input failed validation
    """
    argv = [npx_command, "vitest", "run"]

    if target is not None:
        validate_test_file_path(target)
        resolved = secure_path_resolve(root, target)
        relative = os.path.relpath(resolved, os.path.abspath(str(root)))
        argv.append(relative.replace(os.sep, "/"))

    argv.append("--reporter=json")

    if project is not None:
        validate_command_argument(project, "project")
        argv.append(f"--project={project}")

    if coverage:
        argv.append("--coverage.enabled=true")
        for pattern in build_coverage_exclude(exclude):
            argv.append(f"--coverage.exclude={pattern}")

    return argv


def run_command(
    argv: Sequence[str],
    cwd: Union[str, Path],
    *,
    timeout: int,
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    platform: str = sys.platform,
) -> subprocess.CompletedProcess:
    """
    Run a validated argv and capture its output.

    A non-zero exit status is returned, not raised: failing tests are a
    normal vitest outcome.

    Raises:
        SecurityError: On Windows, an element carries shell metacharacters
        CommandExecutionError: The process could not start or timed out
    """
    if not argv:
        raise CommandExecutionError("Empty command")

    use_shell = platform == "win32"
    if use_shell:
        for index, arg in enumerate(argv):
            validate_command_argument(arg, f"argv[{index}]")

    logger.info("command_started", argv=list(argv), cwd=str(cwd), shell=use_shell)
    try:
        result = runner(
            list(argv),
            cwd=str(cwd),
            shell=use_shell,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        logger.error("command_timeout", argv=list(argv), timeout=timeout)
        raise CommandExecutionError(f"Command timed out after {timeout}s", {"argv": list(argv)}) from e
    except OSError as e:
        logger.error("command_failed_to_start", argv=list(argv), error=str(e))
        raise CommandExecutionError(f"Could not start {argv[0]}: {e}", {"argv": list(argv)}) from e

    logger.info("command_finished", returncode=result.returncode)
    return result
