"""Vitest command building and execution."""

from vitest_guard.execution.runner import build_vitest_command, run_command

__all__ = ["build_vitest_command", "run_command"]
