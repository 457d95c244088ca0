"""
vitest-guard CLI
Main entry point for the command-line interface

Usage:
    vitest-guard check-path <path>              # Validate a path
    vitest-guard resolve <path> --root <dir>    # Resolve inside a project root
    vitest-guard check-ext <path> -a .ts -a .js # Check an extension
    vitest-guard temp-path <prefix>             # Generate a secure temp path
    vitest-guard sanitize <file>                # Print sanitized file content
    vitest-guard check-arg <value> --name <n>   # Validate a command argument
    vitest-guard check-globs <pattern>...       # Validate exclude globs
    vitest-guard build-command [target]         # Show the vitest argv
    vitest-guard run [target] --timeout <s>     # Run vitest with the validated argv
"""

import os
from contextlib import contextmanager
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from vitest_guard import __version__
from vitest_guard.execution.runner import build_vitest_command, run_command
from vitest_guard.files.access import SafeFileAccess
from vitest_guard.security import (
    create_secure_temp_path,
    secure_path_resolve,
    validate_command_argument,
    validate_config_file_path,
    validate_file_extension,
    validate_glob_patterns,
    validate_path_security,
    validate_test_file_path,
)
from vitest_guard.shared.domain.exceptions import GuardError, SecurityError
from vitest_guard.shared.infrastructure.config import settings
from vitest_guard.shared.infrastructure.logging import configure_logging, get_logger

app = typer.Typer(
    name="vitest-guard",
    help="vitest-guard - validate untrusted paths, arguments and content",
    add_completion=False,
    no_args_is_help=True,
)
console = Console(soft_wrap=True)
error_console = Console(stderr=True, soft_wrap=True)
logger = get_logger(__name__)

ROOT_OPTION = typer.Option(None, "--root", "-r", help="Project root (default: VITEST_GUARD_PROJECT_ROOT)")


@app.callback()
def _setup() -> None:
    configure_logging()


@contextmanager
def _report_violations():
    """Turn validation failures into a red message and exit status 1."""
    try:
        yield
    except SecurityError as e:
        logger.warning("input_rejected", kind=e.kind.value, reason=str(e))
        error_console.print(f"[red]✗ Rejected ({e.kind.value}):[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except GuardError as e:
        error_console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def _root(root: Optional[str]) -> str:
    return root or settings.project_root


@app.command("check-path")
def check_path(path: str = typer.Argument(..., help="Path to validate")):
    """Validate a path against traversal, depth and system directory rules"""
    with _report_violations():
        validate_path_security(path)
    console.print(f"[green]✓ Safe path:[/green] {escape(path)}")


@app.command()
def resolve(
    path: str = typer.Argument(..., help="Path relative to the project root"),
    root: Optional[str] = ROOT_OPTION,
):
    """Resolve a path, refusing anything outside the project root"""
    with _report_violations():
        resolved = secure_path_resolve(_root(root), path)
    console.print(resolved, markup=False, highlight=False)


@app.command("check-ext")
def check_ext(
    path: str = typer.Argument(..., help="File path"),
    allowed: Optional[List[str]] = typer.Option(None, "--allow", "-a", help="Allowed extension (repeatable)"),
    kind: Optional[str] = typer.Option(None, "--kind", "-k", help="Preset: 'test' or 'config'"),
):
    """Check a file extension against an allowlist or a preset"""
    with _report_violations():
        if kind == "test":
            validate_test_file_path(path)
        elif kind == "config":
            validate_config_file_path(path)
        elif kind is not None:
            error_console.print(f"[red]Unknown kind: {escape(kind)}[/red] (use 'test' or 'config')")
            raise typer.Exit(2)
        elif not allowed:
            error_console.print("[red]Provide --allow or --kind[/red]")
            raise typer.Exit(2)
        else:
            validate_file_extension(path, allowed)
    console.print(f"[green]✓ Extension allowed:[/green] {escape(path)}")


@app.command("temp-path")
def temp_path(
    prefix: str = typer.Argument("vitest", help="Label for the temp file"),
    root: Optional[str] = ROOT_OPTION,
):
    """Generate an unpredictable temp file path inside the project root"""
    with _report_violations():
        generated = create_secure_temp_path(_root(root), prefix)
    console.print(generated, markup=False, highlight=False)


@app.command()
def sanitize(
    path: str = typer.Argument(..., help="File inside the project root"),
    root: Optional[str] = ROOT_OPTION,
):
    """Print a project file with scripts, dangerous URIs and control characters removed"""
    with _report_violations():
        content = SafeFileAccess(_root(root)).read_for_display(path)
    console.print(content, markup=False, highlight=False)


@app.command("check-arg")
def check_arg(
    value: str = typer.Argument(..., help="Argument value"),
    name: str = typer.Option("argument", "--name", "-n", help="Parameter name for messages"),
):
    """Validate a value destined for a subprocess argument"""
    with _report_violations():
        validate_command_argument(value, name)
    console.print(f"[green]✓ Safe {escape(name)}:[/green] {escape(value)}")


@app.command("check-globs")
def check_globs(patterns: List[str] = typer.Argument(..., help="Glob patterns")):
    """Validate coverage exclude glob patterns"""
    with _report_violations():
        validate_glob_patterns(list(patterns))
    console.print(f"[green]✓ {len(patterns)} pattern(s) valid[/green]")


@app.command("build-command")
def build_command(
    target: Optional[str] = typer.Argument(None, help="Test or source file"),
    root: Optional[str] = ROOT_OPTION,
    project: Optional[str] = typer.Option(None, "--project", "-p", help="Vitest project name"),
    coverage: bool = typer.Option(False, "--coverage", help="Collect coverage"),
    exclude: Optional[List[str]] = typer.Option(None, "--exclude", "-e", help="Extra coverage exclude glob"),
):
    """Show the vitest argument vector for a run, without running it"""
    with _report_violations():
        argv = build_vitest_command(
            _root(root),
            target,
            project=project,
            coverage=coverage,
            exclude=exclude or None,
            npx_command=settings.npx_command,
        )

    table = Table(title="vitest argv", show_header=True)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Argument", style="cyan")
    for index, arg in enumerate(argv):
        table.add_row(str(index), escape(arg))
    console.print(table)


@app.command()
def run(
    target: Optional[str] = typer.Argument(None, help="Test or source file"),
    root: Optional[str] = ROOT_OPTION,
    project: Optional[str] = typer.Option(None, "--project", "-p", help="Vitest project name"),
    coverage: bool = typer.Option(False, "--coverage", help="Collect coverage"),
    exclude: Optional[List[str]] = typer.Option(None, "--exclude", "-e", help="Extra coverage exclude glob"),
    timeout: Optional[int] = typer.Option(
        None, "--timeout", "-t", min=1, help="Seconds before the run is killed (default: VITEST_GUARD_TEST_TIMEOUT_SECONDS)"
    ),
):
    """Run vitest in the project root and exit with its status"""
    project_root = os.path.abspath(_root(root))
    with _report_violations():
        argv = build_vitest_command(
            project_root,
            target,
            project=project,
            coverage=coverage,
            exclude=exclude or None,
            npx_command=settings.npx_command,
        )
        result = run_command(argv, project_root, timeout=timeout or settings.test_timeout_seconds)

    if result.stdout:
        console.print(result.stdout, markup=False, highlight=False, end="")
    if result.stderr:
        error_console.print(result.stderr, markup=False, highlight=False, end="")
    raise typer.Exit(result.returncode)


@app.command()
def version():
    """Show vitest-guard version information"""
    console.print(Panel.fit(
        "[bold cyan]vitest-guard[/bold cyan]\n"
        f"[dim]Version:[/dim] {__version__}\n",
        title="About vitest-guard",
        border_style="cyan",
    ))


def main():
    """Main entry point"""
    app()


if __name__ == "__main__":
    main()
