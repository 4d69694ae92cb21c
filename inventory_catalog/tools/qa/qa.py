#!/usr/bin/env python3
"""Repository checks for Inventory Catalog.

Linting, formatting, type checking and tests run as nox sessions. This tool
adds the trailing-newline check and a ``check`` command that runs it
followed by those sessions.
"""

import subprocess
from pathlib import Path

import typer
from rich.console import Console

console = Console(force_terminal=True)

NOX_SESSIONS = ["lint", "format_check", "mypy", "tests"]

NEWLINE_PATTERNS = ["*.py", "*.md", "*.toml", "*.txt", "*.yml", "*.yaml"]

EXCLUDE_DIRS = {
    ".venv",
    ".nox",
    ".git",
    ".pytest_cache",
    ".ruff_cache",
    ".mypy_cache",
    "logs",
}

app = typer.Typer(
    name="qa",
    help="Inventory Catalog repository checks",
    add_completion=False,
    no_args_is_help=True,
)


def find_missing_newlines(root: Path) -> list[Path]:
    """List non-empty files under ``root`` that do not end with a newline."""
    missing: set[Path] = set()
    for pattern in NEWLINE_PATTERNS:
        for path in root.rglob(pattern):
            if EXCLUDE_DIRS.intersection(path.relative_to(root).parts):
                continue
            if not path.is_file() or path.stat().st_size == 0:
                continue
            with open(path, "rb") as f:
                f.seek(-1, 2)
                if f.read(1) != b"\n":
                    missing.add(path)
    return sorted(missing)


def nox_command(sessions: list[str], python: str | None = None) -> list[str]:
    cmd = ["nox", "--sessions", *sessions]
    if python:
        cmd.extend(["--python", python])
    return cmd


@app.command()
def newlines(
    fix: bool = typer.Option(False, "--fix", help="Append the missing newlines"),
    root: Path = typer.Option(Path("."), "--root", help="Directory to scan"),
) -> None:
    """Check that text files end with a newline."""
    missing = find_missing_newlines(root)
    if not missing:
        console.print("✅ All files end with a newline", style="green")
        return

    console.print("❌ Files missing trailing newlines:", style="red")
    for path in missing:
        console.print(f"  {path}", style="dim")

    if not fix:
        console.print("Run with --fix to add them", style="yellow")
        raise typer.Exit(code=1)

    for path in missing:
        with open(path, "a") as f:
            f.write("\n")
    console.print(f"✅ Fixed {len(missing)} file(s)", style="green")


@app.command()
def check(
    skip_tests: bool = typer.Option(False, "--skip-tests", help="Skip pytest"),
    python: str | None = typer.Option(
        None, "--python", help="Run nox sessions for one interpreter only"
    ),
) -> None:
    """Run the newline check, then lint, format, mypy and test sessions."""
    newlines_ok = not find_missing_newlines(Path("."))
    if not newlines_ok:
        console.print("❌ Some files lack a trailing newline", style="red")

    sessions = [s for s in NOX_SESSIONS if not (skip_tests and s == "tests")]
    try:
        nox_ok = subprocess.run(nox_command(sessions, python)).returncode == 0
    except FileNotFoundError:
        console.print("❌ nox not found; install the dev extra", style="red")
        raise typer.Exit(code=1) from None

    if newlines_ok and nox_ok:
        console.print("✅ All checks passed!", style="green")
        return
    console.print("❌ Some checks failed", style="red")
    raise typer.Exit(code=1)


def main():
    """Entry point for the ``qa`` console script."""
    app()


if __name__ == "__main__":
    main()
