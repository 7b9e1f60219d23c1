"""
Command-line interface for content path assignment.

Uses Typer to run a build pass over a content manifest, validate a
manifest's timestamps, or preview the slug for a title.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from .config import load_config
from .core.errors import ContentPathError
from .core.slug import slugify
from .input.manifest import load_manifest
from .runner import check_records, run_build

app = typer.Typer(add_completion=False)
console = Console()


@app.command()
def assign(
    input: Path = typer.Option(..., "--input", "-i", exists=True, readable=True),
    output: Path = typer.Option(Path("out"), "--output", "-o"),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
    progress: bool = typer.Option(True, "--progress/--no-progress"),
    width: int | None = typer.Option(None, "--width", help="Fingerprint width in hex characters (1-16)."),
    strategy: str | None = typer.Option(
        None, "--strategy", help="Collision strategy: salt or extend."
    ),
    concurrency: int | None = typer.Option(
        None, "--concurrency", help="Worker threads for timestamp and title preparation."
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Enable or disable file logging."
    ),
    show_table: bool = typer.Option(True, "--table/--no-table", help="Print assigned paths."),
):
    """Assign canonical paths to every item in a content manifest.

    Writes a JSON mapping of item key to path into the output directory.
    Any malformed timestamp or unresolvable collision aborts the build.
    """
    cfg = load_config(str(config) if config else None)

    # Override with CLI options
    if width is not None:
        cfg.identifier.width = width
    if strategy:
        cfg.identifier.strategy = strategy
    if concurrency is not None:
        cfg.build.concurrency = concurrency
    if log_level:
        cfg.logging.level = log_level
    if log_file is not None:
        cfg.logging.file = log_file

    try:
        result = run_build(input, output, cfg, show_progress=progress, console=console)
    except (ContentPathError, ValueError) as exc:
        console.print(f"[red]Build failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    if show_table:
        table = Table("Key", "Path", "Attempts")
        for assignment in result.assignments:
            table.add_row(assignment.key, assignment.path, str(assignment.attempts))
        console.print(table)
    console.print(
        f"Assigned {len(result.assignments)} paths ({result.collisions} collisions resolved): "
        f"{result.output_path}"
    )


@app.command()
def check(
    input: Path = typer.Option(..., "--input", "-i", exists=True, readable=True),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
):
    """Validate manifest timestamps without assigning paths."""
    cfg = load_config(str(config) if config else None)
    try:
        records = load_manifest(input, sort_records=cfg.build.sort_records)
    except ContentPathError as exc:
        console.print(f"[red]Invalid manifest:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    problems = check_records(records, cfg)
    for problem in problems:
        console.print(f"[red]{problem.key}[/red]: {problem.text!r} ({problem.reason})")
    if problems:
        raise typer.Exit(code=1)
    console.print(f"{len(records)} items OK")


@app.command()
def slug(
    title: str = typer.Argument(...),
    max_length: int | None = typer.Option(None, "--max-length"),
):
    """Print the slug for a title."""
    console.print(slugify(title, max_length=max_length), highlight=False)


if __name__ == "__main__":
    app()
