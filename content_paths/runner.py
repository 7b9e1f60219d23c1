"""
Build pass orchestration for content path assignment.

This module coordinates one build:
1. Load the content manifest (records sorted by key)
2. Normalize timestamps and slugify titles, optionally in parallel
3. Resolve fingerprints and assign paths serially against a fresh registry
4. Write the path map and assignment index

Any error aborts the build. The failing item and instant are logged
before the error propagates to the caller.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
import logging
from pathlib import Path

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
)

from .config import AppConfig
from .core.errors import (
    ContentPathError,
    IdentifierExhaustionError,
    MalformedTimestampError,
)
from .core.paths import PreparedRecord, build_assigner, prepare_record
from .core.registry import UniquenessRegistry
from .core.types import ContentRecord, PathAssignment
from .input.manifest import load_manifest
from .output.writer import AssignmentIndex, write_path_map
from .utils.logging import close_logging, log_event, setup_logging


@dataclass
class BuildResult:
    """Outcome of a successful build pass.

    Attributes:
        assignments: Path assignments in presentation order
        output_path: Path of the written {key: path} JSON file
        collisions: Number of items that needed more than one candidate
    """
    assignments: list[PathAssignment] = field(default_factory=list)
    output_path: Path | None = None
    collisions: int = 0

    @property
    def paths(self) -> dict[str, str]:
        return {assignment.key: assignment.path for assignment in self.assignments}


def prepare_records(
    records: list[ContentRecord],
    cfg: AppConfig,
    logger: logging.Logger | None = None,
    progress: Progress | None = None,
    task: int | None = None,
) -> list[PreparedRecord]:
    """Normalize and slugify every record, preserving input order.

    Raises:
        MalformedTimestampError: For the first malformed record in input order
    """
    concurrency = max(1, int(cfg.build.concurrency))

    def _advance_progress() -> None:
        if progress and task is not None:
            progress.advance(task, 1)

    if concurrency == 1:
        prepared: list[PreparedRecord] = []
        for record in records:
            prepared.append(prepare_record(record, cfg.identifier))
            _advance_progress()
        return prepared

    log_event(logger, "Prepare concurrency enabled", event="prepare_concurrency_enabled", workers=concurrency)
    results: list[PreparedRecord | None] = [None] * len(records)
    errors: dict[int, MalformedTimestampError] = {}
    with ThreadPoolExecutor(max_workers=concurrency) as executor:
        future_map = {
            executor.submit(prepare_record, record, cfg.identifier): idx
            for idx, record in enumerate(records)
        }
        for future in as_completed(future_map):
            idx = future_map[future]
            try:
                # Put result back to original index to keep ordering stable.
                results[idx] = future.result()
            except MalformedTimestampError as exc:
                errors[idx] = exc
            _advance_progress()

    if errors:
        # Report the same record a sequential run would have hit first
        raise errors[min(errors)]
    return [item for item in results if item is not None]


def assign_records(
    prepared: list[PreparedRecord],
    cfg: AppConfig,
    registry: UniquenessRegistry | None = None,
    logger: logging.Logger | None = None,
    progress: Progress | None = None,
    task: int | None = None,
) -> list[PathAssignment]:
    """Assign paths to prepared records one at a time, in order."""
    assigner = build_assigner(cfg.identifier, registry, logger)
    assignments: list[PathAssignment] = []
    for item in prepared:
        assignments.append(assigner.assign_prepared(item))
        if progress and task is not None:
            progress.advance(task, 1)
    return assignments


def check_records(records: list[ContentRecord], cfg: AppConfig) -> list[MalformedTimestampError]:
    """Return the timestamp errors of all records without assigning paths."""
    problems: list[MalformedTimestampError] = []
    for record in records:
        try:
            prepare_record(record, cfg.identifier)
        except MalformedTimestampError as exc:
            problems.append(exc)
    return problems


def run_build(
    input_path: Path,
    output_dir: Path,
    cfg: AppConfig,
    show_progress: bool = True,
    console: Console | None = None,
) -> BuildResult:
    """Run one build pass from manifest to written path map.

    Args:
        input_path: Path to the JSON or YAML content manifest
        output_dir: Directory for the path map, index and logs
        cfg: Application configuration
        show_progress: Whether to display progress bars
        console: Rich console for output (creates default if None)

    Returns:
        BuildResult with all assignments

    Raises:
        ContentPathError: On malformed input, fingerprint exhaustion or
            a path collision; nothing is written in that case
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    logger = setup_logging(cfg.logging, output_dir)
    try:
        return _run_build(input_path, output_dir, cfg, logger, show_progress, console)
    finally:
        close_logging(logger)


def _run_build(
    input_path: Path,
    output_dir: Path,
    cfg: AppConfig,
    logger: logging.Logger,
    show_progress: bool,
    console: Console | None,
) -> BuildResult:
    log_event(
        logger,
        "Build start",
        event="build_start",
        input=str(input_path),
        output=str(output_dir),
        width=cfg.identifier.width,
        strategy=cfg.identifier.strategy,
    )
    progress = None
    if show_progress:
        progress = Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console or Console(),
        )

    try:
        records = load_manifest(input_path, sort_records=cfg.build.sort_records)
        if progress is not None:
            with progress:
                prepare_task = progress.add_task("Prepare", total=len(records))
                prepared = prepare_records(records, cfg, logger, progress, prepare_task)
                assign_task = progress.add_task("Assign", total=len(prepared))
                assignments = assign_records(prepared, cfg, None, logger, progress, assign_task)
        else:
            prepared = prepare_records(records, cfg, logger)
            assignments = assign_records(prepared, cfg, None, logger)
    except ContentPathError as exc:
        _log_failure(logger, exc)
        raise

    output_path = write_path_map(assignments, output_dir / cfg.output.filename)
    index = AssignmentIndex(output_dir, cfg.output.write_index, cfg.output.index_filename)
    for assignment in assignments:
        index.append(assignment)

    result = BuildResult(
        assignments=assignments,
        output_path=output_path,
        collisions=sum(1 for a in assignments if a.attempts > 1),
    )
    log_event(
        logger,
        "Build complete",
        event="build_complete",
        output=str(output_path),
        total=len(assignments),
        collisions=result.collisions,
    )
    return result


def _log_failure(logger: logging.Logger, exc: ContentPathError) -> None:
    fields: dict[str, object] = {"error_type": type(exc).__name__}
    if isinstance(exc, MalformedTimestampError):
        fields.update(key=exc.key, raw_timestamp=exc.text)
    elif isinstance(exc, IdentifierExhaustionError):
        fields.update(key=exc.key, instant=exc.instant.isoformat(), attempts=exc.attempts)
    else:
        fields.update(key=getattr(exc, "key", None), path=getattr(exc, "path", None))
    log_event(logger, f"Build failed: {exc}", level=logging.ERROR, event="build_failed", **fields)
