"""Tests for the build runner."""

import json
from pathlib import Path

import pytest

from content_paths import runner
from content_paths.config import AppConfig
from content_paths.core.errors import IdentifierExhaustionError, MalformedTimestampError
from content_paths.core.types import ContentRecord


def _write_manifest(path: Path, items: list[dict]) -> Path:
    path.write_text(json.dumps(items), encoding="utf-8")
    return path


def _quiet_config() -> AppConfig:
    cfg = AppConfig()
    cfg.logging.console = False
    return cfg


def test_run_build_writes_path_map_and_index(tmp_path: Path) -> None:
    manifest = _write_manifest(
        tmp_path / "manifest.json",
        [
            {"key": "b.md", "created": "2019-03-04T10:00:00Z", "title": "Hello World"},
            {"key": "a.md", "created": "2019-03-04T10:00:00Z", "title": "Hello World"},
            {"key": "c.md", "created": "2020-11-02", "title": "Another Post"},
        ],
    )
    out = tmp_path / "out"

    result = runner.run_build(manifest, out, _quiet_config(), show_progress=False)

    assert [a.key for a in result.assignments] == ["a.md", "b.md", "c.md"]
    assert result.collisions == 1
    mapping = json.loads((out / "paths.json").read_text(encoding="utf-8"))
    assert mapping == result.paths
    assert mapping["a.md"] != mapping["b.md"]
    assert mapping["c.md"].startswith("2020/11/another-post-")

    index_lines = (out / "assignments.jsonl").read_text(encoding="utf-8").strip().split("\n")
    assert len(index_lines) == 3
    assert json.loads(index_lines[1])["attempts"] >= 2

    events = [
        json.loads(line)["event"]
        for line in (out / "build.jsonl").read_text(encoding="utf-8").strip().split("\n")
    ]
    assert events[0] == "build_start"
    assert "fingerprint_collision" in events
    assert events[-1] == "build_complete"


def test_run_build_is_reproducible(tmp_path: Path) -> None:
    """Two builds over the same manifest produce identical maps"""
    items = [
        {"key": f"post-{i}.md", "created": "2019-03-04T10:00:00Z", "title": "Same"}
        for i in range(5)
    ]
    manifest = _write_manifest(tmp_path / "manifest.json", items)

    first = runner.run_build(manifest, tmp_path / "one", _quiet_config(), show_progress=False)
    second = runner.run_build(manifest, tmp_path / "two", _quiet_config(), show_progress=False)

    assert first.paths == second.paths
    assert len(set(first.paths.values())) == 5


def test_run_build_with_progress(tmp_path: Path) -> None:
    manifest = _write_manifest(
        tmp_path / "manifest.json",
        [{"key": "a.md", "created": "2019-03-04", "title": "Hello"}],
    )
    result = runner.run_build(manifest, tmp_path / "out", _quiet_config(), show_progress=True)
    assert result.paths["a.md"].startswith("2019/03/hello-")


def test_run_build_failure_writes_no_outputs(tmp_path: Path) -> None:
    """A malformed item aborts the build and is reported in the log"""
    manifest = _write_manifest(
        tmp_path / "manifest.json",
        [
            {"key": "a.md", "created": "2019-03-04", "title": "Hello"},
            {"key": "b.md", "created": "not-a-date", "title": "Broken"},
        ],
    )
    out = tmp_path / "out"

    with pytest.raises(MalformedTimestampError):
        runner.run_build(manifest, out, _quiet_config(), show_progress=False)

    assert not (out / "paths.json").exists()
    assert not (out / "assignments.jsonl").exists()
    failure = json.loads((out / "build.jsonl").read_text(encoding="utf-8").strip().split("\n")[-1])
    assert failure["event"] == "build_failed"
    assert failure["key"] == "b.md"
    assert failure["raw_timestamp"] == "not-a-date"
    assert failure["error_type"] == "MalformedTimestampError"


def test_run_build_reports_exhaustion(tmp_path: Path) -> None:
    manifest = _write_manifest(
        tmp_path / "manifest.json",
        [{"key": f"{i}.md", "created": "2019-03-04T10:00Z", "title": "Same"} for i in range(2)],
    )
    cfg = _quiet_config()
    cfg.identifier.width = 16
    cfg.identifier.strategy = "extend"

    with pytest.raises(IdentifierExhaustionError):
        runner.run_build(manifest, tmp_path / "out", cfg, show_progress=False)

    failure = json.loads(
        (tmp_path / "out" / "build.jsonl").read_text(encoding="utf-8").strip().split("\n")[-1]
    )
    assert failure["key"] == "1.md"
    assert failure["instant"] == "2019-03-04T10:00:00+00:00"


def test_prepare_records_concurrency_preserves_order():
    """Parallel preparation returns the same results as sequential"""
    records = [
        ContentRecord(f"{i:03d}.md", f"2019-03-{(i % 28) + 1:02d}T10:00", f"Post {i}")
        for i in range(50)
    ]
    sequential_cfg = AppConfig()
    parallel_cfg = AppConfig()
    parallel_cfg.build.concurrency = 4

    sequential = runner.prepare_records(records, sequential_cfg)
    parallel = runner.prepare_records(records, parallel_cfg)

    assert parallel == sequential
    assert [p.record.key for p in parallel] == [r.key for r in records]


def test_prepare_records_concurrency_reports_first_error():
    records = [
        ContentRecord("a.md", "2019-03-04", "A"),
        ContentRecord("b.md", "bad", "B"),
        ContentRecord("c.md", "also bad", "C"),
    ]
    cfg = AppConfig()
    cfg.build.concurrency = 3

    with pytest.raises(MalformedTimestampError) as excinfo:
        runner.prepare_records(records, cfg)
    assert excinfo.value.key == "b.md"


def test_check_records_collects_all_problems():
    records = [
        ContentRecord("a.md", "2019-03-04", "A"),
        ContentRecord("b.md", "bad", "B"),
        ContentRecord("c.md", "2019-02-30", "C"),
    ]
    problems = runner.check_records(records, AppConfig())
    assert [p.key for p in problems] == ["b.md", "c.md"]


def test_run_build_logs_out_of_range_instant(tmp_path: Path) -> None:
    """Instants outside the UTC range fail as malformed, with the failure logged"""
    manifest = _write_manifest(
        tmp_path / "manifest.json",
        [{"key": "edge.md", "created": "9999-12-31T23:30-05:00", "title": "Edge"}],
    )
    out = tmp_path / "out"

    with pytest.raises(MalformedTimestampError):
        runner.run_build(manifest, out, _quiet_config(), show_progress=False)

    failure = json.loads((out / "build.jsonl").read_text(encoding="utf-8").strip().split("\n")[-1])
    assert failure["event"] == "build_failed"
    assert failure["key"] == "edge.md"
    assert failure["raw_timestamp"] == "9999-12-31T23:30-05:00"
