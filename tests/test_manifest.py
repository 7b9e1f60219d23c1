"""Tests for content manifest loading."""

import json
from pathlib import Path

import pytest

from content_paths.core.errors import ManifestError
from content_paths.input.manifest import load_manifest, parse_manifest


def test_load_json_manifest_sorts_by_key(tmp_path: Path) -> None:
    path = tmp_path / "manifest.json"
    path.write_text(
        json.dumps(
            [
                {"source": "posts/b.md", "created": "2019-03-04", "title": "B"},
                {"source": "posts/a.md", "date": "2019-03-05T10:00Z", "title": "A"},
            ]
        ),
        encoding="utf-8",
    )

    records = load_manifest(path)

    assert [r.key for r in records] == ["posts/a.md", "posts/b.md"]
    assert records[0].created == "2019-03-05T10:00Z"
    assert records[1].title == "B"


def test_load_yaml_manifest_with_items(tmp_path: Path) -> None:
    """YAML manifests may wrap items and use unquoted dates"""
    path = tmp_path / "manifest.yaml"
    path.write_text(
        "items:\n"
        "  - key: z.md\n"
        "    created: 2019-03-04\n"
        "    title: Zed\n"
        "  - id: 7\n"
        "    created: '2019-03-04T10:00:00+01:00'\n"
        "    title: Seven\n"
        "    body: ignored\n",
        encoding="utf-8",
    )

    records = load_manifest(path, sort_records=False)

    assert records[0].key == "z.md"
    assert records[0].created == "2019-03-04"
    assert records[1].key == "7"
    assert records[1].raw_body == "ignored"


def test_missing_title_becomes_empty():
    records = parse_manifest([{"key": "a", "created": "2019-03-04"}])
    assert records[0].title == ""


@pytest.mark.parametrize(
    "payload",
    [
        {"not_items": []},
        "just a string",
        [["not", "an", "object"]],
        [{"created": "2019-03-04", "title": "no key"}],
        [{"key": "a", "title": "no date"}],
        [{"key": "a", "created": "2019-03-04"}, {"key": "a", "created": "2019-03-05"}],
    ],
)
def test_invalid_manifests_raise(payload):
    with pytest.raises(ManifestError):
        parse_manifest(payload)
