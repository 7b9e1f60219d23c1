"""
Content manifest loading.

A manifest lists the content items of one build. It is a JSON or YAML
file holding either a list of item objects or an object with an
``items`` list. Each item needs an identity (``key``, ``source`` or
``id``), a creation timestamp (``created`` or ``date``) and a ``title``.

Timestamps are passed through untouched; they are validated later by
the timestamp normalizer.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from ..core.errors import ManifestError
from ..core.types import ContentRecord

KEY_FIELDS = ("key", "source", "id")
CREATED_FIELDS = ("created", "date")


def load_manifest(path: Path, sort_records: bool = True) -> list[ContentRecord]:
    """Load content records from a JSON or YAML manifest.

    Args:
        path: Path to a .json, .yaml or .yml manifest
        sort_records: Sort records by key so collisions resolve in a stable order

    Returns:
        List of ContentRecord objects

    Raises:
        ManifestError: If the file has no item list, an item lacks a
            required field, or two items share a key
    """
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            payload = json.load(f)
        else:
            payload = yaml.safe_load(f)
    return parse_manifest(payload, sort_records=sort_records)


def parse_manifest(payload: Any, sort_records: bool = True) -> list[ContentRecord]:
    """Build content records from already-decoded manifest data."""
    if isinstance(payload, dict):
        payload = payload.get("items")
    if not isinstance(payload, list):
        raise ManifestError("Manifest must be a list of items or an object with an 'items' list")

    records: list[ContentRecord] = []
    seen: set[str] = set()
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise ManifestError(f"Manifest item {index} is not an object")
        key = _first_field(item, KEY_FIELDS)
        if key is None:
            raise ManifestError(f"Manifest item {index} has no key, source or id")
        key = str(key)
        if key in seen:
            raise ManifestError(f"Duplicate manifest key {key!r}")
        created = _first_field(item, CREATED_FIELDS)
        if created is None:
            raise ManifestError(f"Manifest item {key!r} has no created timestamp")
        seen.add(key)
        records.append(
            ContentRecord(
                key=key,
                # YAML turns unquoted dates into date objects
                created=created if isinstance(created, str) else _isoformat(created),
                title=str(item.get("title") or ""),
                raw_body=item.get("body"),
            )
        )

    if sort_records:
        records.sort(key=lambda record: record.key)
    return records


def _first_field(item: dict[str, Any], names: tuple[str, ...]) -> Any:
    for name in names:
        value = item.get(name)
        if value is not None and value != "":
            return value
    return None


def _isoformat(value: Any) -> str:
    isoformat = getattr(value, "isoformat", None)
    if callable(isoformat):
        return isoformat()
    return str(value)
