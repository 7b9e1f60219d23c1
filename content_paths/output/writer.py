"""
Output of assigned paths for the page renderer.

Writes the {key: path} mapping consumed by the renderer, plus an
optional JSONL index with one line per assignment for debugging
collisions between builds.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable

from ..core.types import PathAssignment


def write_path_map(assignments: Iterable[PathAssignment], output_path: Path) -> Path:
    """Write the key-to-path mapping as pretty-printed JSON.

    Keys keep presentation order so diffs between builds stay readable.
    """
    mapping = {assignment.key: assignment.path for assignment in assignments}
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(f"{json.dumps(mapping, ensure_ascii=False, indent=2)}\n", encoding="utf-8")
    return output_path


class AssignmentIndex:
    """Tracks path assignments in a JSONL index file.

    Attributes:
        output_dir: Directory where the index is stored
        enabled: Whether index writing is enabled
        path: Full path to the index file
    """

    def __init__(self, output_dir: Path, enabled: bool = True, filename: str = "assignments.jsonl"):
        self.output_dir = output_dir
        self.enabled = enabled
        self.path = output_dir / filename

    def append(self, assignment: PathAssignment) -> None:
        """Append one assignment to the index.

        Args:
            assignment: The PathAssignment to record
        """
        if not self.enabled:
            return
        self.output_dir.mkdir(parents=True, exist_ok=True)
        payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "key": assignment.key,
            "instant": assignment.instant.isoformat(),
            "slug": assignment.slug,
            "fingerprint": assignment.fingerprint,
            "path": assignment.path,
            "attempts": assignment.attempts,
        }
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(payload, ensure_ascii=True))
            handle.write("\n")
