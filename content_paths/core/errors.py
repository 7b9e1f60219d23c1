"""
Error types raised while assigning content identifiers and paths.

Every error aborts the current build pass. Items are never silently
skipped or renamed, since that would break path determinism.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import CanonicalInstant


class ContentPathError(Exception):
    """Base class for all content path errors."""


class MalformedTimestampError(ContentPathError, ValueError):
    """Raised when a creation timestamp cannot be parsed into a calendar date.

    Attributes:
        text: The raw timestamp text that failed to parse
        reason: Short description of what was wrong with it
        key: Identity of the content item, when known
    """

    def __init__(self, text: str, reason: str = "not a valid date", key: str | None = None):
        self.text = text
        self.reason = reason
        self.key = key
        where = f" in {key!r}" if key else ""
        super().__init__(f"Malformed timestamp {text!r}{where}: {reason}")


class IdentifierExhaustionError(ContentPathError):
    """Raised when no unique fingerprint is found within the attempt budget.

    Usually means many items share one creation instant, or the
    fingerprint width is configured too short.

    Attributes:
        key: Identity of the content item being resolved
        instant: The colliding creation instant
        attempts: Number of candidates tried before giving up
    """

    def __init__(self, key: str, instant: CanonicalInstant, attempts: int):
        self.key = key
        self.instant = instant
        self.attempts = attempts
        super().__init__(
            f"No unique fingerprint for {key!r} at {instant.isoformat()} "
            f"after {attempts} attempts; widen the fingerprint or fix duplicate timestamps"
        )


class PathCollisionError(ContentPathError):
    """Raised when a composed path is already owned by another item.

    A unique fingerprint should always imply a unique path, so this
    signals a defect rather than bad input.

    Attributes:
        path: The colliding canonical path
        key: Identity of the item that tried to claim the path
        owner: Identity of the item that already owns it
    """

    def __init__(self, path: str, key: str, owner: str):
        self.path = path
        self.key = key
        self.owner = owner
        super().__init__(f"Path {path!r} for {key!r} already assigned to {owner!r}")


class ManifestError(ContentPathError):
    """Raised when a content manifest is missing required data."""


class DuplicateKeyError(ContentPathError, ValueError):
    """Raised when two different content items share one key in a build.

    Attributes:
        key: The shared item key
        path: Path requested by the later item, when known
        existing: Path already assigned to the key, when known
    """

    def __init__(self, key: str, path: str | None = None, existing: str | None = None):
        self.key = key
        self.path = path
        self.existing = existing
        detail = f": already assigned {existing!r}, now asked for {path!r}" if existing else ""
        super().__init__(f"Duplicate content key {key!r}{detail}")
