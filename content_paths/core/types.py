"""
Core data types for content path assignment.

This module defines the structures passed between stages:
- ContentRecord: One content item as supplied by the loader
- CanonicalInstant: Normalized creation moment of a content item
- PathAssignment: Final identity and path handed to the renderer
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any


@dataclass(frozen=True)
class ContentRecord:
    """Represents one content item supplied by the content loader.

    Attributes:
        key: Stable identity of the item (source path or id)
        created: Raw creation timestamp text from front matter or filename
        title: Human-readable title
        raw_body: Opaque body, never read by path assignment
    """
    key: str
    created: str
    title: str
    raw_body: Any = None


@dataclass(frozen=True)
class CanonicalInstant:
    """Normalized creation moment of a content item.

    Fields keep the calendar date, time and offset as written, so
    "10:00Z" and "11:00+01:00" are different values here. They are the
    same UTC moment, and fingerprint serialization converts aware
    instants to UTC, so both hash identically.

    Attributes:
        year: Calendar year as written by the author
        month: Calendar month (1-12)
        day: Calendar day of month
        seconds: Seconds since midnight, or None when no time was given
        utc_offset: Offset from UTC in minutes, or None for floating time
    """
    year: int
    month: int
    day: int
    seconds: int | None = None
    utc_offset: int | None = None

    @property
    def is_floating(self) -> bool:
        return self.utc_offset is None

    def to_datetime(self) -> datetime:
        """Return the instant as a datetime, aware only when an offset is known."""
        seconds = self.seconds or 0
        tzinfo = None
        if self.utc_offset is not None:
            tzinfo = timezone(timedelta(minutes=self.utc_offset))
        return datetime(
            self.year,
            self.month,
            self.day,
            seconds // 3600,
            (seconds % 3600) // 60,
            seconds % 60,
            tzinfo=tzinfo,
        )

    def isoformat(self) -> str:
        if self.seconds is None and self.utc_offset is None:
            return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"
        return self.to_datetime().isoformat()


@dataclass(frozen=True)
class PathAssignment:
    """Identity and canonical path assigned to one content item.

    Attributes:
        key: Identity of the content item
        instant: Normalized creation instant
        slug: URL-safe token derived from the title
        fingerprint: Hex disambiguation token, unique within the build
        path: Canonical path in the form {year}/{month}/{slug}-{fingerprint}
        attempts: Number of fingerprint candidates tried (1 when no collision)
    """
    key: str
    instant: CanonicalInstant
    slug: str
    fingerprint: str
    path: str
    attempts: int = 1
