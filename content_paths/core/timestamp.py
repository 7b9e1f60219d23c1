"""
Creation timestamp normalization.

Content items carry a creation moment as free text: a bare date, a date
with a time, or a date with a time and a UTC offset. This module turns
that text into a CanonicalInstant.

A missing offset is kept as "floating" rather than assumed to be UTC, so
"2019-03-04T10:00" and "2019-03-04T10:00Z" stay distinct all the way to
the fingerprint.
"""

from __future__ import annotations

from datetime import datetime, timezone
import re

from .errors import MalformedTimestampError
from .types import CanonicalInstant


_TIMESTAMP_RE = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})"
    r"(?:[T ](?P<hour>\d{2}):(?P<minute>\d{2})(?::(?P<second>\d{2})(?:[.,]\d+)?)?)?"
    r"(?P<offset>Z|[+-]\d{2}:?\d{2})?$",
    re.IGNORECASE | re.ASCII,
)


def normalize_timestamp(text: str) -> CanonicalInstant:
    """Parse a creation timestamp into a CanonicalInstant.

    Accepted forms:
        2019-03-04
        2019-03-04T10:00 / 2019-03-04 10:00:00 / 2019-03-04T10:00:00.123
        any of the timed forms followed by Z, +01:00 or +0100

    Fractional seconds are truncated. A date-only value keeps
    ``seconds=None`` and hashes as midnight.

    Args:
        text: Raw timestamp text from the content loader

    Returns:
        The normalized CanonicalInstant

    Raises:
        MalformedTimestampError: If the text is not a valid calendar date,
            has out-of-range time fields, has an offset without a time, or
            cannot be expressed in UTC within the datetime range
    """
    if not isinstance(text, str):
        raise MalformedTimestampError(repr(text), "timestamp must be a string")

    raw = text.strip()
    match = _TIMESTAMP_RE.match(raw)
    if match is None:
        raise MalformedTimestampError(text)

    has_time = match.group("hour") is not None
    offset = match.group("offset")
    if offset and not has_time:
        raise MalformedTimestampError(text, "UTC offset given without a time")

    iso = match.group("date")
    if has_time:
        iso += f"T{match.group('hour')}:{match.group('minute')}:{match.group('second') or '00'}"
    if offset:
        iso += _normalize_offset(offset, text)

    try:
        parsed = datetime.fromisoformat(iso)
    except ValueError as exc:
        raise MalformedTimestampError(text, str(exc)) from exc

    utc_offset = None
    if parsed.tzinfo is not None:
        try:
            parsed.astimezone(timezone.utc)
        except OverflowError as exc:
            raise MalformedTimestampError(text, "instant falls outside the supported range in UTC") from exc
        delta = parsed.utcoffset()
        utc_offset = int(delta.total_seconds()) // 60 if delta is not None else 0

    seconds = None
    if has_time:
        seconds = parsed.hour * 3600 + parsed.minute * 60 + parsed.second

    return CanonicalInstant(
        year=parsed.year,
        month=parsed.month,
        day=parsed.day,
        seconds=seconds,
        utc_offset=utc_offset,
    )


def _normalize_offset(offset: str, text: str) -> str:
    """Rewrite Z / +HHMM / +HH:MM into the +HH:MM form fromisoformat accepts."""
    if offset.upper() == "Z":
        return "+00:00"
    sign = offset[0]
    digits = offset[1:].replace(":", "")
    hours, minutes = int(digits[:2]), int(digits[2:])
    if hours > 23 or minutes > 59:
        raise MalformedTimestampError(text, f"UTC offset out of range: {offset}")
    return f"{sign}{hours:02d}:{minutes:02d}"
