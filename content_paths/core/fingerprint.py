"""
Deterministic fingerprints for content instants.

The fingerprint is a prefix of a 64-bit BLAKE2b digest over a fixed-width
serialization of the instant. BLAKE2b is used for its distribution and
stability across machines, not for any security property.
"""

from __future__ import annotations

from datetime import timezone
import hashlib

from .types import CanonicalInstant

DIGEST_SIZE = 8
FULL_WIDTH = DIGEST_SIZE * 2
DEFAULT_WIDTH = 4


def serialize_instant(instant: CanonicalInstant) -> bytes:
    """Serialize an instant to canonical bytes.

    Format is ``F|YYYYMMDD|SSSSS`` for floating instants and
    ``A|YYYYMMDD|SSSSS`` for offset-aware ones. Aware instants are
    converted to UTC first so equal moments written with different
    offsets serialize identically. A missing time counts as midnight.
    """
    if instant.is_floating:
        marker = "F"
        year, month, day = instant.year, instant.month, instant.day
        seconds = instant.seconds or 0
    else:
        marker = "A"
        moment = instant.to_datetime().astimezone(timezone.utc)
        year, month, day = moment.year, moment.month, moment.day
        seconds = moment.hour * 3600 + moment.minute * 60 + moment.second
    return f"{marker}|{year:04d}{month:02d}{day:02d}|{seconds:05d}".encode("ascii")


def digest(instant: CanonicalInstant, salt: int | str | None = None) -> str:
    """Return the full 16-character hex digest for an instant and optional salt."""
    payload = serialize_instant(instant)
    if salt is not None:
        payload += f"#{salt}".encode("utf-8")
    return hashlib.blake2b(payload, digest_size=DIGEST_SIZE).hexdigest()


def fingerprint(
    instant: CanonicalInstant,
    salt: int | str | None = None,
    width: int = DEFAULT_WIDTH,
) -> str:
    """Return the fixed-width fingerprint for an instant.

    Args:
        instant: The normalized creation instant
        salt: Optional disambiguation salt from the collision resolver
        width: Number of hex characters to keep (1-16)

    Returns:
        Lowercase hex string of exactly ``width`` characters

    Raises:
        ValueError: If width is outside 1-16
    """
    if not 1 <= width <= FULL_WIDTH:
        raise ValueError(f"Fingerprint width must be between 1 and {FULL_WIDTH}, got {width}")
    return digest(instant, salt)[:width]
