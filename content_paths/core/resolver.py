"""
Fingerprint collision resolution.

Each content item starts with the unsalted fingerprint of its instant.
If another item already owns that fingerprint in the current build, the
resolver derives a new candidate and tries again:

- "salt": append an increasing counter to the hashed bytes, width fixed
- "extend": keep the digest, add one more hex character per attempt

Items are resolved in the order they are presented. The caller must
present them in a stable order for builds to be reproducible.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Iterator

from ..utils.logging import log_event
from .errors import IdentifierExhaustionError
from .fingerprint import DEFAULT_WIDTH, FULL_WIDTH, digest
from .registry import UniquenessRegistry
from .types import CanonicalInstant

STRATEGIES = ("salt", "extend")


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving one item's fingerprint.

    Attributes:
        fingerprint: The unique fingerprint claimed for the item
        attempts: Number of candidates tried, 1 when the first one was free
        salt: Salt used for the winning candidate, None when unsalted
    """
    fingerprint: str
    attempts: int
    salt: int | None = None


class CollisionResolver:
    """Claims a build-unique fingerprint for each content item."""

    def __init__(
        self,
        registry: UniquenessRegistry,
        width: int = DEFAULT_WIDTH,
        strategy: str = "salt",
        max_attempts: int = 64,
        logger: logging.Logger | None = None,
    ):
        if not 1 <= width <= FULL_WIDTH:
            raise ValueError(f"Fingerprint width must be between 1 and {FULL_WIDTH}, got {width}")
        if strategy not in STRATEGIES:
            raise ValueError(f"Unknown collision strategy {strategy!r}, expected one of {STRATEGIES}")
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.registry = registry
        self.width = width
        self.strategy = strategy
        self.max_attempts = max_attempts
        self._logger = logger

    def resolve(self, key: str, instant: CanonicalInstant) -> Resolution:
        """Claim a unique fingerprint for ``key``.

        Re-resolving a key that already owns a candidate returns that
        candidate again without mutating the registry.

        Raises:
            IdentifierExhaustionError: If every candidate within budget is taken
        """
        attempts = 0
        for salt, candidate in self._candidates(instant):
            attempts += 1
            owner = self.registry.claim_fingerprint(candidate, key)
            if owner == key:
                return Resolution(fingerprint=candidate, attempts=attempts, salt=salt)
            log_event(
                self._logger,
                "Fingerprint collision",
                event="fingerprint_collision",
                key=key,
                owner=owner,
                fingerprint=candidate,
                instant=instant.isoformat(),
                attempt=attempts,
            )
        raise IdentifierExhaustionError(key, instant, attempts)

    def _candidates(self, instant: CanonicalInstant) -> Iterator[tuple[int | None, str]]:
        if self.strategy == "extend":
            full = digest(instant)
            last = min(FULL_WIDTH, self.width + self.max_attempts - 1)
            for width in range(self.width, last + 1):
                yield None, full[:width]
            return

        yield None, digest(instant)[: self.width]
        for salt in range(1, self.max_attempts):
            yield salt, digest(instant, salt)[: self.width]
