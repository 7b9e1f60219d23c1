"""
Build-scoped uniqueness registry.

One registry is created per build pass and passed explicitly to the
resolver and path assigner. It holds two namespaces, fingerprints and
paths, each mapping a claimed value to the key of the item owning it.
"""

from __future__ import annotations

import threading


class UniquenessRegistry:
    """Tracks which content item owns each fingerprint and path in a build.

    ``claim_*`` methods do an atomic check-and-insert under a lock and
    return the owner key, which equals the caller's key on success.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._fingerprints: dict[str, str] = {}
        self._paths: dict[str, str] = {}
        self._keys: dict[str, str] = {}

    def claim_fingerprint(self, fingerprint: str, key: str) -> str:
        with self._lock:
            return self._fingerprints.setdefault(fingerprint, key)

    def claim_path(self, path: str, key: str) -> str:
        with self._lock:
            owner = self._paths.setdefault(path, key)
            if owner == key:
                self._keys.setdefault(key, path)
            return owner

    def fingerprint_owner(self, fingerprint: str) -> str | None:
        with self._lock:
            return self._fingerprints.get(fingerprint)

    def path_owner(self, path: str) -> str | None:
        with self._lock:
            return self._paths.get(path)

    def path_for(self, key: str) -> str | None:
        """Return the first path claimed by ``key`` in this build, if any."""
        with self._lock:
            return self._keys.get(key)

    def __len__(self) -> int:
        with self._lock:
            return len(self._paths)
