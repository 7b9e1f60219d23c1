"""
Canonical path composition and assignment.

This module ties the stages together: a ContentRecord is normalized and
slugified, its fingerprint is resolved against the build registry, and
the final {year}/{month}/{slug}-{fingerprint} path is registered.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Iterable

from ..config import IdentifierConfig
from ..utils.logging import log_event
from .errors import DuplicateKeyError, MalformedTimestampError, PathCollisionError
from .registry import UniquenessRegistry
from .resolver import CollisionResolver
from .slug import slugify
from .timestamp import normalize_timestamp
from .types import CanonicalInstant, ContentRecord, PathAssignment


@dataclass(frozen=True)
class PreparedRecord:
    """A content record with its instant and slug computed.

    Attributes:
        record: The original content record
        instant: Normalized creation instant
        slug: Slug derived from the title
    """
    record: ContentRecord
    instant: CanonicalInstant
    slug: str


def compose_path(instant: CanonicalInstant, slug: str, fingerprint: str) -> str:
    """Return ``{year}/{MM}/{slug}-{fingerprint}`` for the given parts."""
    return f"{instant.year:04d}/{instant.month:02d}/{slug}-{fingerprint}"


def prepare_record(record: ContentRecord, cfg: IdentifierConfig | None = None) -> PreparedRecord:
    """Normalize the timestamp and slugify the title of one record.

    Pure and safe to run in parallel across records.

    Raises:
        MalformedTimestampError: If the record's timestamp cannot be parsed
    """
    cfg = cfg or IdentifierConfig()
    try:
        instant = normalize_timestamp(record.created)
    except MalformedTimestampError as exc:
        raise MalformedTimestampError(exc.text, exc.reason, key=record.key) from exc
    return PreparedRecord(
        record=record,
        instant=instant,
        slug=slugify(record.title, max_length=cfg.slug_max_length, placeholder=cfg.placeholder),
    )


class PathAssigner:
    """Assigns canonical paths and records them in the build registry."""

    def __init__(
        self,
        registry: UniquenessRegistry,
        resolver: CollisionResolver,
        logger: logging.Logger | None = None,
    ):
        if resolver.registry is not registry:
            raise ValueError("Resolver must share the assigner's registry")
        self.registry = registry
        self.resolver = resolver
        self._logger = logger

    def assign(self, key: str, instant: CanonicalInstant, slug: str) -> PathAssignment:
        """Resolve a fingerprint for ``key`` and register its canonical path.

        Raises:
            IdentifierExhaustionError: If no unique fingerprint is available
            PathCollisionError: If the composed path is owned by another key
            DuplicateKeyError: If the key already owns a different path
        """
        resolution = self.resolver.resolve(key, instant)
        path = compose_path(instant, slug, resolution.fingerprint)

        existing = self.registry.path_for(key)
        if existing is not None and existing != path:
            raise DuplicateKeyError(key, path, existing)

        owner = self.registry.claim_path(path, key)
        if owner != key:
            raise PathCollisionError(path, key, owner)

        log_event(
            self._logger,
            "Path assigned",
            event="path_assigned",
            key=key,
            path=path,
            fingerprint=resolution.fingerprint,
            attempts=resolution.attempts,
        )
        return PathAssignment(
            key=key,
            instant=instant,
            slug=slug,
            fingerprint=resolution.fingerprint,
            path=path,
            attempts=resolution.attempts,
        )

    def assign_prepared(self, prepared: PreparedRecord) -> PathAssignment:
        return self.assign(prepared.record.key, prepared.instant, prepared.slug)


def build_assigner(
    cfg: IdentifierConfig | None = None,
    registry: UniquenessRegistry | None = None,
    logger: logging.Logger | None = None,
) -> PathAssigner:
    """Create a PathAssigner and resolver sharing one registry."""
    cfg = cfg or IdentifierConfig()
    registry = registry if registry is not None else UniquenessRegistry()
    resolver = CollisionResolver(
        registry,
        width=cfg.width,
        strategy=cfg.strategy,
        max_attempts=cfg.max_attempts,
        logger=logger,
    )
    return PathAssigner(registry, resolver, logger=logger)


def assign_paths(
    records: Iterable[ContentRecord],
    cfg: IdentifierConfig | None = None,
    registry: UniquenessRegistry | None = None,
    logger: logging.Logger | None = None,
) -> dict[str, str]:
    """Assign canonical paths to records in presentation order.

    All timestamps and keys are checked before the registry is touched,
    so a malformed or duplicate record leaves the registry unchanged.

    Args:
        records: Content records in a stable order
        cfg: Identifier settings, defaults when omitted
        registry: Registry for this build, a fresh one when omitted

    Returns:
        Mapping of record key to canonical path, in presentation order
    """
    prepared = [prepare_record(record, cfg) for record in records]
    seen: set[str] = set()
    for item in prepared:
        if item.record.key in seen:
            raise DuplicateKeyError(item.record.key)
        seen.add(item.record.key)
    assigner = build_assigner(cfg, registry, logger)
    result: dict[str, str] = {}
    for item in prepared:
        result[item.record.key] = assigner.assign_prepared(item).path
    return result
