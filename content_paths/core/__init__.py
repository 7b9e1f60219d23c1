"""
Core domain models and business logic.

This package contains the identifier and path assignment stages, which
are independent of how records are loaded or where results are written.
"""

from .errors import (
    ContentPathError,
    DuplicateKeyError,
    IdentifierExhaustionError,
    MalformedTimestampError,
    ManifestError,
    PathCollisionError,
)
from .fingerprint import fingerprint, serialize_instant
from .paths import PathAssigner, PreparedRecord, assign_paths, build_assigner, compose_path, prepare_record
from .registry import UniquenessRegistry
from .resolver import CollisionResolver, Resolution
from .slug import slugify
from .timestamp import normalize_timestamp
from .types import CanonicalInstant, ContentRecord, PathAssignment

__all__ = [
    "CanonicalInstant",
    "ContentRecord",
    "PathAssignment",
    "PreparedRecord",
    "ContentPathError",
    "MalformedTimestampError",
    "IdentifierExhaustionError",
    "PathCollisionError",
    "DuplicateKeyError",
    "ManifestError",
    "normalize_timestamp",
    "slugify",
    "fingerprint",
    "serialize_instant",
    "UniquenessRegistry",
    "CollisionResolver",
    "Resolution",
    "PathAssigner",
    "build_assigner",
    "compose_path",
    "prepare_record",
    "assign_paths",
]
