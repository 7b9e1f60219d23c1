"""
Content Paths - stable, collision-free URL paths for published content.

This package assigns each content item a canonical path of the form
{year}/{month}/{slug}-{fingerprint}, where the fingerprint is a short
hash of the item's creation instant, rehashed when two items collide.

Main entry points are ``assign_paths`` for library use and the
`content-paths assign` CLI command.

Example:
    $ content-paths assign -i manifest.yaml -o out/
"""

__all__ = [
    "__version__",
    "AppConfig",
    "ContentRecord",
    "PathAssigner",
    "UniquenessRegistry",
    "assign_paths",
    "load_config",
    "load_manifest",
    "normalize_timestamp",
    "slugify",
    "fingerprint",
    "ContentPathError",
    "MalformedTimestampError",
    "IdentifierExhaustionError",
    "PathCollisionError",
    "DuplicateKeyError",
]
__version__ = "0.1.0"

from .config import AppConfig, load_config
from .core import (
    ContentPathError,
    ContentRecord,
    DuplicateKeyError,
    IdentifierExhaustionError,
    MalformedTimestampError,
    PathAssigner,
    PathCollisionError,
    UniquenessRegistry,
    assign_paths,
    fingerprint,
    normalize_timestamp,
    slugify,
)
from .input.manifest import load_manifest
