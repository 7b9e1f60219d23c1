"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- IdentifierConfig: Fingerprint width, collision strategy and slug settings
- BuildConfig: Record ordering and preparation concurrency
- OutputConfig: Path map and assignment index output
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

import yaml


@dataclass
class IdentifierConfig:
    """Configuration for fingerprints and slugs.

    With ``width`` hex characters there are 16**width fingerprints. For n
    items the chance that any two unrelated instants share a fingerprint
    is roughly n*n / (2 * 16**width): about 1.5% for 40 items at width 4,
    under 0.01% at width 6. Collisions are resolved either way; a wider
    fingerprint only makes resolution rarer.

    Attributes:
        width: Number of hex characters in a fingerprint (1-16)
        strategy: "salt" to rehash with a counter, "extend" to lengthen the prefix
        max_attempts: Candidates tried per item before giving up
        placeholder: Slug used when a title has no usable characters (slugified before use)
        slug_max_length: Optional maximum slug length
    """

    width: int = 4
    strategy: str = "salt"
    max_attempts: int = 64
    placeholder: str = "untitled"
    slug_max_length: int | None = None


@dataclass
class BuildConfig:
    """Configuration for a build pass.

    Attributes:
        concurrency: Worker threads for timestamp and title preparation
        sort_records: Whether the manifest loader sorts records by key
    """

    concurrency: int = 1
    sort_records: bool = True


@dataclass
class OutputConfig:
    """Configuration for output generation.

    Attributes:
        filename: Name of the JSON {key: path} mapping file
        write_index: Whether to write the assignment index JSONL file
        index_filename: Name of the assignment index file
    """

    filename: str = "paths.json"
    write_index: bool = True
    index_filename: str = "assignments.jsonl"


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the main log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = True
    format: str = "jsonl"
    filename: str = "build.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    identifier: IdentifierConfig = field(default_factory=IdentifierConfig)
    build: BuildConfig = field(default_factory=BuildConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig, ignoring unknown keys."""
    data = asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update({k: v for k, v in value.items() if k in data[key]})
    return _fromdict(data)


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        identifier=IdentifierConfig(**data["identifier"]),
        build=BuildConfig(**data["build"]),
        output=OutputConfig(**data["output"]),
        logging=LoggingConfig(**data["logging"]),
    )
