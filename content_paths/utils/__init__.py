"""
Shared utility functions.

This package contains utility code used across the core stages and
the build runner.
"""

from .logging import (
    JsonlFormatter,
    close_logging,
    log_event,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "close_logging",
    "log_event",
    "JsonlFormatter",
]
