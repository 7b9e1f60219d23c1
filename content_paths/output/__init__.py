"""Output writers for assigned content paths."""

from .writer import AssignmentIndex, write_path_map

__all__ = ["AssignmentIndex", "write_path_map"]
