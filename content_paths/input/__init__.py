"""
Input parsing utilities.

This package contains code for loading content manifests.
"""

from .manifest import load_manifest, parse_manifest

__all__ = ["load_manifest", "parse_manifest"]
