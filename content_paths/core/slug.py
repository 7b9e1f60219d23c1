"""
Title slugification for content paths.
"""

from __future__ import annotations

import re
import unicodedata

DEFAULT_PLACEHOLDER = "untitled"

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def slugify(text: str, max_length: int | None = None, placeholder: str = DEFAULT_PLACEHOLDER) -> str:
    """Convert a title to a URL-safe slug.

    Accented letters are reduced to their ASCII base letter; everything
    else outside [a-z0-9] becomes a separator.

    Args:
        text: The title to slugify, any Unicode
        max_length: Optional limit, cut at the last hyphen that fits when possible
        placeholder: Fallback when nothing usable is left, slugified the same way

    Returns:
        A lowercase, hyphenated slug, never empty
    """
    slug = _normalize(text)

    if max_length is not None and len(slug) > max_length:
        cut = slug[:max_length]
        # Prefer a word boundary unless it would drop everything
        if slug[max_length] != "-" and "-" in cut:
            cut = cut.rsplit("-", 1)[0]
        slug = cut.strip("-")

    if not slug:
        slug = _normalize(placeholder) or DEFAULT_PLACEHOLDER
    return slug


def _normalize(text: str) -> str:
    # Decompose accents so "é" becomes "e" + combining mark, then drop non-ASCII
    ascii_text = unicodedata.normalize("NFKD", text or "").encode("ascii", "ignore").decode("ascii")
    return _NON_ALNUM_RE.sub("-", ascii_text.lower()).strip("-")
