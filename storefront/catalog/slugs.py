"""Slug derivation for catalog entities."""

import re

_WHITESPACE = re.compile(r"\s+")
_NON_SLUG_CHARS = re.compile(r"[^\w\-]+", re.ASCII)
_REPEATED_HYPHENS = re.compile(r"-{2,}")


def slugify(text: str) -> str:
    """Derive a URL-safe slug from a human-readable name.

    Lowercases and trims the text, turns whitespace runs into hyphens,
    drops anything that is not an ASCII word character or a hyphen, and
    collapses repeated hyphens. Applying it to its own output returns
    the same string.

    Args:
        text: Source text, usually a product name.

    Returns:
        The slug.
    """
    slug = str(text).lower().strip()
    slug = _WHITESPACE.sub("-", slug)
    slug = _NON_SLUG_CHARS.sub("", slug)
    return _REPEATED_HYPHENS.sub("-", slug)
