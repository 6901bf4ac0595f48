"""
Style system - per-genre transition tables.

A style pack narrows which chord follows which. Packs ship as YAML in the
built-in library and can be overridden from a project directory.
"""

from functools import lru_cache

from chuk_mcp_fretboard.styles.loader import StyleLoader


@lru_cache(maxsize=1)
def get_default_loader() -> StyleLoader:
    """Process-wide loader over the built-in library."""
    return StyleLoader()


__all__ = [
    "StyleLoader",
    "get_default_loader",
]
