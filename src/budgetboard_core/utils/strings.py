"""
Case-insensitive string helpers shared by the rollup engine.

Values are compared after case folding only; surrounding whitespace is
significant.
"""

from typing import Optional


def category_key(value: Optional[str]) -> str:
    """Return the lookup key used for category-indexed maps."""
    return (value or "").lower()


def are_strings_equal(a: Optional[str], b: Optional[str]) -> bool:
    """Compare two strings ignoring case. ``None`` compares as ""."""
    return category_key(a) == category_key(b)
