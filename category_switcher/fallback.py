"""Offline rule-based categorization from bundle identifiers."""

from typing import Tuple
from .categories import Category

# Ordered rules, first match wins. Each entry is (substrings, category).
FALLBACK_RULES: Tuple[Tuple[Tuple[str, ...], Category], ...] = (
    (("xcode", "terminal", "iterm"), Category.DEVELOPMENT),
    (("visual", "android"), Category.DEVELOPMENT),
    (("slack", "teams", "zoom"), Category.COMMUNICATION),
    (("spotify", "music", "netflix"), Category.MEDIA),
    (
        ("notes.app", "microsoft.word", "microsoft.excel", "microsoft.powerpoint"),
        Category.PRODUCTIVITY,
    ),
)

DEFAULT_CATEGORY = Category.OTHER


def fallback_category(identifier: str) -> Category:
    """
    Categorize an application by case-insensitive substring rules.

    Args:
        identifier: Bundle identifier (e.g. "com.tinyspeck.slackmacgap")

    Returns:
        The category of the first matching rule, or Other if none match
    """
    lowered = (identifier or "").lower()
    for needles, category in FALLBACK_RULES:
        if any(needle in lowered for needle in needles):
            return category
    return DEFAULT_CATEGORY
