"""
Blog category constants and the category relation graph.
"""

from typing import Dict, Iterable, List, Optional, TypeVar

BLOG_CATEGORIES = (
    "All",
    "Lifestyle",
    "Technologies",
    "Design",
    "Travel",
    "Growth",
)

DEFAULT_CATEGORY = "All"

# Related categories earn partial credit when two articles share no category.
CATEGORY_RELATIONS: Dict[str, tuple] = {
    "All": (),
    "Lifestyle": ("Growth", "Design"),
    "Technologies": ("Design", "Growth"),
    "Design": ("Technologies", "Lifestyle"),
    "Travel": ("Lifestyle", "Growth"),
    "Growth": ("Lifestyle", "Technologies"),
}

T = TypeVar("T")


def is_valid_category(category: Optional[str]) -> bool:
    return isinstance(category, str) and category in BLOG_CATEGORIES


def get_valid_category(category: Optional[str], default: str = DEFAULT_CATEGORY) -> str:
    """Return ``category`` if it belongs to the closed set, otherwise ``default``."""
    if not is_valid_category(category):
        return default
    return category


def get_related_categories(category: Optional[str]) -> List[str]:
    """Related categories for ``category``; unknown categories have none."""
    if not is_valid_category(category):
        return []
    return list(CATEGORY_RELATIONS.get(category, ()))


def get_selectable_categories() -> List[str]:
    """All categories except the ``All`` pseudo-category."""
    return [category for category in BLOG_CATEGORIES if category != DEFAULT_CATEGORY]


def filter_by_category(items: Iterable[T], category: str) -> List[T]:
    """Keep items whose ``category`` attribute (or key) equals ``category``."""
    items = list(items)
    if category == DEFAULT_CATEGORY:
        return items

    def _category_of(item) -> Optional[str]:
        if isinstance(item, dict):
            return item.get("category")
        return getattr(item, "category", None)

    return [item for item in items if _category_of(item) == category]
