"""
Models package for the related posts service.

Article records, display cards, request options and the category graph.
"""

from .article import (
    Article,
    ArticleCard,
    Author,
    CardAuthor,
    RelatedPost,
)

from .categories import (
    BLOG_CATEGORIES,
    CATEGORY_RELATIONS,
    DEFAULT_CATEGORY,
    filter_by_category,
    get_related_categories,
    get_selectable_categories,
    get_valid_category,
    is_valid_category,
)

from .recommendation_models import (
    CacheKind,
    ReaderPreferenceProfile,
    RelatedPostsOptions,
    RelatedPostsStrategy,
)

__all__ = [
    # Article models
    "Article",
    "ArticleCard",
    "Author",
    "CardAuthor",
    "RelatedPost",

    # Categories
    "BLOG_CATEGORIES",
    "CATEGORY_RELATIONS",
    "DEFAULT_CATEGORY",
    "filter_by_category",
    "get_related_categories",
    "get_selectable_categories",
    "get_valid_category",
    "is_valid_category",

    # Recommendation models
    "CacheKind",
    "ReaderPreferenceProfile",
    "RelatedPostsOptions",
    "RelatedPostsStrategy",
]
