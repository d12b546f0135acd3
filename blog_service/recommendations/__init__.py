"""
Related posts recommendation package.

Similarity strategies, the result cache, the ranking engine and the
personalization layer. Kept free of Flask so batch jobs and the web layer can
share it.
"""

from .cache import RecommendationCache
from .engine import RelatedPostsEngine, build_default_engine
from .personalization import (
    PersonalizedRecommender,
    build_preference_profile,
    personalized_score,
)
from .strategies import (
    STRATEGY_SCORERS,
    category_score,
    content_score,
    get_scorer,
    mixed_score,
    score_candidate,
    tags_score,
)

__all__ = [
    "RecommendationCache",
    "RelatedPostsEngine",
    "build_default_engine",
    "PersonalizedRecommender",
    "build_preference_profile",
    "personalized_score",
    "STRATEGY_SCORERS",
    "category_score",
    "content_score",
    "get_scorer",
    "mixed_score",
    "score_candidate",
    "tags_score",
]
