"""
Request, profile and cache models for the recommendation engine.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional


class RelatedPostsStrategy(Enum):
    """Scoring modes supported by the engine."""
    CATEGORY = "category"
    TAGS = "tags"
    CONTENT = "content"
    MIXED = "mixed"


class CacheKind(Enum):
    """Independent sections of the result cache."""
    PRIMARY = "primary"            # get_related results
    PERSONALIZED = "personalized"  # personalized results
    ARTICLES = "articles"          # article-by-slug lookups


@dataclass
class RelatedPostsOptions:
    """Options accepted by ``RelatedPostsEngine.get_related``.

    ``None`` means "use the configured default".
    """
    strategy: Optional[RelatedPostsStrategy] = None
    limit: Optional[int] = None
    exclude_anchor: bool = True
    min_score: Optional[float] = None


@dataclass
class ReaderPreferenceProfile:
    """Reading preferences derived from a reader's history."""
    category_counts: Dict[str, int] = field(default_factory=dict)
    tag_counts: Dict[str, int] = field(default_factory=dict)
    average_reading_time: float = 8.0
    complexity_preference: float = 0.8
    history_size: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "category_counts": dict(self.category_counts),
            "tag_counts": dict(self.tag_counts),
            "average_reading_time": self.average_reading_time,
            "complexity_preference": self.complexity_preference,
            "history_size": self.history_size,
        }
