"""
Personalized related posts.

Builds a reading preference profile from the articles a reader has already
seen and ranks unread articles against that profile. Personalization is best
effort: any failure falls back to the plain related-posts path.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import List, Optional, Sequence

from ..models import Article, ArticleCard, CacheKind, ReaderPreferenceProfile, RelatedPostsStrategy
from ..validation import validate_article_id, validate_limit, validate_read_history
from .engine import RelatedPostsEngine
from .strategies import normalize_tag

logger = logging.getLogger(__name__)

PERSONALIZED_WEIGHTS = {
    "category": 0.4,
    "tags": 0.3,
    "reading_time": 0.2,
    "complexity": 0.1,
}

# Counts at which a category or tag preference saturates to 1.0
CATEGORY_SATURATION = 5
TAG_SATURATION = 3
# Reading-time difference (minutes) at which affinity drops to 0
READING_TIME_SCALE = 20.0
COMPLEXITY_DIVISOR = 10.0

DEFAULT_AVERAGE_READING_TIME = 8.0
DEFAULT_COMPLEXITY_PREFERENCE = 0.8


def build_preference_profile(history: Sequence[Article]) -> ReaderPreferenceProfile:
    """Summarize categories, tags and reading time across ``history``."""
    if not history:
        return ReaderPreferenceProfile(
            average_reading_time=DEFAULT_AVERAGE_READING_TIME,
            complexity_preference=DEFAULT_COMPLEXITY_PREFERENCE,
        )

    category_counts: Counter = Counter()
    tag_counts: Counter = Counter()
    total_reading_time = 0.0

    for article in history:
        category_counts[article.category] += 1
        for tag in article.tags:
            normalized = normalize_tag(tag)
            if normalized:
                tag_counts[normalized] += 1
        total_reading_time += article.reading_time

    average_reading_time = total_reading_time / len(history)
    return ReaderPreferenceProfile(
        category_counts=dict(category_counts),
        tag_counts=dict(tag_counts),
        average_reading_time=average_reading_time,
        complexity_preference=average_reading_time / COMPLEXITY_DIVISOR,
        history_size=len(history),
    )


def personalized_score(candidate: Article, profile: ReaderPreferenceProfile) -> float:
    """Score ``candidate`` in [0, 1] against a reader profile."""
    category_match = min(profile.category_counts.get(candidate.category, 0) / CATEGORY_SATURATION, 1.0)

    candidate_tags = [normalized for tag in candidate.tags if (normalized := normalize_tag(tag))]
    tag_total = sum(min(profile.tag_counts.get(tag, 0) / TAG_SATURATION, 1.0) for tag in candidate_tags)
    tag_match = min(tag_total / max(len(candidate_tags), 1), 1.0)

    reading_time_diff = abs(candidate.reading_time - profile.average_reading_time)
    reading_time_affinity = max(0.0, 1 - reading_time_diff / READING_TIME_SCALE)

    complexity_diff = abs(candidate.reading_time / COMPLEXITY_DIVISOR - profile.complexity_preference)
    complexity_affinity = max(0.0, 1 - complexity_diff)

    return (
        category_match * PERSONALIZED_WEIGHTS["category"]
        + tag_match * PERSONALIZED_WEIGHTS["tags"]
        + reading_time_affinity * PERSONALIZED_WEIGHTS["reading_time"]
        + complexity_affinity * PERSONALIZED_WEIGHTS["complexity"]
    )


class PersonalizedRecommender:
    """Personalization layer composed over a ``RelatedPostsEngine``."""

    def __init__(self, engine: RelatedPostsEngine):
        self.engine = engine

    def get_personalized_related(
        self,
        anchor_article_id: str,
        read_history_ids: Optional[Sequence[str]] = None,
        limit: Optional[int] = None,
    ) -> List[ArticleCard]:
        """
        Recommend unread articles matching the reader's history.

        Args:
            anchor_article_id: Id of the article being viewed
            read_history_ids: Ids of articles the reader has read
            limit: Maximum number of cards, defaults to the engine default

        Returns:
            Article cards, best match first

        Raises:
            ValidationError: If the arguments are malformed
            NotFoundError, FetchError: Only when the non-personalized fallback fails too
        """
        anchor_id = validate_article_id(anchor_article_id)
        history_ids = validate_read_history(read_history_ids)
        limit = validate_limit(self.engine.default_limit if limit is None else limit)

        if not history_ids:
            related = self.engine.get_related(
                anchor_id,
                strategy=RelatedPostsStrategy.MIXED,
                limit=limit,
                min_score=self.engine.history_fallback_min_score,
            )
            return [item.article for item in related]

        try:
            return self._personalized_cards(anchor_id, history_ids, limit)
        except Exception as e:
            logger.warning(
                f"Personalized recommendations failed for {anchor_id}, falling back to related posts: {e}",
                exc_info=True,
            )

        return [item.article for item in self.engine.get_related(anchor_id, limit=limit)]

    def _personalized_cards(self, anchor_id: str, history_ids: List[str], limit: int) -> List[ArticleCard]:
        cache = self.engine.cache
        read_ids = set(history_ids)
        cache_key = (anchor_id, tuple(sorted(read_ids)), limit)

        cached = cache.get(CacheKind.PERSONALIZED, cache_key)
        if cached is not None:
            return cached

        corpus = self.engine.corpus
        anchor = self.engine.require_article(anchor_id)
        articles = corpus.list_all()

        history = [article for article in articles if article.id in read_ids]
        profile = build_preference_profile(history)
        logger.debug(f"Built preference profile for {anchor_id}: {profile.to_dict()}")

        candidates = [
            article for article in articles
            if article.id != anchor.id and article.id not in read_ids
        ]
        scored = [(candidate, personalized_score(candidate, profile)) for candidate in candidates]
        scored.sort(key=lambda item: item[1], reverse=True)

        cards = [article.to_card() for article, _ in scored[:limit]]
        cache.set(CacheKind.PERSONALIZED, cache_key, cards)
        return cards
