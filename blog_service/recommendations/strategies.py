"""
Similarity strategies for related posts.

Every scorer is a pure function ``(anchor, candidate) -> float`` in [0, 1].
Strategy dispatch goes through ``STRATEGY_SCORERS`` so the set of modes stays
closed over ``RelatedPostsStrategy``.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, Optional, Set

from ..errors import ValidationError
from ..models import Article, RelatedPostsStrategy, get_related_categories

SAME_CATEGORY_SCORE = 1.0
RELATED_CATEGORY_SCORE = 0.6
UNRELATED_CATEGORY_SCORE = 0.1

# Returned when neither side has any tags or tokens, so "no data" ranks above "no overlap".
EMPTY_BASELINE_SCORE = 0.1

MIN_TOKEN_LENGTH = 4

MIXED_WEIGHTS: Dict[str, float] = {
    "category": 0.4,
    "tags": 0.4,
    "content": 0.2,
}

Scorer = Callable[[Article, Article], float]


# ---------------------------------------------------------------------------
# Primitive strategies
# ---------------------------------------------------------------------------


def category_score(anchor: Article, candidate: Article) -> float:
    if anchor.category == candidate.category:
        return SAME_CATEGORY_SCORE
    if candidate.category in get_related_categories(anchor.category):
        return RELATED_CATEGORY_SCORE
    return UNRELATED_CATEGORY_SCORE


def tags_score(anchor: Article, candidate: Article) -> float:
    """Jaccard index over case-insensitive tag sets."""
    return _jaccard_with_baseline(_tag_set(anchor.tags), _tag_set(candidate.tags))


def content_score(anchor: Article, candidate: Article) -> float:
    """Jaccard index over the title and excerpt word sets."""
    return _jaccard_with_baseline(_content_tokens(anchor), _content_tokens(candidate))


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------


def mixed_score(anchor: Article, candidate: Article) -> float:
    """Weighted blend where category and tags dominate and content breaks ties."""
    score = (
        category_score(anchor, candidate) * MIXED_WEIGHTS["category"]
        + tags_score(anchor, candidate) * MIXED_WEIGHTS["tags"]
        + content_score(anchor, candidate) * MIXED_WEIGHTS["content"]
    )
    return min(1.0, max(0.0, score))


STRATEGY_SCORERS: Dict[RelatedPostsStrategy, Scorer] = {
    RelatedPostsStrategy.CATEGORY: category_score,
    RelatedPostsStrategy.TAGS: tags_score,
    RelatedPostsStrategy.CONTENT: content_score,
    RelatedPostsStrategy.MIXED: mixed_score,
}


def get_scorer(strategy: RelatedPostsStrategy) -> Scorer:
    scorer = STRATEGY_SCORERS.get(strategy)
    if scorer is None:
        raise ValidationError(
            f"Unsupported strategy: {strategy}",
            {"field": "strategy", "errors": [f"unsupported strategy {strategy!r}"]},
        )
    return scorer


def score_candidate(anchor: Article, candidate: Article, strategy: RelatedPostsStrategy) -> float:
    """Score ``candidate`` against ``anchor`` under ``strategy``."""
    return get_scorer(strategy)(anchor, candidate)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def normalize_tag(tag: Optional[str]) -> Optional[str]:
    if not isinstance(tag, str):
        return None
    clean = tag.strip().lower()
    return clean or None


def _tag_set(tags: Iterable[str]) -> Set[str]:
    return {normalized for tag in tags or [] if (normalized := normalize_tag(tag))}


def _content_tokens(article: Article) -> Set[str]:
    text = f"{article.title or ''} {article.excerpt or ''}".lower()
    return {word for word in text.split() if len(word) >= MIN_TOKEN_LENGTH}


def _jaccard_with_baseline(left: Set[str], right: Set[str]) -> float:
    if not left and not right:
        return EMPTY_BASELINE_SCORE
    union = left | right
    return len(left & right) / len(union)
