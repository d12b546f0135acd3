"""
Related posts engine.

Resolves an anchor article, scores every candidate in the corpus with one of
the similarity strategies, and returns the best matches as article cards.
Results are cached per request shape for the lifetime of the process.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..corpus import ArticleCorpus, find_article_by_slug
from ..errors import BlogServiceError, FetchError, NotFoundError, ValidationError
from ..models import Article, CacheKind, RelatedPost, RelatedPostsOptions, RelatedPostsStrategy
from ..validation import (
    validate_article_data,
    validate_article_id,
    validate_limit,
    validate_min_score,
    validate_related_request,
    validate_slug,
    validate_strategy,
)
from .cache import RecommendationCache
from .strategies import get_scorer

logger = logging.getLogger(__name__)

_OPTION_FIELDS = ("strategy", "limit", "exclude_anchor", "min_score")


class RelatedPostsEngine:
    """Ranks corpus articles by relatedness to an anchor article."""

    def __init__(
        self,
        corpus: ArticleCorpus,
        default_strategy: Any = RelatedPostsStrategy.MIXED,
        default_limit: int = 3,
        default_min_score: float = 0.1,
        history_fallback_min_score: float = 0.2,
        cache: Optional[RecommendationCache] = None,
        cache_enabled: bool = True,
    ):
        self.corpus = corpus
        self.default_strategy = validate_strategy(default_strategy)
        self.default_limit = validate_limit(default_limit)
        self.default_min_score = validate_min_score(default_min_score)
        self.history_fallback_min_score = validate_min_score(history_fallback_min_score)
        self.cache = cache if cache is not None else RecommendationCache(enabled=cache_enabled)

    @classmethod
    def from_config(cls, corpus: ArticleCorpus, config, cache: Optional[RecommendationCache] = None) -> "RelatedPostsEngine":
        """Build an engine from a ``RecommendationConfig``."""
        return cls(
            corpus,
            default_strategy=config.default_strategy,
            default_limit=config.default_limit,
            default_min_score=config.default_min_score,
            history_fallback_min_score=config.history_fallback_min_score,
            cache=cache,
            cache_enabled=config.cache_enabled,
        )

    # Related posts --------------------------------------------------------------

    def resolve_options(self, options: Optional[RelatedPostsOptions] = None, **overrides) -> RelatedPostsOptions:
        """Merge ``options`` and keyword overrides over the engine defaults."""
        unknown = set(overrides) - set(_OPTION_FIELDS)
        if unknown:
            raise TypeError(f"Unknown related posts options: {', '.join(sorted(unknown))}")

        resolved = replace(options) if options is not None else RelatedPostsOptions()
        for name, value in overrides.items():
            if value is not None:
                setattr(resolved, name, value)

        if resolved.strategy is None:
            resolved.strategy = self.default_strategy
        if resolved.limit is None:
            resolved.limit = self.default_limit
        if resolved.min_score is None:
            resolved.min_score = self.default_min_score
        return resolved

    def get_related(
        self,
        anchor_article_id: str,
        options: Optional[RelatedPostsOptions] = None,
        **overrides,
    ) -> List[RelatedPost]:
        """
        Get articles related to the anchor article.

        Args:
            anchor_article_id: Id of the article being viewed
            options: Request options; unset fields use the engine defaults
            **overrides: ``strategy``, ``limit``, ``exclude_anchor`` or ``min_score``

        Returns:
            Related posts ordered by score, highest first

        Raises:
            ValidationError: If the request is malformed
            NotFoundError: If the anchor article does not exist
            FetchError: On any unexpected failure while reading or scoring
        """
        anchor_id = validate_article_id(anchor_article_id)
        request = validate_related_request(anchor_id, self.resolve_options(options, **overrides))

        # min_score is not part of the key: ranked lists are sorted, so the
        # filter below gives the same result on cached and fresh lists.
        cache_key = (anchor_id, request.strategy.value, request.limit, request.exclude_anchor)

        try:
            ranked = self.cache.get(CacheKind.PRIMARY, cache_key)
            if ranked is None:
                ranked = self._rank_related(anchor_id, request.strategy, request.limit, request.exclude_anchor)
                self.cache.set(CacheKind.PRIMARY, cache_key, ranked)
        except BlogServiceError:
            raise
        except Exception as e:
            logger.error(f"Failed to get related posts for {anchor_id}: {e}", exc_info=True)
            raise FetchError(
                f"Failed to get related posts: {e}",
                {"anchor_article_id": anchor_id, "strategy": request.strategy.value},
                cause=e,
            ) from e

        return [item for item in ranked if item.score >= request.min_score]

    def _rank_related(
        self,
        anchor_id: str,
        strategy: RelatedPostsStrategy,
        limit: int,
        exclude_anchor: bool,
    ) -> List[RelatedPost]:
        anchor = self.require_article(anchor_id)
        scorer = get_scorer(strategy)

        candidates = self.corpus.list_all()
        if exclude_anchor:
            candidates = [article for article in candidates if article.id != anchor.id]

        scored: List[Tuple[Article, float]] = [(candidate, scorer(anchor, candidate)) for candidate in candidates]
        # sorted() is stable, so equal scores keep corpus order
        scored.sort(key=lambda item: item[1], reverse=True)

        logger.debug(
            f"Ranked {len(scored)} candidates for {anchor_id} with strategy={strategy.value}, keeping {limit}"
        )
        return [RelatedPost(article=article.to_card(), score=score) for article, score in scored[:limit]]

    def require_article(self, article_id: str) -> Article:
        """Return the article with ``article_id`` or raise ``NotFoundError``."""
        article = self.corpus.find_by_id(article_id)
        if article is None:
            raise NotFoundError(
                f'Article with ID "{article_id}" not found',
                {"article_id": article_id},
            )
        return article

    # Article lookup -------------------------------------------------------------

    def get_article_by_slug(self, slug: str) -> Article:
        """
        Get a complete article by slug.

        Raises:
            ValidationError: If the slug is malformed or the article is incomplete
            NotFoundError: If no article has this slug
            FetchError: On any unexpected failure while reading
        """
        normalized = validate_slug(slug)

        try:
            cached = self.cache.get(CacheKind.ARTICLES, normalized)
            if cached is not None:
                return cached

            article = find_article_by_slug(self.corpus, normalized)
            if article is None:
                raise NotFoundError(
                    f'Article with slug "{slug}" not found',
                    {"slug": slug, "normalized_slug": normalized},
                )

            result = validate_article_data(article)
            if not result.is_valid:
                raise ValidationError(
                    "Article data validation failed",
                    {"slug": slug, "errors": result.errors},
                )

            self.cache.set(CacheKind.ARTICLES, normalized, article)
            return article.model_copy(deep=True)
        except BlogServiceError:
            raise
        except Exception as e:
            logger.error(f"Failed to fetch article {slug}: {e}", exc_info=True)
            raise FetchError(f"Failed to fetch article: {e}", {"slug": slug}, cause=e) from e

    def preload_articles(self, slugs: Iterable[str]) -> int:
        """Warm the article cache; returns how many slugs loaded."""
        loaded = 0
        for slug in slugs:
            try:
                self.get_article_by_slug(slug)
                loaded += 1
            except BlogServiceError as e:
                logger.warning(f"Failed to preload article with slug {slug!r}: {e}")
        return loaded

    def get_articles_by_slugs(self, slugs: Iterable[str]) -> List[Article]:
        """Batch lookup keeping only the slugs that resolved."""
        articles = []
        for slug in slugs:
            try:
                articles.append(self.get_article_by_slug(slug))
            except BlogServiceError as e:
                logger.debug(f"Skipping slug {slug!r} in batch lookup: {e}")
        return articles

    # Cache ------------------------------------------------------------------------

    def get_cache_stats(self) -> Dict[str, Any]:
        return self.cache.stats()

    def clear_cache(self, kind: str = "all") -> int:
        return self.cache.clear(kind)


def build_default_engine(corpus: ArticleCorpus, config=None) -> RelatedPostsEngine:
    """Factory for the engine used by the web layer."""
    if config is None:
        return RelatedPostsEngine(corpus)
    return RelatedPostsEngine.from_config(corpus, config)
