# Blog service package: related posts recommendations

from .corpus import (
    ArticleCorpus,
    InMemoryArticleCorpus,
    find_article_by_slug,
    load_corpus_from_json,
)
from .errors import (
    BlogServiceError,
    ErrorCode,
    FetchError,
    NotFoundError,
    ValidationError,
)
from .logging_config import (
    setup_logging,
    stop_logging,
    get_logger,
    ThreadSafeLoggingConfig,
)
from .models import (
    Article,
    ArticleCard,
    Author,
    CacheKind,
    ReaderPreferenceProfile,
    RelatedPost,
    RelatedPostsOptions,
    RelatedPostsStrategy,
)
from .recommendations import (
    PersonalizedRecommender,
    RecommendationCache,
    RelatedPostsEngine,
    build_default_engine,
)
from .validation import (
    ArticleValidationResult,
    estimate_reading_time,
    validate_article_data,
)

__all__ = [
    "ArticleCorpus",
    "InMemoryArticleCorpus",
    "find_article_by_slug",
    "load_corpus_from_json",
    "BlogServiceError",
    "ErrorCode",
    "FetchError",
    "NotFoundError",
    "ValidationError",
    "setup_logging",
    "stop_logging",
    "get_logger",
    "ThreadSafeLoggingConfig",
    "Article",
    "ArticleCard",
    "Author",
    "CacheKind",
    "ReaderPreferenceProfile",
    "RelatedPost",
    "RelatedPostsOptions",
    "RelatedPostsStrategy",
    "PersonalizedRecommender",
    "RecommendationCache",
    "RelatedPostsEngine",
    "build_default_engine",
    "ArticleValidationResult",
    "estimate_reading_time",
    "validate_article_data",
]
